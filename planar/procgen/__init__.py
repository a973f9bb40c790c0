"""
Seeded procedural content: names, colors and weighted picks.
"""
from .colors import Color, generate_color
from .names import generate_name, generate_power_name
from .picking import pick_random, random_resource
