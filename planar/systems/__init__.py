"""
Simulation systems package.
"""
from .economy import EconomySystem
from .production import ProductionSystem
