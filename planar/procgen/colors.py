"""
Seeded plane colors.

A generated color keeps the base color's saturation and value but gets a new
hue that stays clear of the base hue, so plane accents never blend into the
fixed UI palette.
"""

from __future__ import annotations

from typing import NamedTuple

import pygame

from config import COLOR_HUE_GAP, COLOR_HUE_RANGE

from .names import RandomStream


class Color(NamedTuple):
    """RGB with channels in [0, 255] (unrounded)."""

    r: float
    g: float
    b: float

    def to_pygame(self) -> pygame.Color:
        return pygame.Color(*(max(0, min(255, round(ch))) for ch in self))


def rgb_to_hsv(r: float, g: float, b: float) -> tuple[float, float, float]:
    """r, g, b in [0, 1] -> h in [0, 360), s and v in [0, 1]."""
    v = max(r, g, b)
    c = v - min(r, g, b)
    if c == 0:
        h = 0.0
    elif v == r:
        h = (g - b) / c
    elif v == g:
        h = 2 + (b - r) / c
    else:
        h = 4 + (r - g) / c
    if h < 0:
        h += 6
    s = c / v if v else 0.0
    return 60 * h, s, v


def hsv_to_rgb(h: float, s: float, v: float) -> tuple[float, float, float]:
    """h in [0, 360], s and v in [0, 1] -> r, g, b in [0, 1]."""

    def channel(n: int) -> float:
        k = (n + h / 60) % 6
        return v - v * s * max(min(k, 4 - k, 1), 0)

    return channel(5), channel(3), channel(1)


def generate_color(base: tuple[float, float, float], stream: RandomStream) -> Color:
    """Pick a hue clear of `base`'s hue (one draw) at the base's saturation and value."""
    h, s, v = rgb_to_hsv(*base)
    hue = int(stream.next() * COLOR_HUE_RANGE)
    if hue > h - COLOR_HUE_GAP:
        hue += 2 * COLOR_HUE_GAP
    r, g, b = hsv_to_rgb(hue % 360, s, v)
    return Color(r * 255, g * 255, b * 255)
