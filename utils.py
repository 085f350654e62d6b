# utils.py
"""
utils.py - Common utility functions for the dune simulator

Provides shared, stateless helper functions used across different modules.
"""
from __future__ import annotations

from typing import Tuple

Color = Tuple[int, int, int]


def clamp(val: float, low: float, high: float) -> float:
    """Clamp a value between low and high bounds."""
    return max(low, min(high, val))


def clamp_index(index: int, size: int) -> int:
    """Clamp an integer index into [0, size)."""
    return max(0, min(size - 1, index))


def clamp_channel(value: float) -> int:
    """Clamp a color channel into the 0-255 byte range."""
    return int(max(0, min(255, value)))


def shift_color(color: Color, delta: int) -> Color:
    """Shift every channel of a color by delta, clamped to valid bytes.

    Example: shift_color((250, 10, 100), 30) -> (255, 40, 130)
    """
    return (clamp_channel(color[0] + delta),
            clamp_channel(color[1] + delta),
            clamp_channel(color[2] + delta))
