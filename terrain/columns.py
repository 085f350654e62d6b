# terrain/columns.py
"""
Column height table for the dune terrain.

The viewport is split into fixed-width vertical columns. Each column stores
the accumulated settled thickness in pixels. Height grows upward from the
bottom of the viewport, so the ground surface of column i sits at
y = viewport_height - heights[i].

All index lookups clamp into [0, cols) instead of raising.
"""
from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from utils import clamp_index


class ColumnHeightTable:
    """Fixed-size per-column accumulated heights (float64 pixels)."""

    def __init__(self, cols: int):
        self.heights = np.zeros(cols, dtype=np.float64)

    def __len__(self) -> int:
        return len(self.heights)

    @property
    def cols(self) -> int:
        return len(self.heights)

    def clamp_index(self, index: int) -> int:
        return clamp_index(index, len(self.heights))

    def column_at(self, x: float, column_width: float) -> int:
        """Column containing horizontal position x (clamped to the grid)."""
        return self.clamp_index(int(math.floor(x / column_width)))

    def get(self, index: int) -> float:
        return float(self.heights[self.clamp_index(index)])

    def set(self, index: int, value: float) -> None:
        self.heights[self.clamp_index(index)] = value

    def add(self, index: int, amount: float) -> None:
        self.heights[self.clamp_index(index)] += amount

    def transfer(self, src: int, dst: int, amount: float) -> None:
        """Move exactly `amount` of height from src to dst (total is conserved)."""
        self.heights[src] -= amount
        self.heights[dst] += amount

    def neighbor_heights(self, index: int) -> Tuple[float, float, float]:
        """Return (left, center, right) heights around a column.

        A neighbour outside the grid is reported with the center height, so
        edge columns see no height difference on their open side.
        """
        i = self.clamp_index(index)
        center = float(self.heights[i])
        left = float(self.heights[i - 1]) if i > 0 else center
        right = float(self.heights[i + 1]) if i < len(self.heights) - 1 else center
        return left, center, right

    def total(self) -> float:
        """Total settled height across all columns."""
        return float(np.sum(self.heights))

    def reset(self, cols: int) -> None:
        self.heights = np.zeros(cols, dtype=np.float64)
