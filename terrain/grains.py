# terrain/grains.py
"""Settled grains and the per-column grain store.

A grain is created when a falling particle settles. It belongs to exactly
one column stack (insertion order = stacking order, top = last). Relaxation
may move the top grain between adjacent columns until the grain freezes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

Color = Tuple[int, int, int]


@dataclass
class Grain:
    """A settled grain of sand."""
    x: float
    y: float
    radius: float
    color: Color
    lock_until: float          # Sim time (ms) before which relaxation cannot move it
    settled_at: float          # Sim time (ms) the grain was created
    stability: float = 0.0     # 0-1, non-decreasing until relocation resets it
    immobile: bool = False     # One-way: frozen into the terrain image

    @property
    def thickness(self) -> float:
        """Height this grain contributes to its column."""
        return self.radius * 2

    def is_locked(self, now_ms: float) -> bool:
        return self.lock_until > now_ms

    def is_relocatable(self, now_ms: float, stability_threshold: float) -> bool:
        """Whether relaxation may move this grain to a neighbouring column."""
        if self.immobile:
            return False
        return not self.is_locked(now_ms) and self.stability < stability_threshold


class GrainStore:
    """Per-column stacks of settled grains."""

    def __init__(self, cols: int):
        self.columns: List[List[Grain]] = [[] for _ in range(cols)]

    def __len__(self) -> int:
        return sum(len(col) for col in self.columns)

    @property
    def cols(self) -> int:
        return len(self.columns)

    def push(self, index: int, grain: Grain) -> None:
        self.columns[index].append(grain)

    def pop(self, index: int) -> Grain:
        return self.columns[index].pop()

    def top(self, index: int) -> Optional[Grain]:
        column = self.columns[index]
        return column[-1] if column else None

    def recent(self, index: int, window: int) -> Iterator[Grain]:
        """Yield the topmost `window` grains of a column, newest first."""
        column = self.columns[index]
        for k in range(len(column) - 1, max(0, len(column) - window) - 1, -1):
            yield column[k]

    def iter_mobile(self) -> Iterator[Grain]:
        for column in self.columns:
            for grain in column:
                if not grain.immobile:
                    yield grain

    def mobile_grains(self) -> List[Grain]:
        return list(self.iter_mobile())

    def count_mobile(self) -> int:
        return sum(1 for _ in self.iter_mobile())

    def column_thickness(self, index: int) -> float:
        """Sum of grain thickness in a column (ignores height-only transfers)."""
        return sum(g.thickness for g in self.columns[index])

    def reset(self, cols: int) -> None:
        self.columns = [[] for _ in range(cols)]
