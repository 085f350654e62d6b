# sim_state/state.py
"""Core simulation state data structures."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Tuple

from config import (
    COLUMN_WIDTH,
    DEFAULT_BASE_COLOR,
    DEFAULT_VIEWPORT_WIDTH,
    DEFAULT_VIEWPORT_HEIGHT,
)
from terrain.columns import ColumnHeightTable
from terrain.frozen_layer import FrozenLayer
from terrain.grains import GrainStore
from terrain.particles import Particle
from world_state import HeightLedger

Point = Tuple[float, float]
Color = Tuple[int, int, int]


@dataclass
class SimulationState:
    """Main simulation state container.

    Owned by the tick driver in main.py; every simulation function takes it
    explicitly and mutates it in place. Nothing here touches pygame.

    Coordinates are viewport pixels with y growing downward. Column i covers
    x in [i * column_width, (i + 1) * column_width).
    """
    width: int = DEFAULT_VIEWPORT_WIDTH
    height: int = DEFAULT_VIEWPORT_HEIGHT
    column_width: int = COLUMN_WIDTH

    # === Terrain (The Source of Truth) ===
    columns: ColumnHeightTable = field(default_factory=lambda: ColumnHeightTable(0))
    grains: GrainStore = field(default_factory=lambda: GrainStore(0))
    frozen_layer: FrozenLayer = field(default_factory=lambda: FrozenLayer(0, 0))

    # Falling particles, in spawn order
    particles: List[Particle] = field(default_factory=list)

    # Random source for every stochastic decision (seed it for reproducible runs)
    rng: random.Random = field(default_factory=random.Random)

    # Base color for new particles (changed from the keyboard)
    base_color: Color = DEFAULT_BASE_COLOR

    # Spawn requests: while spawning is active, each tick spawns near spawn_hint
    spawning: bool = False
    spawn_hint: Point = (0.0, 0.0)

    # Simulation clock in milliseconds, advanced once per tick
    time_ms: float = 0.0
    tick_count: int = 0
    # Ticks since the last relaxation run
    relax_timer: int = 0

    # Conservation bookkeeping
    ledger: HeightLedger = field(default_factory=HeightLedger)

    @property
    def cols(self) -> int:
        return self.columns.cols

    @property
    def particle_count(self) -> int:
        return len(self.particles)

    @property
    def mobile_grain_count(self) -> int:
        return self.grains.count_mobile()

    def column_at(self, x: float) -> int:
        """Column index for horizontal position x, clamped into the grid."""
        return self.columns.column_at(x, self.column_width)

    def ground_y(self, column: int) -> float:
        """Screen y of the terrain surface in a column."""
        return self.height - self.columns.get(column)

    def column_band(self, column: int) -> Tuple[float, float]:
        """Horizontal range a grain center may occupy inside a column."""
        return (column * self.column_width + 1, (column + 1) * self.column_width - 1)

    def set_spawn_hint(self, x: float, y: float) -> None:
        self.spawn_hint = (x, y)

    def relaxation_due(self, interval: int) -> bool:
        """Count one tick toward relaxation. True (and restarts the count) every `interval` ticks."""
        self.relax_timer += 1
        if self.relax_timer >= interval:
            self.relax_timer = 0
            return True
        return False
