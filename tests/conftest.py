"""Shared fixtures for the simulation tests."""
from __future__ import annotations

import random
from typing import Iterable, List

import pytest

from sim_state import SimulationState, build_initial_state
from simulation.config import GRAIN_LOCK_MS
from simulation.settling import settle_grain_at_column
from terrain.particles import Particle

TEST_WIDTH = 120      # 40 columns of 3px
TEST_HEIGHT = 200


class ScriptedRandom(random.Random):
    """Random source that replays fixed values.

    random() pops from the script (0.5 once it runs out); uniform() always
    returns the midpoint so jitter never moves anything.
    """

    def __init__(self, values: Iterable[float] = ()):
        super().__init__(0)
        self.values: List[float] = list(values)

    def random(self) -> float:
        return self.values.pop(0) if self.values else 0.5

    def uniform(self, a: float, b: float) -> float:
        return (a + b) / 2


@pytest.fixture
def state() -> SimulationState:
    return build_initial_state(width=TEST_WIDTH, height=TEST_HEIGHT, seed=1234)


@pytest.fixture
def scripted_state() -> SimulationState:
    return build_initial_state(width=TEST_WIDTH, height=TEST_HEIGHT, rng=ScriptedRandom())


def make_particle(x: float = 60.0, y: float = 100.0, radius: float = 1.0,
                  color=(200, 150, 100), birth_time: float = 0.0, **kwargs) -> Particle:
    return Particle(x=x, y=y, radius=radius, color=color, birth_time=birth_time, **kwargs)


def center_of(state: SimulationState, column: int) -> float:
    return column * state.column_width + state.column_width / 2


def pile(state: SimulationState, column: int, count: int, radius: float = 1.0) -> None:
    """Stack `count` grains of one radius onto a column."""
    for _ in range(count):
        settle_grain_at_column(state, make_particle(x=center_of(state, column), radius=radius), column)
        state.ledger.record_settle(radius * 2)


def unlock_all(state: SimulationState) -> None:
    """Advance the clock past every grain's lock."""
    state.time_ms += GRAIN_LOCK_MS + 1
