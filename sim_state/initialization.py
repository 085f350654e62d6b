# sim_state/initialization.py
"""Simulation state initialization and viewport resets."""
from __future__ import annotations

import logging
import random
from typing import Optional

from config import (
    COLUMN_WIDTH,
    MIN_COLUMNS,
    DEFAULT_BASE_COLOR,
    DEFAULT_VIEWPORT_WIDTH,
    DEFAULT_VIEWPORT_HEIGHT,
)
from sim_state.state import SimulationState
from terrain.columns import ColumnHeightTable
from terrain.frozen_layer import FrozenLayer
from terrain.grains import GrainStore

logger = logging.getLogger(__name__)


def columns_for_width(width: int, column_width: int = COLUMN_WIDTH) -> int:
    """Number of terrain columns for a viewport width (never fewer than MIN_COLUMNS)."""
    return max(MIN_COLUMNS, width // column_width)


def build_initial_state(
    width: int = DEFAULT_VIEWPORT_WIDTH,
    height: int = DEFAULT_VIEWPORT_HEIGHT,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> SimulationState:
    """Create an empty simulation sized to the viewport.

    Args:
        width, height: Viewport size in pixels
        seed: Seed for a new random source (ignored when rng is given)
        rng: Random source to use for every stochastic decision

    Returns:
        A state with flat (empty) terrain and no particles
    """
    if rng is None:
        rng = random.Random(seed)

    cols = columns_for_width(width)
    state = SimulationState(
        width=width,
        height=height,
        column_width=COLUMN_WIDTH,
        columns=ColumnHeightTable(cols),
        grains=GrainStore(cols),
        frozen_layer=FrozenLayer(width, height),
        rng=rng,
        base_color=DEFAULT_BASE_COLOR,
    )
    logger.debug("Built simulation state %dx%d with %d columns", width, height, cols)
    return state


def reset_for_viewport(state: SimulationState, width: int, height: int) -> None:
    """Reset terrain to an empty state sized to a new viewport.

    Terrain is not preserved across a resize: columns, grains, particles and
    the frozen layer all start over. The clock, random source and base color
    carry on. Called with the current size it simply clears the terrain, and
    the frozen layer buffer is wiped in place rather than reallocated.
    """
    cols = columns_for_width(width, state.column_width)
    if (width, height) != (state.frozen_layer.width, state.frozen_layer.height):
        state.frozen_layer = FrozenLayer(width, height)
    else:
        state.frozen_layer.clear()
    state.width = width
    state.height = height
    state.columns.reset(cols)
    state.grains.reset(cols)
    state.particles.clear()
    state.ledger.reset()
    state.relax_timer = 0
    logger.debug("Reset terrain for viewport %dx%d (%d columns)", width, height, cols)
