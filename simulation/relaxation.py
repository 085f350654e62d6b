# simulation/relaxation.py
"""Avalanche relaxation between adjacent columns.

Each pass walks the adjacent column pairs (i, i + 1) left to right. Where
the height difference exceeds CRITICAL_SLOPE, the taller column sheds:

1. Its top grain migrates to the lower column, if that grain is mobile,
   unlocked, not yet stable, and small enough that moving it keeps the
   taller column at least as tall as its neighbour.
2. Otherwise a small amount of abstract height moves without a grain, so
   thin or locked columns still relax.

Only nearest neighbours interact, so a steep pile needs several passes to
flatten; the avalanche stays gradual.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from simulation.config import (
    CRITICAL_SLOPE,
    GRAIN_LOCK_MS,
    GRAIN_STABILITY_THRESHOLD,
    HEIGHT_TRANSFER_STEP,
    RELAX_PASSES,
)
from terrain.grains import Grain
from utils import clamp

if TYPE_CHECKING:
    from sim_state import SimulationState


def migrate_top_grain(state: "SimulationState", src: int, dst: int) -> Grain:
    """Move the top grain of `src` onto `dst`, transferring its height.

    The grain is re-locked, loses its stability and is placed in the
    destination column band on top of the destination stack.
    """
    grain = state.grains.pop(src)
    moved = min(grain.thickness, state.columns.get(src))

    shift = state.column_width if dst > src else -state.column_width
    band_lo, band_hi = state.column_band(dst)
    grain.x = clamp(grain.x + shift, band_lo, band_hi)
    grain.y = float(round(state.height - state.columns.get(dst) - grain.radius))
    grain.lock_until = state.time_ms + GRAIN_LOCK_MS
    grain.stability = 0.0

    state.columns.transfer(src, dst, moved)
    state.grains.push(dst, grain)
    return grain


def _eligible_top_grain(state: "SimulationState", src: int, diff: float) -> Optional[Grain]:
    top = state.grains.top(src)
    if top is None:
        return None
    if not top.is_relocatable(state.time_ms, GRAIN_STABILITY_THRESHOLD):
        return None
    # Moving 2r from one side to the other changes the difference by 4r
    if 2 * top.thickness > diff:
        return None
    return top


def shed(state: "SimulationState", src: int, dst: int) -> bool:
    """Move material from the taller column `src` to its neighbour `dst`.

    Returns:
        True if a grain migrated, False if only height was transferred
    """
    diff = state.columns.get(src) - state.columns.get(dst)
    if _eligible_top_grain(state, src, diff) is not None:
        migrate_top_grain(state, src, dst)
        return True
    move = min(HEIGHT_TRANSFER_STEP, state.columns.get(src), diff / 2)
    if move > 0:
        state.columns.transfer(src, dst, move)
    return False


def relax_columns(state: "SimulationState") -> int:
    """Run one relaxation pass over all adjacent pairs.

    Returns:
        Number of pairs that were over the critical slope
    """
    relaxed = 0
    for i in range(state.cols - 1):
        diff = state.columns.get(i) - state.columns.get(i + 1)
        if diff > CRITICAL_SLOPE:
            shed(state, i, i + 1)
            relaxed += 1
        elif -diff > CRITICAL_SLOPE:
            shed(state, i + 1, i)
            relaxed += 1
    return relaxed


def relax(state: "SimulationState", passes: int = RELAX_PASSES) -> int:
    """Run several relaxation passes. Returns the total pairs relaxed."""
    return sum(relax_columns(state) for _ in range(passes))
