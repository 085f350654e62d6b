# simulation/settling.py
"""Height-aware settling of falling particles.

When a particle reaches the terrain surface it always becomes a grain in
the same tick. The only decision is which column receives it:

- A column noticeably taller than a neighbour rejects incoming particles
  with a probability that grows with the height excess and with the
  column's absolute height.
- A rejected particle goes to the strictly lower neighbour, or to the side
  its lateral bias points at.
- If the chosen neighbour would overflow the viewport, the particle
  settles in the contact column anyway.

Taller columns therefore shed material to shorter neighbours, which
levels the profile into dunes, while the randomness avoids staircase
artifacts.
"""
from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Tuple

from config import PARTICLE_MAX_RADIUS
from simulation.config import (
    HEIGHT_BIAS_THRESHOLD,
    HEIGHT_REJECT_MAX_PROB,
    HEIGHT_REJECT_WINDOW,
    ABS_HEIGHT_FRACTION,
    ABS_BIAS_MIN,
    REJECT_PROB_CAP,
    LATERAL_OVERRIDE,
    SNAP_SPREAD,
    SNAP_FINE_JITTER,
    GRAIN_LOCK_MS,
    LATERAL_HEIGHT_MARGIN,
    LATERAL_VELOCITY_OVERRIDE,
    LATERAL_NOISE,
    GRAIN_LATERAL_MARGIN,
    GRAIN_LATERAL_PUSH,
    GRAIN_LATERAL_NOISE,
)
from terrain.grains import Grain
from utils import clamp

if TYPE_CHECKING:
    from sim_state import SimulationState
    from terrain.particles import Particle

logger = logging.getLogger(__name__)


# =============================================================================
# REJECTION PROBABILITY
# =============================================================================

def relative_reject_probability(left: float, center: float, right: float) -> float:
    """Reject probability from the center's excess over its neighbours (0-0.9)."""
    max_diff = max(center - left, center - right)
    if max_diff <= HEIGHT_BIAS_THRESHOLD:
        return 0.0
    scaled = clamp(
        (max_diff - HEIGHT_BIAS_THRESHOLD) / (HEIGHT_BIAS_THRESHOLD * HEIGHT_REJECT_WINDOW),
        0.0, 1.0,
    )
    return scaled * HEIGHT_REJECT_MAX_PROB


def reject_probability(left: float, center: float, right: float, viewport_height: float) -> float:
    """Full reject probability, including the absolute-height bias.

    Columns approaching 85% of the viewport height scale the relative
    probability by up to 1.0; an empty column scales it by 0.6.
    """
    prob = relative_reject_probability(left, center, right)
    if viewport_height <= 0:
        abs_bias = 1.0
    else:
        abs_bias = clamp(center / (viewport_height * ABS_HEIGHT_FRACTION), 0.0, 1.0)
    return clamp(prob * (ABS_BIAS_MIN + (1.0 - ABS_BIAS_MIN) * abs_bias), 0.0, REJECT_PROB_CAP)


def choose_target_column(
    column: int,
    cols: int,
    left: float,
    right: float,
    lateral_bias: float,
) -> int:
    """Pick the destination for a rejected particle.

    Prefers the strictly lower neighbour; a strong lateral bias overrides
    toward its side when that neighbour exists. Returns `column` itself when
    neither applies.
    """
    target = column
    if left < right:
        target = column - 1
    elif right < left:
        target = column + 1
    if lateral_bias < -LATERAL_OVERRIDE and column > 0:
        target = column - 1
    if lateral_bias > LATERAL_OVERRIDE and column < cols - 1:
        target = column + 1
    # Edge neighbour stands in for the center, so a "lower" missing side can't be chosen
    if target < 0 or target >= cols:
        target = column
    return target


# =============================================================================
# SETTLING
# =============================================================================

def settle_grain_at_column(state: "SimulationState", particle: "Particle", column: int) -> Grain:
    """Convert a particle into a grain on top of a column.

    The grain keeps most of the particle's x (weak snap): it is jittered and
    clamped into the column band rather than pinned to the column center.
    """
    rng = state.rng
    height_before = state.columns.get(column)
    y = float(round(state.height - height_before - particle.radius))

    band_lo, band_hi = state.column_band(column)
    max_offset = state.column_width * SNAP_SPREAD
    gx = clamp(particle.x + rng.uniform(-max_offset, max_offset), band_lo, band_hi)
    gx += rng.uniform(-SNAP_FINE_JITTER, SNAP_FINE_JITTER)

    grain = Grain(
        x=gx,
        y=y,
        radius=particle.radius,
        color=particle.color,
        lock_until=state.time_ms + GRAIN_LOCK_MS,
        settled_at=state.time_ms,
    )
    state.grains.push(column, grain)
    state.columns.add(column, grain.thickness)
    return grain


def try_settle(
    state: "SimulationState",
    particle: "Particle",
    contact_column: int,
    lateral_bias: float,
) -> bool:
    """Settle a particle that touched the terrain. Always commits.

    Args:
        state: Simulation state
        particle: The particle in contact with the surface
        contact_column: Column the particle touched
        lateral_bias: Signed preference for a side (negative = left)

    Returns:
        True; rejection only changes the destination column
    """
    column = state.columns.clamp_index(contact_column)
    left, center, right = state.columns.neighbor_heights(column)

    # Tie-break jitter draw; keeps the random sequence aligned with the reject roll
    state.rng.random()

    prob = reject_probability(left, center, right, state.height)
    destination = column
    if state.rng.random() < prob:
        target = choose_target_column(column, state.cols, left, right, lateral_bias)
        if target != column and state.columns.get(target) + particle.radius * 2 < state.height:
            destination = target
        elif target != column:
            logger.debug("Column %d would overflow, settling in contact column %d", target, column)

    if state.columns.get(destination) + particle.radius * 2 > state.height:
        logger.debug("Settling past viewport top in column %d", destination)

    settle_grain_at_column(state, particle, destination)
    state.ledger.record_settle(particle.radius * 2)
    return True


def force_settle(state: "SimulationState", particle: "Particle") -> Grain:
    """Settle a particle that outlived its lifetime at its current column."""
    column = state.column_at(particle.x)
    grain = settle_grain_at_column(state, particle, column)
    state.ledger.record_settle(particle.radius * 2, forced=True)
    return grain


# =============================================================================
# LATERAL BIAS
# =============================================================================

def _side_heights(state: "SimulationState", column: int) -> Tuple[float, float]:
    """Neighbour heights with missing sides treated as infinitely tall."""
    left = state.columns.get(column - 1) if column > 0 else math.inf
    right = state.columns.get(column + 1) if column < state.cols - 1 else math.inf
    return left, right


def compute_lateral_bias(state: "SimulationState", column: int, particle: "Particle") -> float:
    """Signed side preference for a particle touching down in a column.

    -1 toward a clearly lower left neighbour, +1 toward the right; a
    particle already moving sideways keeps its direction. Noise of +/-0.2
    is added either way.
    """
    left, right = _side_heights(state, column)
    pref = 0.0
    if left + LATERAL_HEIGHT_MARGIN < right:
        pref = -1.0
    elif right + LATERAL_HEIGHT_MARGIN < left:
        pref = 1.0
    if particle.vx < -LATERAL_VELOCITY_OVERRIDE:
        pref = -1.0
    if particle.vx > LATERAL_VELOCITY_OVERRIDE:
        pref = 1.0
    return pref + state.rng.uniform(-LATERAL_NOISE, LATERAL_NOISE)


def compute_lateral_from_grain(state: "SimulationState", column: int) -> float:
    """Sideways push for a particle that hit a grain in `column`."""
    left, right = _side_heights(state, column)
    if left + GRAIN_LATERAL_MARGIN < right:
        return -GRAIN_LATERAL_PUSH
    if right + GRAIN_LATERAL_MARGIN < left:
        return GRAIN_LATERAL_PUSH
    return state.rng.uniform(-GRAIN_LATERAL_NOISE, GRAIN_LATERAL_NOISE)


def radius_factor(radius: float) -> float:
    """Relative particle size used to scale impulses (~1.0 for the largest normal radius)."""
    return radius / (PARTICLE_MAX_RADIUS + 0.001)
