# simulation/stability.py
"""Grain stability and freezing.

Every mobile grain gains stability each tick. A grain freezes (becomes
immobile) once its stability reaches the threshold or once it has been
settled for too long, whichever happens first. Freezing is one-way:
the grain is painted into the frozen layer exactly once and is no longer
moved, relaxed or collided with.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from simulation.config import (
    GRAIN_STABILITY_INCREMENT,
    GRAIN_STABILITY_THRESHOLD,
    GRAIN_MAX_MOBILE_MS,
)

if TYPE_CHECKING:
    from sim_state import SimulationState
    from terrain.grains import Grain


def should_freeze(grain: "Grain", now_ms: float) -> bool:
    return (grain.stability >= GRAIN_STABILITY_THRESHOLD
            or (now_ms - grain.settled_at) >= GRAIN_MAX_MOBILE_MS)


def freeze_grain(state: "SimulationState", grain: "Grain") -> None:
    """Make a grain immobile and rasterize it into the frozen layer."""
    if grain.immobile:
        return
    grain.immobile = True
    grain.stability = 1.0
    state.frozen_layer.stamp_disc(grain.x, grain.y, grain.radius, grain.color, state.base_color)


def process_grain_stability(state: "SimulationState") -> int:
    """Age every mobile grain and freeze those that are ready.

    Returns:
        Number of grains frozen this tick
    """
    frozen = 0
    now = state.time_ms
    for grain in state.grains.iter_mobile():
        grain.stability = min(1.0, max(0.0, grain.stability + GRAIN_STABILITY_INCREMENT))
        if should_freeze(grain, now):
            freeze_grain(state, grain)
            frozen += 1
    return frozen
