# simulation/collision.py
"""Soft collision between falling particles and the terrain.

Two independent nudges per particle per tick, neither a hard constraint:
- Mobile grains: the newest few grains in the particle's column and its
  neighbours push the particle out and yield slightly themselves.
- Frozen terrain: the rasterized frozen layer is probed just below the
  particle; opaque pixels give a small upward correction.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING

from simulation.config import (
    COLLIDE_STRENGTH,
    LATERAL_STRENGTH,
    COLLISION_RANGE_FACTOR,
    COLLISION_SCAN_DEPTH,
    GRAIN_YIELD,
    COLLISION_VELOCITY_DAMPING,
    FROZEN_PROBE_DEPTH,
    FROZEN_ALPHA_THRESHOLD,
    FROZEN_REPULSION,
    FROZEN_JITTER,
)
from simulation.settling import compute_lateral_from_grain, radius_factor

if TYPE_CHECKING:
    from sim_state import SimulationState
    from terrain.particles import Particle


def collide_with_grains(state: "SimulationState", particle: "Particle") -> bool:
    """Push a particle away from the first mobile grain it overlaps.

    Scans columns left to right around the particle, newest grains first,
    and stops at the first hit (scan order, not nearest distance). Buried
    grains below the scan depth are never checked.

    Returns:
        True if a grain was hit
    """
    center = state.column_at(particle.x)
    for column in (center - 1, center, center + 1):
        if column < 0 or column >= state.cols:
            continue
        for grain in state.grains.recent(column, COLLISION_SCAN_DEPTH):
            if grain.immobile:
                continue
            dx = particle.x - grain.x
            dy = particle.y - grain.y
            dist = math.hypot(dx, dy)
            min_dist = (particle.radius + grain.radius) * COLLISION_RANGE_FACTOR
            if 0 < dist < min_dist:
                nx, ny = dx / dist, dy / dist
                overlap = min_dist - dist
                particle.x += nx * overlap * 0.5
                particle.y += ny * overlap * 0.5

                bounce = COLLIDE_STRENGTH * 0.6 * radius_factor(particle.radius)
                particle.vx += nx * bounce
                particle.vy += ny * bounce
                particle.vx += compute_lateral_from_grain(state, column) * LATERAL_STRENGTH * 0.5

                grain.x -= nx * GRAIN_YIELD
                grain.y -= ny * GRAIN_YIELD
                particle.vx *= COLLISION_VELOCITY_DAMPING
                particle.vy *= COLLISION_VELOCITY_DAMPING
                return True
    return False


def repulse_from_frozen_terrain(state: "SimulationState", particle: "Particle") -> bool:
    """Nudge a particle up if frozen terrain lies just below it.

    Returns:
        True if frozen terrain was found
    """
    if not state.frozen_layer.is_opaque_below(
        particle.x, particle.y, FROZEN_PROBE_DEPTH, FROZEN_ALPHA_THRESHOLD
    ):
        return False
    particle.vy -= FROZEN_REPULSION
    particle.vx += state.rng.uniform(-FROZEN_JITTER, FROZEN_JITTER)
    return True
