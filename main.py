# main.py
"""
Dune sand simulator - tick driver.

Falling sand piles up into dunes: particles fall, settle into column
stacks with a height-aware decision, avalanche between columns and
eventually freeze into the terrain image.

One call to simulate_tick runs, in order:
1. Spawning (while a spawn request is active)
2. Particles, in reverse index order so removal is safe
3. Relaxation passes
4. Stability promotion
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from config import (
    TICK_MS,
    SPAWN_RATE,
    MAX_PARTICLES,
    BASE_COLOR_RANGE_R,
    BASE_COLOR_RANGE_G,
    BASE_COLOR_RANGE_B,
)
from simulation.config import (
    GRAVITY,
    VELOCITY_DAMPING,
    OUT_OF_BOUNDS_MARGIN,
    PARTICLE_MAX_LIFETIME_MS,
    BOUNCE_SPEED_THRESHOLD,
    BOUNCE_RESTITUTION,
    LATERAL_STRENGTH,
    RELAX_PASSES,
    RELAX_INTERVAL_TICKS,
)
from sim_state import SimulationState, build_initial_state, reset_for_viewport
from simulation.settling import try_settle, force_settle, compute_lateral_bias, radius_factor
from simulation.collision import collide_with_grains, repulse_from_frozen_terrain
from simulation.relaxation import relax
from simulation.stability import process_grain_stability
from terrain.particles import Particle, spawn_particle
from utils import clamp_channel

Color = Tuple[int, int, int]


# =============================================================================
# EXTERNAL REQUESTS
# =============================================================================

def request_spawn(state: SimulationState, x: float, y: float) -> bool:
    """Spawn one particle near (x, y). Returns False when at capacity."""
    if len(state.particles) >= MAX_PARTICLES:
        return False
    particle = spawn_particle(
        state.rng, x, y, state.width, state.height, state.base_color, state.time_ms
    )
    state.particles.append(particle)
    return True


def set_base_color(state: SimulationState, color: Color) -> None:
    """Set the base color used for all subsequently spawned particles."""
    state.base_color = (clamp_channel(color[0]), clamp_channel(color[1]), clamp_channel(color[2]))


def random_base_color(rng: random.Random) -> Color:
    """Draw a sandy random base color."""
    return (
        rng.randint(*BASE_COLOR_RANGE_R),
        rng.randint(*BASE_COLOR_RANGE_G),
        rng.randint(*BASE_COLOR_RANGE_B),
    )


def resize(state: SimulationState, width: int, height: int) -> None:
    """Handle a viewport resize: terrain starts over at the new size."""
    reset_for_viewport(state, width, height)


# =============================================================================
# TICK
# =============================================================================

def is_out_of_bounds(state: SimulationState, particle: Particle) -> bool:
    return (particle.y > state.height + OUT_OF_BOUNDS_MARGIN
            or particle.x < -OUT_OF_BOUNDS_MARGIN
            or particle.x > state.width + OUT_OF_BOUNDS_MARGIN)


def step_particle(state: SimulationState, particle: Particle) -> bool:
    """Advance one particle by a tick.

    Returns:
        True if the particle is finished (settled or lost) and must be removed
    """
    if particle.age(state.time_ms) >= PARTICLE_MAX_LIFETIME_MS:
        force_settle(state, particle)
        return True

    particle.apply_force(0.0, GRAVITY)
    particle.update(VELOCITY_DAMPING)

    repulse_from_frozen_terrain(state, particle)
    collide_with_grains(state, particle)

    column = state.column_at(particle.x)
    if particle.y + particle.radius >= state.ground_y(column):
        lateral = compute_lateral_bias(state, column, particle)
        if abs(particle.vy) > BOUNCE_SPEED_THRESHOLD:
            particle.vy *= BOUNCE_RESTITUTION
            particle.vx += lateral * LATERAL_STRENGTH * radius_factor(particle.radius)
            return False
        return try_settle(state, particle, column, lateral)

    return is_out_of_bounds(state, particle)


def simulate_tick(state: SimulationState, dt_ms: float = TICK_MS) -> None:
    """Run one simulation tick."""
    state.time_ms += dt_ms
    state.tick_count += 1

    if state.spawning:
        hint_x, hint_y = state.spawn_hint
        for _ in range(SPAWN_RATE):
            if not request_spawn(state, hint_x, hint_y):
                break

    particles = state.particles
    for i in range(len(particles) - 1, -1, -1):
        if step_particle(state, particles[i]):
            particles.pop(i)

    if state.relaxation_due(RELAX_INTERVAL_TICKS):
        relax(state, RELAX_PASSES)

    process_grain_stability(state)


# =============================================================================
# RENDER FEED
# =============================================================================

@dataclass
class RenderFeed:
    """Read-only snapshot the frontend draws from.

    Positions are viewport pixels. The frozen layer pixels are shared, not
    copied; the renderer must not write to them.
    """
    particles: List[Tuple[float, float, float, Color]] = field(default_factory=list)
    mobile_grains: List[Tuple[float, float, float, Color]] = field(default_factory=list)
    frozen_pixels: Optional[np.ndarray] = None
    frozen_dirty: bool = False
    base_color: Color = (0, 0, 0)
    particle_count: int = 0
    mobile_grain_count: int = 0
    column_heights: Optional[np.ndarray] = None


def build_render_feed(state: SimulationState) -> RenderFeed:
    """Collect what the frontend needs for one frame."""
    mobile = [(g.x, g.y, g.radius, g.color) for g in state.grains.iter_mobile()]
    return RenderFeed(
        particles=[(p.x, p.y, p.radius, p.color) for p in state.particles],
        mobile_grains=mobile,
        frozen_pixels=state.frozen_layer.pixels,
        frozen_dirty=state.frozen_layer.dirty,
        base_color=state.base_color,
        particle_count=len(state.particles),
        mobile_grain_count=len(mobile),
        column_heights=state.columns.heights,
    )
