# terrain/particles.py
"""
Falling particles.

Particles are transient: they fall under gravity, get nudged by nearby
grains and frozen terrain, and are converted into grains when they settle
(or when they outlive PARTICLE_MAX_LIFETIME_MS).

Coordinates are viewport pixels, y grows downward.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Tuple

from config import (
    SPAWN_JITTER_X,
    SPAWN_JITTER_Y,
    SPAWN_VEL_X,
    SPAWN_VEL_Y,
    PARTICLE_MIN_RADIUS,
    PARTICLE_MAX_RADIUS,
    LARGE_PARTICLE_CHANCE,
    LARGE_PARTICLE_MIN_RADIUS,
    LARGE_PARTICLE_MAX_RADIUS,
    COLOR_VARIANT_STEP,
)
from utils import clamp, shift_color

Color = Tuple[int, int, int]


@dataclass
class Particle:
    """A falling particle with sub-pixel position and velocity."""
    x: float
    y: float
    radius: float
    color: Color
    birth_time: float
    vx: float = 0.0
    vy: float = 0.0
    # Force accumulator, cleared on every update
    ax: float = 0.0
    ay: float = 0.0

    def apply_force(self, fx: float, fy: float) -> None:
        self.ax += fx
        self.ay += fy

    def update(self, damping: float) -> None:
        """Integrate one tick: velocity, then position, then damping."""
        self.vx += self.ax
        self.vy += self.ay
        self.x += self.vx
        self.y += self.vy
        self.ax = 0.0
        self.ay = 0.0
        self.vx *= damping
        self.vy *= damping

    def age(self, now_ms: float) -> float:
        return now_ms - self.birth_time


def pick_color_variant(rng: random.Random, base: Color) -> Color:
    """Pick base, base+30 or base-30 (per channel) with equal probability."""
    variant = rng.randrange(3)
    if variant == 0:
        return (int(base[0]), int(base[1]), int(base[2]))
    if variant == 1:
        return shift_color(base, COLOR_VARIANT_STEP)
    return shift_color(base, -COLOR_VARIANT_STEP)


def random_radius(rng: random.Random) -> float:
    """Draw a particle radius; a small share of particles are large."""
    if rng.random() < LARGE_PARTICLE_CHANCE:
        return rng.uniform(LARGE_PARTICLE_MIN_RADIUS, LARGE_PARTICLE_MAX_RADIUS)
    return rng.uniform(PARTICLE_MIN_RADIUS, PARTICLE_MAX_RADIUS)


def spawn_particle(
    rng: random.Random,
    hint_x: float,
    hint_y: float,
    width: int,
    height: int,
    base_color: Color,
    now_ms: float,
) -> Particle:
    """Create a particle near a spawn hint.

    Args:
        rng: Random source for position, velocity, radius and color
        hint_x, hint_y: Requested spawn point (e.g. the mouse position)
        width, height: Viewport size, the spawn point is clamped inside it
        base_color: Current base color; the particle gets a variant of it
        now_ms: Simulation time, recorded as the birth time

    Returns:
        The new particle (not yet added to any state)
    """
    x = clamp(hint_x + rng.uniform(-SPAWN_JITTER_X, SPAWN_JITTER_X), 0, width - 1)
    y = clamp(hint_y + rng.uniform(-SPAWN_JITTER_Y, SPAWN_JITTER_Y), 0, height - 1)
    vx = rng.uniform(*SPAWN_VEL_X)
    vy = rng.uniform(*SPAWN_VEL_Y)
    radius = random_radius(rng)
    color = pick_color_variant(rng, base_color)
    return Particle(x=x, y=y, radius=radius, color=color, birth_time=now_ms, vx=vx, vy=vy)
