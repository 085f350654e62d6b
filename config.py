# config.py
"""
Centralized configuration for the dune simulator.

This file contains high-level, cross-cutting constants.
Domain-specific constants are in:
- simulation/config.py (physics, settling, relaxation, stability)
- render/config.py (colors, UI dimensions, etc.)
"""
from __future__ import annotations

from typing import Tuple

# =============================================================================
# VIEWPORT & COLUMNS
# =============================================================================
# Default window size used when no size is given on the command line
DEFAULT_VIEWPORT_WIDTH = 1280
DEFAULT_VIEWPORT_HEIGHT = 720

COLUMN_WIDTH = 3      # Width of one terrain column in pixels
MIN_COLUMNS = 12      # Narrow windows still get at least this many columns

# =============================================================================
# TIME & SIMULATION
# =============================================================================
TARGET_FPS = 60
TICK_MS = 1000.0 / TARGET_FPS   # Simulated milliseconds per tick (headless default)

# =============================================================================
# SPAWNING
# =============================================================================
SPAWN_RATE = 4               # Spawn requests per tick while the mouse is held
MAX_PARTICLES = 1600         # Active particle capacity; spawns beyond it are dropped

SPAWN_JITTER_X = 50.0        # Horizontal spread around the spawn hint (px)
SPAWN_JITTER_Y = 6.0         # Vertical spread around the spawn hint (px)

# Particle radius ranges (px)
PARTICLE_MIN_RADIUS = 0.5
PARTICLE_MAX_RADIUS = 1.2
LARGE_PARTICLE_CHANCE = 0.1
LARGE_PARTICLE_MIN_RADIUS = 1.8
LARGE_PARTICLE_MAX_RADIUS = 3.0

# Initial velocity ranges (px / tick)
SPAWN_VEL_X: Tuple[float, float] = (-0.6, 0.6)
SPAWN_VEL_Y: Tuple[float, float] = (-1.6, -0.6)

# =============================================================================
# COLOR
# =============================================================================
DEFAULT_BASE_COLOR: Tuple[int, int, int] = (230, 190, 120)
COLOR_VARIANT_STEP = 30      # Spawned grains use base, base+30 or base-30 per channel

# Ranges for the "random base color" key
BASE_COLOR_RANGE_R: Tuple[int, int] = (120, 255)
BASE_COLOR_RANGE_G: Tuple[int, int] = (80, 230)
BASE_COLOR_RANGE_B: Tuple[int, int] = (60, 220)

# Alpha used when painting frozen grains into the terrain image
FROZEN_GRAIN_ALPHA = 230
