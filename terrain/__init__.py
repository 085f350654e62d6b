# terrain/__init__.py
"""
Terrain module: columns, grains, particles and the frozen terrain image.

Provides:
- Column height table (from columns.py)
- Grain records and per-column grain stacks (from grains.py)
- Falling particles and spawning (from particles.py)
- Rasterized frozen grains (from frozen_layer.py)
"""

from terrain.columns import ColumnHeightTable
from terrain.grains import Grain, GrainStore
from terrain.particles import (
    Particle,
    pick_color_variant,
    random_radius,
    spawn_particle,
)
from terrain.frozen_layer import FrozenLayer, extract_rgb

__all__ = [
    # Columns
    "ColumnHeightTable",
    # Grains
    "Grain",
    "GrainStore",
    # Particles
    "Particle",
    "pick_color_variant",
    "random_radius",
    "spawn_particle",
    # Frozen layer
    "FrozenLayer",
    "extract_rgb",
]
