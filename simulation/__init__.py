# simulation/__init__.py
"""Simulation modules for the dune simulator.

- settling: Height-aware particle-to-grain conversion
- collision: Soft particle/grain and particle/frozen-terrain nudges
- relaxation: Avalanche passes between adjacent columns
- stability: Grain aging and freezing
- profile: Height profile statistics
"""

from simulation.settling import try_settle, force_settle, settle_grain_at_column
from simulation.collision import collide_with_grains, repulse_from_frozen_terrain
from simulation.relaxation import relax, relax_columns
from simulation.stability import process_grain_stability
from simulation.profile import profile_stats

__all__ = [
    "try_settle",
    "force_settle",
    "settle_grain_at_column",
    "collide_with_grains",
    "repulse_from_frozen_terrain",
    "relax",
    "relax_columns",
    "process_grain_stability",
    "profile_stats",
]
