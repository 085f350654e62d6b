"""Simulation state management module."""

from sim_state.state import SimulationState
from sim_state.initialization import (
    build_initial_state,
    columns_for_width,
    reset_for_viewport,
)

__all__ = [
    'SimulationState',
    'build_initial_state',
    'columns_for_width',
    'reset_for_viewport',
]
