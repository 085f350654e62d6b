"""
keybindings.py - Centralized key mappings for the dune simulator (Pygame version)

Single source of truth for all keyboard controls.
"""
from __future__ import annotations

try:
    import pygame
except ImportError:
    # Allow import without pygame for headless use and tests
    pygame = None


def _key(name: str) -> int:
    """Get pygame key constant by name, or placeholder if pygame not loaded."""
    if pygame is None:
        return 0
    return getattr(pygame, f"K_{name}", 0)


RANDOM_COLOR_KEY = _key("SPACE")   # Pick a random base color for new sand
PAUSE_KEY = _key("p")              # Freeze the simulation clock
CLEAR_KEY = _key("c")              # Reset the terrain
HELP_KEY = _key("h")
QUIT_KEY = _key("ESCAPE")

# Control descriptions for help display
CONTROL_DESCRIPTIONS = [
    "LMB (hold): pour sand",
    "Space: random base color",
    "P: pause",
    "C: clear terrain",
    "H: help",
    "Esc: quit",
]
