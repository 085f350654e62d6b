"""
Rendering module for the dune simulator pygame frontend.

Provides modular rendering functions for the sand, HUD and overlays.
"""
from render.primitives import draw_text, draw_disc
from render.terrain import FrozenSurfaceCache, render_sand, render_discs
from render.hud import render_hud, render_color_box
from render.overlays import render_help_overlay

__all__ = [
    # Primitives
    "draw_text",
    "draw_disc",
    # Sand
    "FrozenSurfaceCache",
    "render_sand",
    "render_discs",
    # HUD
    "render_hud",
    "render_color_box",
    # Overlays
    "render_help_overlay",
]
