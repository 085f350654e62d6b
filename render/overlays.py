# render/overlays.py
"""Overlay rendering: help panel."""
from __future__ import annotations

from typing import List, Tuple

import pygame

from render.primitives import draw_text
from render.config import (
    LINE_HEIGHT,
    COLOR_BG_PANEL,
    COLOR_TEXT_HIGHLIGHT,
    COLOR_TEXT_GRAY,
)


def render_help_overlay(
    surface,
    font,
    controls: List[str],
    pos: Tuple[int, int],
    width: int = 220,
) -> None:
    """Draw a single-column panel listing the key controls below the HUD.

    Args:
        controls: One line of text per control, e.g. "P: pause"
        pos: Top-left corner of the text; the panel extends 6px beyond it
        width: Panel width in pixels
    """
    x, y = pos
    height = LINE_HEIGHT * (len(controls) + 1) + 12
    pygame.draw.rect(surface, COLOR_BG_PANEL, (x - 6, y - 6, width, height), 0)
    draw_text(surface, font, "CONTROLS", (x, y), color=COLOR_TEXT_HIGHLIGHT)
    y += LINE_HEIGHT + 4
    for control in controls:
        draw_text(surface, font, control, (x, y), color=COLOR_TEXT_GRAY)
        y += LINE_HEIGHT
