# render/hud.py
"""HUD: particle counters, profile stats and the base color box."""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import pygame

from render.primitives import draw_text
from render.config import (
    LINE_HEIGHT,
    HUD_MARGIN,
    COLOR_BOX_SIZE,
    COLOR_BOX_PADDING,
    COLOR_BOX_HINT_OFFSET,
    COLOR_BORDER_LIGHT,
    COLOR_TEXT_WHITE,
    COLOR_TEXT_GRAY,
    COLOR_HINT,
)

if TYPE_CHECKING:
    from main import RenderFeed
    from simulation.profile import ProfileStats


def render_hud(
    screen,
    font,
    feed: "RenderFeed",
    stats: Optional["ProfileStats"] = None,
    paused: bool = False,
) -> int:
    """Render the counters in the top-left corner. Returns final y position."""
    x = y = HUD_MARGIN
    draw_text(screen, font, f"particles: {feed.particle_count}", (x, y))
    y += LINE_HEIGHT
    draw_text(screen, font, f"moving grains: {feed.mobile_grain_count}", (x, y))
    y += LINE_HEIGHT
    if stats is not None:
        draw_text(screen, font, f"peak: {stats.peak:.0f}px  slope: {stats.max_slope:.1f}px", (x, y), COLOR_TEXT_GRAY)
        y += LINE_HEIGHT
    if paused:
        draw_text(screen, font, "PAUSED", (x, y), COLOR_TEXT_WHITE)
        y += LINE_HEIGHT
    return y


def render_color_box(screen, font, feed: "RenderFeed") -> None:
    """Draw the current base color swatch with its key hint."""
    box_x = screen.get_width() - COLOR_BOX_PADDING - COLOR_BOX_SIZE
    box_y = COLOR_BOX_PADDING
    rect = pygame.Rect(box_x, box_y, COLOR_BOX_SIZE, COLOR_BOX_SIZE)
    pygame.draw.rect(screen, feed.base_color, rect)
    pygame.draw.rect(screen, COLOR_BORDER_LIGHT, rect, 1)
    draw_text(screen, font, "SPACE: random base color",
              (box_x - COLOR_BOX_HINT_OFFSET, box_y + COLOR_BOX_SIZE + 6), COLOR_HINT)
