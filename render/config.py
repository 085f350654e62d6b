# render/config.py
"""
Configuration constants for the rendering domain.
Includes UI dimensions, colors, font sizes, and other visual tuning values.
"""
from __future__ import annotations

from typing import Tuple

# =============================================================================
# UI LAYOUT & DIMENSIONS
# =============================================================================
LINE_HEIGHT = 16
FONT_SIZE = 18
HUD_MARGIN = 10

# Base color box (top-right corner)
COLOR_BOX_SIZE = 48
COLOR_BOX_PADDING = 10
COLOR_BOX_HINT_OFFSET = 180       # Hint text sits this far left of the box

# =============================================================================
# COLORS
# =============================================================================
COLOR_BG_DARK: Tuple[int, int, int] = (18, 18, 18)
COLOR_BG_PANEL = (25, 25, 30)
COLOR_BORDER_LIGHT = (180, 180, 180)
COLOR_TEXT_WHITE = (240, 240, 240)
COLOR_TEXT_GRAY = (160, 160, 160)
COLOR_TEXT_HIGHLIGHT = (220, 200, 120)
COLOR_HINT = (255, 255, 255)
