# terrain/frozen_layer.py
"""Rasterized image of frozen (immobile) grains.

Frozen grains are painted once into an RGBA buffer and never drawn
individually again. Falling particles probe this buffer instead of
colliding with frozen grain geometry.

Buffer layout is (height, width, 4) uint8, row-major like a screen.
"""
from __future__ import annotations

import math
from typing import Any, Tuple

import numpy as np

from config import FROZEN_GRAIN_ALPHA

Color = Tuple[int, int, int]


def extract_rgb(color: Any, fallback: Color) -> Color:
    """Return color as an (r, g, b) byte triple, or fallback if it is malformed."""
    try:
        r, g, b = (int(color[0]), int(color[1]), int(color[2]))
    except (TypeError, ValueError, IndexError):
        return fallback
    if not all(0 <= c <= 255 for c in (r, g, b)):
        return fallback
    return (r, g, b)


class FrozenLayer:
    """RGBA pixel buffer holding every frozen grain."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 4), dtype=np.uint8)
        # Set when pixels change, cleared by the renderer after re-uploading
        self.dirty = True

    def clear(self) -> None:
        self.pixels.fill(0)
        self.dirty = True

    def stamp_disc(self, x: float, y: float, radius: float, color: Any, fallback: Color) -> int:
        """Paint a filled disc. Returns the number of pixels written.

        The pixel containing the center is always painted, so sub-pixel
        grains still leave a mark.
        """
        rgb = extract_rgb(color, fallback)
        rgba = np.array([rgb[0], rgb[1], rgb[2], FROZEN_GRAIN_ALPHA], dtype=np.uint8)

        x0 = max(0, int(math.floor(x - radius)))
        x1 = min(self.width, int(math.ceil(x + radius)) + 1)
        y0 = max(0, int(math.floor(y - radius)))
        y1 = min(self.height, int(math.ceil(y + radius)) + 1)
        written = 0
        if x0 < x1 and y0 < y1:
            ys, xs = np.ogrid[y0:y1, x0:x1]
            mask = (xs + 0.5 - x) ** 2 + (ys + 0.5 - y) ** 2 <= radius * radius
            self.pixels[y0:y1, x0:x1][mask] = rgba
            written = int(np.count_nonzero(mask))

        cx, cy = int(math.floor(x)), int(math.floor(y))
        if 0 <= cx < self.width and 0 <= cy < self.height:
            if written == 0 or self.pixels[cy, cx, 3] == 0:
                self.pixels[cy, cx] = rgba
                written += 1

        if written:
            self.dirty = True
        return written

    def alpha_at(self, x: float, y: float) -> int:
        """Alpha of the pixel at (x, y), with coordinates clamped into the buffer.

        An empty buffer (zero-sized viewport) reads as fully transparent.
        """
        if self.width == 0 or self.height == 0:
            return 0
        px = min(max(int(math.floor(x)), 0), self.width - 1)
        py = min(max(int(math.floor(y)), 0), self.height - 1)
        return int(self.pixels[py, px, 3])

    def is_opaque_below(self, x: float, y: float, depth: int, threshold: int) -> bool:
        """Probe the particle's pixel and `depth` pixels below it for frozen terrain."""
        if self.width == 0 or self.height == 0:
            return False
        px = min(max(int(math.floor(x)), 0), self.width - 1)
        py = min(max(int(math.floor(y)), 0), self.height - 1)
        for dy in range(depth + 1):
            row = py + dy
            if row >= self.height:
                break
            if self.pixels[row, px, 3] > threshold:
                return True
        return False

    def opaque_pixel_count(self) -> int:
        return int(np.count_nonzero(self.pixels[:, :, 3]))
