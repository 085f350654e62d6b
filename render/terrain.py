# render/terrain.py
"""Drawing of the sand: frozen terrain image, mobile grains and particles."""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional, Tuple

import numpy as np
import pygame

from render.primitives import draw_disc

if TYPE_CHECKING:
    from main import RenderFeed

Color = Tuple[int, int, int]
Disc = Tuple[float, float, float, Color]


class FrozenSurfaceCache:
    """pygame surface mirroring the simulation's frozen layer.

    The frozen layer only changes when grains freeze, so the surface is
    re-uploaded only when the layer is dirty (or was replaced by a resize).
    """

    def __init__(self) -> None:
        self.surface: Optional[pygame.Surface] = None
        self._source_id: Optional[int] = None

    def update(self, pixels: np.ndarray, dirty: bool) -> pygame.Surface:
        """Return an up-to-date surface for an (h, w, 4) RGBA pixel buffer."""
        if self.surface is None or dirty or id(pixels) != self._source_id:
            height, width = pixels.shape[0], pixels.shape[1]
            self.surface = pygame.image.frombytes(np.ascontiguousarray(pixels).tobytes(), (width, height), "RGBA")
            self._source_id = id(pixels)
        return self.surface


def render_discs(surface, discs: Iterable[Disc]) -> None:
    for x, y, radius, color in discs:
        draw_disc(surface, color, (x, y), radius)


def render_sand(surface, feed: "RenderFeed", frozen_cache: FrozenSurfaceCache) -> bool:
    """Draw particles, then mobile grains, then composite the frozen terrain.

    The frozen image goes on last, so grains that froze this frame cover
    anything still drawn at the same spot.

    Returns:
        True if the frozen surface was re-uploaded this frame
    """
    was_dirty = feed.frozen_dirty
    render_discs(surface, feed.particles)
    render_discs(surface, feed.mobile_grains)
    if feed.frozen_pixels is not None and feed.frozen_pixels.size:
        surface.blit(frozen_cache.update(feed.frozen_pixels, feed.frozen_dirty), (0, 0))
    return was_dirty
