# pygame_runner.py
"""
Pygame-CE frontend for the dune simulator.

The simulation core never touches pygame. Each frame this module:
1. Turns input into requests (spawn hint, base color, resize, clear)
2. Runs one simulation tick with the frame's elapsed time
3. Draws from the read-only render feed

Controls:
- Left mouse (hold): pour sand at the cursor
- Space: random base color
- P: pause
- C: clear terrain
- H: show help
- ESC: quit
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

try:
    import pygame
except ImportError as exc:
    raise SystemExit("pygame-ce is required. Install with: pip install pygame-ce") from exc

from main import (
    SimulationState,
    build_initial_state,
    build_render_feed,
    random_base_color,
    resize,
    set_base_color,
    simulate_tick,
)
from config import DEFAULT_VIEWPORT_WIDTH, DEFAULT_VIEWPORT_HEIGHT, TARGET_FPS
from keybindings import (
    CONTROL_DESCRIPTIONS,
    RANDOM_COLOR_KEY,
    PAUSE_KEY,
    CLEAR_KEY,
    HELP_KEY,
    QUIT_KEY,
)
from logging_config import setup_logging
from render import (
    FrozenSurfaceCache,
    render_sand,
    render_hud,
    render_color_box,
    render_help_overlay,
)
from render.config import FONT_SIZE, COLOR_BG_DARK, HUD_MARGIN, LINE_HEIGHT
from simulation.profile import profile_stats

logger = logging.getLogger(__name__)

# Profile stats are cheap but not free; refresh them a few times a second
PROFILE_REFRESH_TICKS = 15


def update_spawn_request(state: SimulationState) -> None:
    """Mirror the mouse button into the simulation's spawn request."""
    state.spawning = bool(pygame.mouse.get_pressed()[0])
    if state.spawning:
        mx, my = pygame.mouse.get_pos()
        state.set_spawn_hint(float(mx), float(my))


def draw_frame(screen, font, state: SimulationState, frozen_cache: FrozenSurfaceCache,
               stats, show_help: bool, paused: bool) -> None:
    """Draw one frame from the render feed."""
    screen.fill(COLOR_BG_DARK)
    feed = build_render_feed(state)
    if render_sand(screen, feed, frozen_cache):
        state.frozen_layer.dirty = False
    hud_bottom = render_hud(screen, font, feed, stats, paused)
    render_color_box(screen, font, feed)
    if show_help:
        render_help_overlay(screen, font, CONTROL_DESCRIPTIONS, (HUD_MARGIN, hud_bottom + LINE_HEIGHT))


def run(width: int = DEFAULT_VIEWPORT_WIDTH, height: int = DEFAULT_VIEWPORT_HEIGHT,
        seed: Optional[int] = None) -> None:
    """Main loop."""
    pygame.init()
    screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
    pygame.display.set_caption("Dune - falling sand")

    font = pygame.font.Font(None, FONT_SIZE)
    clock = pygame.time.Clock()

    state = build_initial_state(width=width, height=height, seed=seed)
    frozen_cache = FrozenSurfaceCache()
    logger.info("Started %dx%d with %d columns (seed=%s)", width, height, state.cols, seed)

    show_help = False
    paused = False
    stats = None

    running = True
    while running:
        dt_ms = clock.tick(TARGET_FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                continue

            if event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                resize(state, event.w, event.h)
                stats = None
                logger.info("Viewport resized to %dx%d, terrain reset (%d columns)",
                            event.w, event.h, state.cols)
                continue

            if event.type == pygame.KEYDOWN:
                if event.key == QUIT_KEY:
                    running = False
                elif event.key == RANDOM_COLOR_KEY:
                    set_base_color(state, random_base_color(state.rng))
                    logger.debug("Base color changed to %s", state.base_color)
                elif event.key == PAUSE_KEY:
                    paused = not paused
                elif event.key == CLEAR_KEY:
                    resize(state, state.width, state.height)
                    stats = None
                    logger.info("Terrain cleared")
                elif event.key == HELP_KEY:
                    show_help = not show_help

        if not paused:
            update_spawn_request(state)
            simulate_tick(state, float(dt_ms))
            if stats is None or state.tick_count % PROFILE_REFRESH_TICKS == 0:
                stats = profile_stats(state.columns.heights)

        draw_frame(screen, font, state, frozen_cache, stats, show_help, paused)
        pygame.display.flip()

    pygame.quit()


def main(argv=None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Falling sand dune simulator")
    parser.add_argument(
        "--width", type=int, default=DEFAULT_VIEWPORT_WIDTH,
        help=f"Window width in pixels (default: {DEFAULT_VIEWPORT_WIDTH})"
    )
    parser.add_argument(
        "--height", type=int, default=DEFAULT_VIEWPORT_HEIGHT,
        help=f"Window height in pixels (default: {DEFAULT_VIEWPORT_HEIGHT})"
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Random seed for a reproducible run"
    )
    parser.add_argument(
        "--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)"
    )
    parser.add_argument(
        "--log-file", default=None,
        help="Also write logs to this file"
    )
    args = parser.parse_args(argv)

    setup_logging(getattr(logging, args.log_level), args.log_file)
    run(width=args.width, height=args.height, seed=args.seed)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(0)
