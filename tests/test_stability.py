"""Grain stability promotion and freezing."""
from __future__ import annotations

import pytest

from config import FROZEN_GRAIN_ALPHA
from simulation.config import GRAIN_MAX_MOBILE_MS
from simulation.relaxation import relax
from simulation.stability import freeze_grain, process_grain_stability, should_freeze
from terrain.grains import Grain
from tests.conftest import pile


def test_stability_grows_each_tick(state):
    pile(state, 10, 1)
    grain = state.grains.top(10)
    process_grain_stability(state)
    process_grain_stability(state)
    assert grain.stability == pytest.approx(0.09)
    assert not grain.immobile


def test_freezes_once_threshold_is_reached(state):
    pile(state, 10, 1)
    grain = state.grains.top(10)
    for _ in range(15):
        process_grain_stability(state)
    assert not grain.immobile
    for _ in range(2):
        process_grain_stability(state)
    assert grain.immobile
    assert grain.stability == 1.0


def test_freezes_by_age(state):
    pile(state, 10, 1)
    grain = state.grains.top(10)
    state.time_ms += GRAIN_MAX_MOBILE_MS
    assert process_grain_stability(state) == 1
    assert grain.immobile


def test_frozen_grain_is_rasterized(state):
    state.frozen_layer.dirty = False
    pile(state, 10, 1, radius=2.0)
    grain = state.grains.top(10)
    freeze_grain(state, grain)
    assert state.frozen_layer.alpha_at(grain.x, grain.y) == FROZEN_GRAIN_ALPHA
    assert state.frozen_layer.dirty
    assert state.mobile_grain_count == 0
    assert len(state.grains) == 1


def test_freeze_is_idempotent(state):
    pile(state, 10, 1, radius=2.0)
    grain = state.grains.top(10)
    freeze_grain(state, grain)
    painted = state.frozen_layer.opaque_pixel_count()
    state.frozen_layer.dirty = False

    freeze_grain(state, grain)
    assert state.frozen_layer.opaque_pixel_count() == painted
    assert not state.frozen_layer.dirty
    # Already frozen grains are skipped by the promotion pass too
    assert process_grain_stability(state) == 0


def test_malformed_grain_color_uses_base_color(state):
    pile(state, 10, 1, radius=2.0)
    grain = state.grains.top(10)
    grain.color = None
    freeze_grain(state, grain)
    y, x = int(grain.y), int(grain.x)
    assert tuple(state.frozen_layer.pixels[y, x, :3]) == state.base_color


def test_should_freeze_rules():
    grain = Grain(x=0.0, y=0.0, radius=1.0, color=(1, 2, 3), lock_until=0.0, settled_at=0.0,
                  stability=0.1)
    assert not should_freeze(grain, 100.0)
    assert should_freeze(grain, GRAIN_MAX_MOBILE_MS)
    grain.stability = 0.72
    assert should_freeze(grain, 0.0)


def test_stability_never_decreases_under_relaxation(state):
    pile(state, 20, 12)
    for _ in range(5):
        process_grain_stability(state)
    before = {id(g): g.stability for g in state.grains.mobile_grains()}
    relax(state)  # grains are still locked, so none migrate
    for grain in state.grains.mobile_grains():
        assert grain.stability >= before[id(grain)]
