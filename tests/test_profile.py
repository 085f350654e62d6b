"""Dune profile statistics."""
from __future__ import annotations

import numpy as np
import pytest

from simulation.profile import ProfileStats, max_slope, profile_stats, roughness


def test_flat_profile():
    stats = profile_stats(np.full(30, 12.0))
    assert stats.peak == 12.0
    assert stats.mean == 12.0
    assert stats.max_slope == 0.0
    assert stats.roughness == pytest.approx(0.0, abs=1e-9)


def test_max_slope_uses_adjacent_columns():
    heights = np.array([0.0, 1.0, 5.0, 4.5, 0.0])
    assert max_slope(heights) == pytest.approx(4.5)
    assert max_slope(np.array([3.0])) == 0.0


def test_noise_is_rougher_than_a_smooth_hill():
    x = np.linspace(-1.0, 1.0, 80)
    hill = 40.0 * (1.0 - x ** 2)
    noisy = hill + np.tile([2.0, -2.0], 40)
    assert roughness(noisy) > roughness(hill) + 1.0


def test_empty_profile():
    assert profile_stats(np.zeros(0)) == ProfileStats()
