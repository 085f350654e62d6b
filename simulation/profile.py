# simulation/profile.py
"""Dune profile statistics computed from column heights.

Used by the HUD and the benchmark to summarize how steep and how rough the
terrain currently is.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy.ndimage import gaussian_filter1d

PROFILE_SMOOTHING_SIGMA = 4.0   # Columns; scale of the "dune" shape vs. surface noise


@dataclass
class ProfileStats:
    """Summary of a height profile."""
    peak: float = 0.0         # Tallest column (px)
    mean: float = 0.0         # Mean column height (px)
    max_slope: float = 0.0    # Largest adjacent height difference (px)
    roughness: float = 0.0    # Std dev of heights around the smoothed profile (px)


def max_slope(heights: np.ndarray) -> float:
    """Largest absolute height difference between adjacent columns."""
    if len(heights) < 2:
        return 0.0
    return float(np.max(np.abs(np.diff(heights))))


def roughness(heights: np.ndarray, sigma: float = PROFILE_SMOOTHING_SIGMA) -> float:
    """Standard deviation of the profile around its gaussian-smoothed version."""
    if len(heights) == 0:
        return 0.0
    smoothed = gaussian_filter1d(heights.astype(np.float64), sigma=sigma, mode="nearest")
    return float(np.std(heights - smoothed))


def profile_stats(heights: np.ndarray) -> ProfileStats:
    if len(heights) == 0:
        return ProfileStats()
    return ProfileStats(
        peak=float(np.max(heights)),
        mean=float(np.mean(heights)),
        max_slope=max_slope(heights),
        roughness=roughness(heights),
    )
