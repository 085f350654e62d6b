"""Height-aware settling decisions."""
from __future__ import annotations

import pytest

from simulation.config import GRAIN_LOCK_MS
from simulation.settling import (
    choose_target_column,
    compute_lateral_bias,
    compute_lateral_from_grain,
    force_settle,
    reject_probability,
    relative_reject_probability,
    settle_grain_at_column,
    try_settle,
)
from tests.conftest import ScriptedRandom, center_of, make_particle


class TestRejectProbability:
    def test_equal_neighbours_never_reject(self):
        assert reject_probability(40.0, 40.0, 40.0, 200) == 0.0

    def test_excess_at_threshold_does_not_reject(self):
        assert relative_reject_probability(0.0, 6.0, 6.0) == 0.0

    def test_excess_scales_linearly_then_saturates(self):
        # (12 - 6) / 24 = 0.25 of the max 0.9
        assert relative_reject_probability(0.0, 12.0, 12.0) == pytest.approx(0.225)
        assert relative_reject_probability(0.0, 30.0, 30.0) == pytest.approx(0.9)
        assert relative_reject_probability(0.0, 100.0, 100.0) == pytest.approx(0.9)

    def test_absolute_height_bias(self):
        # Center at 30 in a 200px viewport: bias = 30 / 170
        expected = 0.9 * (0.6 + 0.4 * (30.0 / 170.0))
        assert reject_probability(0.0, 30.0, 30.0, 200) == pytest.approx(expected)
        # A column at 85% of the viewport gets the full multiplier, still capped
        assert reject_probability(0.0, 170.0, 170.0, 200) == pytest.approx(0.9)
        assert reject_probability(0.0, 500.0, 500.0, 200) <= 0.98


class TestChooseTarget:
    def test_prefers_strictly_lower_neighbour(self):
        assert choose_target_column(5, 12, left=1.0, right=3.0, lateral_bias=0.0) == 4
        assert choose_target_column(5, 12, left=3.0, right=1.0, lateral_bias=0.0) == 6
        assert choose_target_column(5, 12, left=2.0, right=2.0, lateral_bias=0.0) == 5

    def test_strong_lateral_bias_overrides(self):
        assert choose_target_column(5, 12, left=1.0, right=3.0, lateral_bias=0.9) == 6
        assert choose_target_column(5, 12, left=3.0, right=1.0, lateral_bias=-0.9) == 4
        assert choose_target_column(5, 12, left=3.0, right=1.0, lateral_bias=-0.1) == 6

    def test_never_leaves_the_grid(self):
        assert choose_target_column(0, 12, left=5.0, right=9.0, lateral_bias=-1.0) == 0
        assert choose_target_column(11, 12, left=9.0, right=5.0, lateral_bias=1.0) == 11


class TestTrySettle:
    def test_flat_terrain_settles_in_contact_column(self, state):
        column = 10
        p = make_particle(x=center_of(state, column), radius=1.1)
        assert try_settle(state, p, column, lateral_bias=0.0) is True
        assert state.columns.get(column) == pytest.approx(2.2)
        assert len(state.grains.columns[column]) == 1
        assert state.ledger.deposited == pytest.approx(2.2)

    def test_equal_neighbours_accept_even_on_lowest_roll(self, scripted_state):
        state = scripted_state
        for i in (4, 5, 6):
            state.columns.set(i, 20.0)
        state.rng.values = [0.0, 0.0]
        try_settle(state, make_particle(x=center_of(state, 5), radius=0.8), 5, lateral_bias=0.9)
        assert state.columns.get(5) == pytest.approx(21.6)
        assert state.columns.get(6) == pytest.approx(20.0)

    @pytest.mark.parametrize("column", [0, -1])
    def test_edge_columns(self, state, column):
        column = column % state.cols
        neighbour = 1 if column == 0 else state.cols - 2
        state.columns.set(column, 10.0)
        state.columns.set(neighbour, 10.0)
        try_settle(state, make_particle(x=center_of(state, column), radius=1.0), column, 0.0)
        assert state.columns.get(column) == pytest.approx(12.0)
        assert state.columns.get(neighbour) == pytest.approx(10.0)

    def test_tall_column_sheds_to_lower_neighbour(self, scripted_state):
        state = scripted_state
        state.columns.set(5, 30.0)
        state.columns.set(6, 30.0)
        # jitter draw, then a roll below the ~0.6 reject probability
        state.rng.values = [0.5, 0.0]
        try_settle(state, make_particle(x=center_of(state, 5), radius=1.0), 5, lateral_bias=0.0)
        assert state.columns.get(4) == pytest.approx(2.0)
        assert state.columns.get(5) == pytest.approx(30.0)
        grain = state.grains.top(4)
        lo, hi = state.column_band(4)
        assert lo - 0.4 <= grain.x <= hi + 0.4

    def test_roll_above_probability_accepts(self, scripted_state):
        state = scripted_state
        state.columns.set(5, 30.0)
        state.columns.set(6, 30.0)
        state.rng.values = [0.5, 0.99]
        try_settle(state, make_particle(x=center_of(state, 5), radius=1.0), 5, lateral_bias=0.0)
        assert state.columns.get(5) == pytest.approx(32.0)
        assert state.columns.get(4) == 0.0

    def test_overflowing_target_falls_back_to_contact_column(self, scripted_state):
        state = scripted_state
        state.columns.set(4, state.height - 1.0)
        state.columns.set(5, state.height + 100.0)
        state.columns.set(6, state.height + 100.0)
        state.rng.values = [0.5, 0.0]
        try_settle(state, make_particle(x=center_of(state, 5), radius=1.0), 5, lateral_bias=0.0)
        # Soft constraint: the settle still commits in the contact column
        assert state.columns.get(5) == pytest.approx(state.height + 102.0)
        assert state.columns.get(4) == pytest.approx(state.height - 1.0)


class TestSettleGrain:
    def test_grain_geometry_and_timers(self, scripted_state):
        state = scripted_state
        state.time_ms = 1000.0
        state.columns.set(7, 10.0)
        grain = settle_grain_at_column(state, make_particle(x=center_of(state, 7), radius=1.5), 7)
        assert grain.y == round(state.height - 10.0 - 1.5)
        assert grain.lock_until == 1000.0 + GRAIN_LOCK_MS
        assert grain.settled_at == 1000.0
        assert grain.stability == 0.0
        assert not grain.immobile
        assert state.columns.get(7) == pytest.approx(13.0)

    def test_weak_snap_keeps_grain_in_column_band(self, state):
        for _ in range(50):
            # Particle far outside the column: x is pulled into the band
            grain = settle_grain_at_column(state, make_particle(x=0.0, radius=0.5), 9)
            lo, hi = state.column_band(9)
            assert lo - 0.4 <= grain.x <= hi + 0.4

    def test_force_settle_uses_current_column(self, state):
        p = make_particle(x=center_of(state, 12), radius=1.0)
        force_settle(state, p)
        assert state.columns.get(12) == pytest.approx(2.0)
        assert state.ledger.forced_count == 1


class TestLateralBias:
    def test_lower_side_is_preferred(self, scripted_state):
        state = scripted_state
        state.columns.set(4, 0.0)
        state.columns.set(6, 5.0)
        assert compute_lateral_bias(state, 5, make_particle()) == pytest.approx(-1.0)
        assert compute_lateral_from_grain(state, 5) == pytest.approx(-0.6)

    def test_sideways_velocity_wins(self, scripted_state):
        state = scripted_state
        state.columns.set(4, 0.0)
        state.columns.set(6, 5.0)
        assert compute_lateral_bias(state, 5, make_particle(vx=0.5)) == pytest.approx(1.0)

    def test_missing_neighbour_counts_as_tall(self, scripted_state):
        state = scripted_state
        assert compute_lateral_bias(state, 0, make_particle()) == pytest.approx(1.0)
        assert compute_lateral_from_grain(state, state.cols - 1) == pytest.approx(-0.6)
