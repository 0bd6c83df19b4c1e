"""
Tests for the cost model: concrete premiums, slab cost interpolation and
steel quantities.
"""

import pytest

from src.core.data_models import (
    ConcretePremiumSchedule,
    CostParameters,
    CostTableError,
    SlabCostPoint,
)
from src.core.cost_tables import DEFAULT_PT_SLAB_COSTS
from src.engines.cost_model import (
    CostModel,
    base_concrete_cost,
    beam_rebar_weight,
    interpolated_slab_cost,
    rebar_weight_per_sf,
    strand_weight,
    strength_adjusted_slab_cost,
    tendon_length,
)

DEFAULT_TABLE = [SlabCostPoint(t, c) for t, c in DEFAULT_PT_SLAB_COSTS]


class TestConcretePremium:
    def test_flat_below_reference(self):
        schedule = ConcretePremiumSchedule()
        assert base_concrete_cost(4000, schedule) == pytest.approx(220.0)
        assert base_concrete_cost(5000, schedule) == pytest.approx(220.0)

    def test_first_band(self):
        assert base_concrete_cost(7000, ConcretePremiumSchedule()) == pytest.approx(250.0)

    def test_high_strength_band(self):
        # 220 + 15 x 7 + 26 x 3
        assert base_concrete_cost(15000, ConcretePremiumSchedule()) == pytest.approx(403.0)

    def test_premium_is_monotonic(self):
        schedule = ConcretePremiumSchedule()
        costs = [base_concrete_cost(fc, schedule) for fc in (5000, 7000, 10000, 12000, 15000)]
        assert costs == sorted(costs)

    def test_base_follows_concrete_cost(self):
        schedule = CostParameters(concrete_cost_per_cy=180.0).premium_schedule
        assert base_concrete_cost(5000, schedule) == pytest.approx(180.0)


class TestSlabCostInterpolation:
    def test_exact_points(self):
        for thickness, cost in DEFAULT_PT_SLAB_COSTS:
            assert interpolated_slab_cost(thickness, DEFAULT_TABLE) == pytest.approx(cost)

    def test_midpoint(self):
        assert interpolated_slab_cost(7.5, DEFAULT_TABLE) == pytest.approx(13.5)

    def test_clamped_outside_table(self):
        assert interpolated_slab_cost(2.0, DEFAULT_TABLE) == pytest.approx(10.50)
        assert interpolated_slab_cost(14.0, DEFAULT_TABLE) == pytest.approx(22.50)

    def test_unsorted_table_is_sorted(self):
        table = [SlabCostPoint(8.0, 14.0), SlabCostPoint(4.0, 11.0)]
        assert interpolated_slab_cost(6.0, table) == pytest.approx(12.5)

    @pytest.mark.parametrize("table", [
        [],
        [SlabCostPoint(5.0, 11.5)],
        [SlabCostPoint(5.0, 11.5), SlabCostPoint(5.0, 12.0)],
        [SlabCostPoint(5.0, 11.5), SlabCostPoint(6.0, float("nan"))],
        [SlabCostPoint(-1.0, 11.5), SlabCostPoint(6.0, 12.0)],
    ])
    def test_malformed_table_rejected(self, table):
        with pytest.raises(CostTableError):
            interpolated_slab_cost(6.0, table)


class TestStrengthAdjustment:
    def test_no_premium_at_reference_strength(self):
        schedule = ConcretePremiumSchedule()
        assert strength_adjusted_slab_cost(14.0, 8.0, 5000, schedule) == pytest.approx(14.0)

    def test_premium_scales_with_volume(self):
        schedule = ConcretePremiumSchedule()
        # 8 in slab: 8/12/27 cy/sf at +$30/cy
        expected = 14.0 + 8.0 / 12 / 27 * 30.0
        assert strength_adjusted_slab_cost(14.0, 8.0, 7000, schedule) == pytest.approx(expected)


class TestSteelQuantities:
    def test_straight_tendon_length(self):
        assert tendon_length(30.0, 0.0) == pytest.approx(30.6)

    def test_strand_weight(self):
        sag = 2 * 2.1375 / 12
        expected = 62 * 0.52 * (30.0 ** 2 + sag ** 2) ** 0.5 * 1.02
        assert strand_weight(62, 30.0, 2.1375) == pytest.approx(expected)

    def test_rebar_weight(self):
        # one #4 bar per foot
        assert rebar_weight_per_sf(0.2) == pytest.approx(0.668)

    def test_beam_rebar_weight(self):
        assert beam_rebar_weight(0.0018, 60.0) == pytest.approx(0.0018 * 60.0 * 490.0)


class TestCostModel:
    def test_slab_unit_cost(self, default_costs):
        cm = CostModel(default_costs)
        assert cm.slab_unit_cost(8.0, 5000) == pytest.approx(14.0)
        assert cm.slab_concrete_cost(8.0, 5000, 900.0) == pytest.approx(12600.0)

    def test_unit_rates(self, default_costs):
        cm = CostModel(default_costs)
        assert cm.formwork_cost(900.0) == pytest.approx(4.50 * 900)
        assert cm.beam_forming_cost(60.0) == pytest.approx(22.0 * 60)
        assert cm.beam_pouring_cost(60.0) == pytest.approx(22.0 * 60)
        assert cm.strand_cost(100.0) == pytest.approx(115.0)
        assert cm.rebar_cost(100.0) == pytest.approx(120.0)

    def test_overrides(self, default_costs):
        cm = CostModel(default_costs.with_overrides(pt_strand_cost_per_lb=2.0))
        assert cm.strand_cost(100.0) == pytest.approx(200.0)
