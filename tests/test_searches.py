"""
Tests for the three system searches and the search framework.

Uses narrowed ranges around designs verified by hand at a 30 x 30 ft bay
so each search evaluates only a handful of grid points.
"""

import pytest

from conftest import make_design

from src.core.data_models import (
    CostBreakdown,
    FailureReason,
    ProjectInput,
    SearchDiagnostics,
    StructuralSystem,
)
from src.search.base import SearchBudget, _better
from src.search.flat_plate import FlatPlateSearch
from src.search.grid import GridPoint, SearchRanges
from src.search.one_way_beam import OneWayBeamSearch
from src.search.two_way_beam import TwoWayBeamSearch


def assert_valid_design(result):
    assert result is not None
    assert result.checks and all(result.checks.values())
    assert result.total_cost == pytest.approx(sum(result.cost.to_dict().values()))
    assert result.total_cost > 0
    assert result.num_strands > 0
    assert result.avg_prestress >= 175.0


class TestFlatPlateSearch:
    def test_min_thickness(self, parking_bay, default_costs):
        # 30 ft x 12 / 50 = 7.2 -> 8 in
        assert FlatPlateSearch(parking_bay, default_costs).min_thickness() == 8

    def test_grid_axes(self, parking_bay, default_costs, narrow_ranges):
        grid = FlatPlateSearch(parking_bay, default_costs, narrow_ranges).grid()
        assert [axis.name for axis in grid.axes] == [
            "concrete_strength", "thickness", "balance_ratio", "eccentricity_ratio",
        ]
        assert len(grid) == 1 * 3 * 2 * 2

    def test_finds_feasible_design(self, parking_bay, default_costs, narrow_ranges):
        outcome = FlatPlateSearch(parking_bay, default_costs, narrow_ranges).run()
        result = outcome.result
        assert_valid_design(result)
        assert result.system is StructuralSystem.FLAT_PLATE
        assert result.beam_width is None
        assert outcome.diagnostics.evaluated == 12
        assert outcome.diagnostics.feasible >= 1
        assert not outcome.diagnostics.truncated

    def test_no_worse_than_hand_check_design(self, parking_bay, default_costs, narrow_ranges):
        search = FlatPlateSearch(parking_bay, default_costs, narrow_ranges)
        point = GridPoint(0, {
            "concrete_strength": 5000, "thickness": 8.0,
            "balance_ratio": 1.0, "eccentricity_ratio": 0.95,
        })
        reference = search.evaluate(point, SearchDiagnostics())
        assert reference is not None
        assert search.run().result.total_cost <= reference.total_cost

    def test_idempotent(self, parking_bay, default_costs, narrow_ranges):
        first = FlatPlateSearch(parking_bay, default_costs, narrow_ranges).run().result
        second = FlatPlateSearch(parking_bay, default_costs, narrow_ranges).run().result
        assert first.to_dict() == second.to_dict()

    def test_strand_cost_monotonic(self, parking_bay, default_costs, narrow_ranges):
        cheap = FlatPlateSearch(parking_bay, default_costs, narrow_ranges).run().result
        dear_costs = default_costs.with_overrides(pt_strand_cost_per_lb=5.0)
        dear = FlatPlateSearch(parking_bay, dear_costs, narrow_ranges).run().result
        assert dear.total_cost >= cheap.total_cost

    def test_thin_slab_boundary_pruned(self, default_costs):
        """A 20 ft bay at 5 in: e_max = 0.75 in is below the 1 in minimum."""
        project = ProjectInput(bay_length=20.0, bay_width=20.0)
        ranges = SearchRanges(flat_plate_max_thickness=5.0)
        outcome = FlatPlateSearch(project, default_costs, ranges).run()
        assert outcome.result is None
        assert outcome.diagnostics.pruned > 0
        assert outcome.diagnostics.pruned == outcome.diagnostics.evaluated

    def test_empty_grid(self, parking_bay, default_costs, empty_ranges):
        outcome = FlatPlateSearch(parking_bay, default_costs, empty_ranges).run()
        assert outcome.result is None
        assert outcome.diagnostics.evaluated == 0


class TestOneWayBeamSearch:
    def test_slab_geometry(self, parking_bay, default_costs):
        search = OneWayBeamSearch(parking_bay, default_costs)
        assert search.clear_span(12.0) == pytest.approx(29.0)
        # 29 ft x 12 / 48 = 7.25 -> 8 in
        assert search.min_slab_thickness(12.0) == 8

    def test_finds_feasible_design(self, parking_bay, default_costs, narrow_ranges):
        outcome = OneWayBeamSearch(parking_bay, default_costs, narrow_ranges).run()
        result = outcome.result
        assert_valid_design(result)
        assert result.system is StructuralSystem.ONE_WAY_BEAM
        assert result.beam_width == 12.0
        assert result.beam_depth > result.slab_thickness
        assert result.checks["beam_stresses"]
        assert result.checks["beam_moment"]
        assert result.cost.beam_forming > 0
        assert result.cost.beam_pouring == pytest.approx(result.cost.beam_forming)

    def test_candidate_web_depth(self, parking_bay, default_costs, narrow_ranges):
        result = OneWayBeamSearch(parking_bay, default_costs, narrow_ranges).run().result
        candidate = result.candidate
        assert candidate.beam_depth == pytest.approx(result.beam_depth - result.slab_thickness)
        assert candidate.beam_depth in (18, 20, 22, 24)

    def test_below_min_thickness_recorded(self, parking_bay, default_costs):
        """The thickness axis starts at the widest beam's minimum slab."""
        ranges = SearchRanges(
            concrete_strengths=(5000,),
            one_way_beam_width=(12, 24, 12),
            one_way_slab_max_thickness=7.0,
            beam_max_depth=20,
        )
        search = OneWayBeamSearch(parking_bay, default_costs, ranges)
        # 24 in beams: 28 ft clear -> 7 in; 12 in beams: 29 ft clear -> 8 in
        assert search.min_slab_thickness(24.0) == 7
        assert search.min_slab_thickness(12.0) == 8
        outcome = search.run()
        assert outcome.diagnostics.evaluated == 4
        assert outcome.diagnostics.failure_count(FailureReason.BELOW_MIN_THICKNESS) == 2


class TestTwoWayBeamSearch:
    def test_min_slab_thickness(self, parking_bay, default_costs):
        # 30 ft x 12 / 55 = 6.5 -> 7 in
        assert TwoWayBeamSearch(parking_bay, default_costs).min_slab_thickness() == 7

    def test_finds_feasible_design(self, parking_bay, default_costs, narrow_ranges):
        outcome = TwoWayBeamSearch(parking_bay, default_costs, narrow_ranges).run()
        result = outcome.result
        assert_valid_design(result)
        assert result.system is StructuralSystem.TWO_WAY_BEAM
        assert result.aspect_ratio == pytest.approx(1.0)
        assert result.checks["beam_moment"]

    def test_strengths_follow_bay_length(self, default_costs):
        """A 24 ft bay skips 12000 psi even when the long side is 30 ft."""
        project = ProjectInput(bay_length=24.0, bay_width=30.0)
        two_way = TwoWayBeamSearch(project, default_costs).grid().axes[0]
        flat = FlatPlateSearch(project, default_costs).grid().axes[0]
        assert two_way.name == "concrete_strength"
        assert two_way.values == flat.values == (5000, 7000, 10000)

    def test_square_bay_beam_loads(self, parking_bay, default_costs):
        loads = TwoWayBeamSearch(parking_bay, default_costs).beam_loads(7.0, 12.0, 24.0)
        assert loads["long"].dead == pytest.approx(loads["short"].dead)
        # 87.5 psf x 30 ft x 0.5 + 300 plf stem
        assert loads["long"].dead == pytest.approx(1612.5)
        assert loads["long"].live == pytest.approx(600.0)


class TestSearchFramework:
    def test_parallel_matches_serial(self, parking_bay, default_costs, narrow_ranges):
        serial = FlatPlateSearch(parking_bay, default_costs, narrow_ranges).run(workers=1)
        parallel = FlatPlateSearch(parking_bay, default_costs, narrow_ranges).run(workers=2)
        assert parallel.result.to_dict() == serial.result.to_dict()
        assert parallel.diagnostics.evaluated == serial.diagnostics.evaluated
        assert parallel.diagnostics.failures == serial.diagnostics.failures

    def test_tie_break_by_grid_index(self):
        design = make_design()
        assert _better((100.0, 3, design), (100.0, 5, design))
        assert not _better((100.0, 5, design), (100.0, 3, design))
        assert _better((99.0, 9, design), (100.0, 1, design))
        assert _better((100.0, 0, design), None)
        assert not _better(None, (100.0, 0, design))

    def test_evaluation_budget(self, parking_bay, default_costs, narrow_ranges):
        outcome = FlatPlateSearch(parking_bay, default_costs, narrow_ranges).run(
            budget=SearchBudget(max_evaluations=3)
        )
        assert outcome.diagnostics.evaluated == 3
        assert outcome.diagnostics.truncated

    def test_budget_above_grid_size(self, parking_bay, default_costs, narrow_ranges):
        outcome = FlatPlateSearch(parking_bay, default_costs, narrow_ranges).run(
            budget=SearchBudget(max_evaluations=1000)
        )
        assert outcome.diagnostics.evaluated == 12
        assert not outcome.diagnostics.truncated

    @pytest.mark.parametrize("kwargs", [{"max_evaluations": 0}, {"time_limit": 0}, {"time_limit": -1.0}])
    def test_invalid_budget(self, kwargs):
        with pytest.raises(ValueError):
            SearchBudget(**kwargs)

    def test_diagnostics_merge(self):
        a = SearchDiagnostics(evaluated=3, feasible=1, failures={"camber": 2})
        b = SearchDiagnostics(evaluated=2, failures={"camber": 1, "deflection": 1}, truncated=True)
        a.merge(b)
        assert a.evaluated == 5
        assert a.failures == {"camber": 3, "deflection": 1}
        assert a.truncated
        assert a.failure_count(FailureReason.DEFLECTION) == 1

    def test_cost_breakdown_total(self):
        cost = CostBreakdown(concrete=1.0, formwork=2.0, beam_forming=3.0,
                             beam_pouring=4.0, pt_strand=5.0, mild_steel=6.0)
        assert cost.total == pytest.approx(21.0)
