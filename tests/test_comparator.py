"""
Tests for the system comparator and compute_optimization.
"""

import math

import pytest

from src.core.config import EngineConfig
from src.core.constants import INFEASIBLE_UNIT_COST, REFERENCE_SPANS
from src.core.data_models import (
    NO_FEASIBLE_SYSTEM,
    Occupancy,
    ProjectInput,
    SearchDiagnostics,
    StructuralSystem,
)
from src.search.base import SearchOutcome
from src.search.comparator import SystemComparator, compute_optimization, select_optimal, unit_cost

from conftest import make_design


class TestUnitCost:
    def test_feasible(self):
        outcome = SearchOutcome(make_design(), SearchDiagnostics())
        assert unit_cost(outcome, 30.0, 30.0) == pytest.approx(outcome.result.total_cost / 900.0)

    def test_infeasible_sentinel(self):
        assert unit_cost(SearchOutcome(None, SearchDiagnostics()), 30.0, 30.0) == INFEASIBLE_UNIT_COST


class TestSelectOptimal:
    def test_cheapest_wins(self):
        outcomes = {
            StructuralSystem.FLAT_PLATE: SearchOutcome(make_design(concrete=20000.0), SearchDiagnostics()),
            StructuralSystem.ONE_WAY_BEAM: SearchOutcome(
                make_design(StructuralSystem.ONE_WAY_BEAM, concrete=10000.0), SearchDiagnostics()),
            StructuralSystem.TWO_WAY_BEAM: SearchOutcome(None, SearchDiagnostics()),
        }
        assert select_optimal(outcomes) == StructuralSystem.ONE_WAY_BEAM.value

    def test_tie_goes_to_earlier_system(self):
        outcomes = {
            StructuralSystem.TWO_WAY_BEAM: SearchOutcome(
                make_design(StructuralSystem.TWO_WAY_BEAM), SearchDiagnostics()),
            StructuralSystem.ONE_WAY_BEAM: SearchOutcome(
                make_design(StructuralSystem.ONE_WAY_BEAM), SearchDiagnostics()),
        }
        assert select_optimal(outcomes) == StructuralSystem.ONE_WAY_BEAM.value

    def test_nothing_feasible(self):
        outcomes = {system: SearchOutcome(None, SearchDiagnostics()) for system in StructuralSystem}
        assert select_optimal(outcomes) == NO_FEASIBLE_SYSTEM


class TestComputeOptimization:
    def test_all_systems_feasible(self, default_costs, narrow_ranges):
        results = compute_optimization(30.0, 30.0, default_costs, ranges=narrow_ranges,
                                       reference_spans=(30.0,))
        assert results.has_feasible_design
        costs = {s: results.result_for(s).total_cost for s in StructuralSystem}
        assert results.optimal_system == min(costs, key=costs.get).value
        assert results.optimal_result.total_cost == pytest.approx(min(costs.values()))

    def test_comparison_reuses_bay_results(self, default_costs, narrow_ranges):
        results = compute_optimization(30.0, 30.0, default_costs, ranges=narrow_ranges,
                                       reference_spans=(30.0,))
        assert len(results.comparisons) == 1
        row = results.comparisons[0]
        for system in StructuralSystem:
            value = row.cost_for(system)
            assert math.isfinite(value) and value >= 0
            assert value == pytest.approx(results.result_for(system).total_cost / 900.0)

    def test_additional_span(self, default_costs, narrow_ranges):
        results = compute_optimization(30.0, 30.0, default_costs, ranges=narrow_ranges,
                                       reference_spans=(24.0, 30.0))
        assert [row.span for row in results.comparisons] == [24.0, 30.0]
        for row in results.comparisons:
            for system in StructuralSystem:
                value = row.cost_for(system)
                assert value == INFEASIBLE_UNIT_COST or (math.isfinite(value) and value >= 0)

    def test_reference_span_table(self, default_costs, narrow_ranges):
        results = compute_optimization(30.0, 30.0, default_costs, config=EngineConfig(), ranges=narrow_ranges)
        assert [row.span for row in results.comparisons] == list(REFERENCE_SPANS)
        for row in results.comparisons:
            for system in StructuralSystem:
                value = row.cost_for(system)
                assert value is not None and not math.isnan(value)
                assert value == INFEASIBLE_UNIT_COST or (math.isfinite(value) and value >= 0)

    def test_no_feasible_system(self, default_costs, empty_ranges):
        results = compute_optimization(30.0, 30.0, default_costs, ranges=empty_ranges,
                                       reference_spans=(30.0,))
        assert results.optimal_system == NO_FEASIBLE_SYSTEM
        assert not results.has_feasible_design
        assert results.optimal_result is None
        row = results.comparisons[0]
        assert all(row.cost_for(s) == INFEASIBLE_UNIT_COST for s in StructuralSystem)

    def test_diagnostics_per_system(self, default_costs, narrow_ranges):
        results = compute_optimization(30.0, 30.0, default_costs, ranges=narrow_ranges,
                                       reference_spans=(30.0,))
        assert set(results.diagnostics) == {s.value for s in StructuralSystem}
        assert results.diagnostics["flat_plate"].evaluated == 12

    def test_pure(self, default_costs, narrow_ranges):
        first = compute_optimization(30.0, 30.0, default_costs, ranges=narrow_ranges,
                                     reference_spans=(30.0,))
        second = compute_optimization(30.0, 30.0, default_costs, ranges=narrow_ranges,
                                      reference_spans=(30.0,))
        assert first.optimal_system == second.optimal_system
        for system in StructuralSystem:
            assert first.result_for(system).to_dict() == second.result_for(system).to_dict()

    def test_comparator_with_general_occupancy(self, default_costs, empty_ranges):
        project = ProjectInput(bay_length=20.0, bay_width=20.0, name="Level 2",
                               occupancy=Occupancy.GENERAL)
        comparator = SystemComparator(default_costs, EngineConfig(reference_spans=(30.0,)), empty_ranges)
        results = comparator.compare(project)
        assert [row.span for row in results.comparisons] == [30.0]

    def test_config_spans_used_by_default(self, default_costs, empty_ranges):
        config = EngineConfig(reference_spans=(18.0, 24.0))
        results = compute_optimization(30.0, 30.0, default_costs, config=config, ranges=empty_ranges)
        assert [row.span for row in results.comparisons] == [18.0, 24.0]
