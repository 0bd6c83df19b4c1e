import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.core.data_models import (
    CostBreakdown,
    CostParameters,
    DesignResult,
    MildSteelDetails,
    OptimizationResults,
    ProjectInput,
    SearchDiagnostics,
    SpanComparison,
    StructuralSystem,
)
from src.core.constants import INFEASIBLE_UNIT_COST
from src.search.grid import SearchRanges


@pytest.fixture
def default_costs() -> CostParameters:
    return CostParameters()


@pytest.fixture
def parking_bay() -> ProjectInput:
    """30 x 30 ft parking bay"""
    return ProjectInput(bay_length=30.0, bay_width=30.0, name="Test Garage")


@pytest.fixture
def narrow_ranges() -> SearchRanges:
    """Small grids around designs known to pass at a 30 x 30 ft bay."""
    return SearchRanges(
        concrete_strengths=(5000,),
        flat_plate_max_thickness=9.0,
        flat_plate_balance=(0.9, 1.0, 0.1),
        flat_plate_eccentricity=(0.9, 0.95, 0.05),
        one_way_slab_max_thickness=8.5,
        two_way_slab_max_thickness=7.5,
        one_way_beam_width=(12, 12, 2),
        two_way_beam_width=(12, 12, 2),
        beam_max_depth=24,
    )


@pytest.fixture
def empty_ranges() -> SearchRanges:
    """Ranges whose maximum thicknesses sit below every minimum at 30 ft."""
    return SearchRanges(
        concrete_strengths=(5000,),
        flat_plate_max_thickness=5.0,
        one_way_slab_max_thickness=4.0,
        two_way_slab_max_thickness=3.0,
    )


def make_design(system=StructuralSystem.FLAT_PLATE, concrete=12600.0, **overrides) -> DesignResult:
    values = dict(
        system=system,
        slab_thickness=8.0,
        concrete_strength=5000.0,
        balance_ratio=1.0,
        eccentricity=2.1375,
        eccentricity_ratio=0.95,
        prestress_force=50526.3,
        avg_prestress=526.3,
        num_strands=62,
        cost=CostBreakdown(concrete=concrete, formwork=4050.0, pt_strand=1134.6, mild_steel=7791.6),
        weight_per_sf=109.3,
        mild_steel=MildSteelDetails(
            governing_case="two-way negative moment",
            area=2.16,
            ratio=0.0277,
            weight_per_sf=7.2144,
            cost_per_sf=8.657,
        ),
        checks={"stress_transfer": True, "stress_service": True, "moment": True},
    )
    values.update(overrides)
    return DesignResult(**values)


@pytest.fixture
def sample_results() -> OptimizationResults:
    """Flat plate feasible and optimal, both beam systems infeasible."""
    design = make_design()
    diagnostics = SearchDiagnostics(evaluated=12, feasible=4, failures={"stress_service": 8}, elapsed=0.1)
    return OptimizationResults(
        flat_plate=design,
        optimal_system=StructuralSystem.FLAT_PLATE.value,
        comparisons=[
            SpanComparison(span=24.0, flat_plate_cost=23.10),
            SpanComparison(span=30.0, flat_plate_cost=design.total_cost / 900.0,
                           one_way_beam_cost=INFEASIBLE_UNIT_COST),
        ],
        diagnostics={
            StructuralSystem.FLAT_PLATE.value: diagnostics,
            StructuralSystem.ONE_WAY_BEAM.value: SearchDiagnostics(
                evaluated=8, failures={"no_beam_prestress": 8}),
            StructuralSystem.TWO_WAY_BEAM.value: SearchDiagnostics(
                evaluated=8, failures={"no_slab_prestress": 8}, truncated=True),
        },
    )
