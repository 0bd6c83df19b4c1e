"""
System Comparator
Runs the three system searches for a bay and across the reference spans
"""

import dataclasses
import logging
from typing import Dict, Optional, Sequence, Type

from ..core.config import EngineConfig
from ..core.constants import INFEASIBLE_UNIT_COST
from ..core.data_models import (
    NO_FEASIBLE_SYSTEM,
    CostParameters,
    OptimizationResults,
    ProjectInput,
    SpanComparison,
    StructuralSystem,
)
from .base import CandidateSearch, SearchBudget, SearchOutcome
from .flat_plate import FlatPlateSearch
from .grid import SearchRanges
from .one_way_beam import OneWayBeamSearch
from .two_way_beam import TwoWayBeamSearch

logger = logging.getLogger(__name__)

# Fixed order; earlier systems win exact cost ties
SEARCHES: Dict[StructuralSystem, Type[CandidateSearch]] = {
    StructuralSystem.FLAT_PLATE: FlatPlateSearch,
    StructuralSystem.ONE_WAY_BEAM: OneWayBeamSearch,
    StructuralSystem.TWO_WAY_BEAM: TwoWayBeamSearch,
}


def unit_cost(outcome: SearchOutcome, span: float, bay_width: float) -> float:
    """Cost per plan area ($/sf), or the infeasible sentinel"""
    if outcome.result is None:
        return INFEASIBLE_UNIT_COST
    return outcome.result.total_cost / (span * bay_width)


def select_optimal(outcomes: Dict[StructuralSystem, SearchOutcome]) -> str:
    """Cheapest feasible system, or "none" when nothing is feasible"""
    best: Optional[StructuralSystem] = None
    best_cost = float("inf")
    for system in SEARCHES:
        outcome = outcomes.get(system)
        if outcome is None or outcome.result is None:
            continue
        if outcome.result.total_cost < best_cost:
            best, best_cost = system, outcome.result.total_cost
    return best.value if best else NO_FEASIBLE_SYSTEM


class SystemComparator:
    """
    Compares flat plate, one-way and two-way beam systems for one project.

    The requested bay is searched once; the comparison table repeats the
    searches with the bay length replaced by each reference span and the
    bay width held fixed.
    """

    def __init__(
        self,
        costs: CostParameters,
        config: Optional[EngineConfig] = None,
        ranges: Optional[SearchRanges] = None,
    ):
        self.costs = costs
        self.config = config or EngineConfig()
        self.ranges = ranges or SearchRanges()
        self.budget = SearchBudget(
            max_evaluations=self.config.max_evaluations,
            time_limit=self.config.time_limit,
        )

    def search_bay(self, project: ProjectInput) -> Dict[StructuralSystem, SearchOutcome]:
        outcomes = {}
        for system, search_cls in SEARCHES.items():
            search = search_cls(project, self.costs, self.ranges)
            outcomes[system] = search.run(workers=self.config.workers, budget=self.budget)
        return outcomes

    def comparison_row(
        self,
        span: float,
        bay_width: float,
        outcomes: Dict[StructuralSystem, SearchOutcome],
    ) -> SpanComparison:
        return SpanComparison(
            span=span,
            flat_plate_cost=unit_cost(outcomes[StructuralSystem.FLAT_PLATE], span, bay_width),
            one_way_beam_cost=unit_cost(outcomes[StructuralSystem.ONE_WAY_BEAM], span, bay_width),
            two_way_beam_cost=unit_cost(outcomes[StructuralSystem.TWO_WAY_BEAM], span, bay_width),
        )

    def compare(
        self,
        project: ProjectInput,
        reference_spans: Optional[Sequence[float]] = None,
    ) -> OptimizationResults:
        spans = tuple(reference_spans if reference_spans is not None else self.config.reference_spans)
        logger.info(
            f"Optimizing {project.name}: {project.bay_length} x {project.bay_width} ft bay, "
            f"{len(spans)} reference spans"
        )

        outcomes = self.search_bay(project)
        optimal = select_optimal(outcomes)
        logger.info(f"Optimal system for {project.name}: {optimal}")

        comparisons = []
        for span in spans:
            if span == project.bay_length:
                span_outcomes = outcomes
            else:
                logger.debug(f"Comparison span {span} ft")
                span_outcomes = self.search_bay(dataclasses.replace(project, bay_length=span))
            comparisons.append(self.comparison_row(span, project.bay_width, span_outcomes))

        return OptimizationResults(
            flat_plate=outcomes[StructuralSystem.FLAT_PLATE].result,
            one_way_beam=outcomes[StructuralSystem.ONE_WAY_BEAM].result,
            two_way_beam=outcomes[StructuralSystem.TWO_WAY_BEAM].result,
            optimal_system=optimal,
            comparisons=comparisons,
            diagnostics={system.value: outcome.diagnostics for system, outcome in outcomes.items()},
        )


def compute_optimization(
    bay_length: float,
    bay_width: float,
    cost_parameters: CostParameters,
    config: Optional[EngineConfig] = None,
    ranges: Optional[SearchRanges] = None,
    reference_spans: Optional[Sequence[float]] = None,
    project: Optional[ProjectInput] = None,
) -> OptimizationResults:
    """
    Optimize one bay and build the span comparison table.

    Pure: the result depends only on the arguments. An existing project
    record may be passed to carry its name and occupancy.
    """
    if project is None:
        project = ProjectInput(bay_length=bay_length, bay_width=bay_width)
    else:
        project = dataclasses.replace(project, bay_length=bay_length, bay_width=bay_width)
    comparator = SystemComparator(cost_parameters, config=config, ranges=ranges)
    return comparator.compare(project, reference_spans=reference_spans)
