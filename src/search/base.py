"""
Candidate search framework: exhaustive grid evaluation with a min-reduce
over (total cost, grid index), run serially or mapped over worker processes.
"""

import itertools
import logging
import os
import time
from abc import ABC, abstractmethod
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from ..core.data_models import (
    CostParameters,
    DesignResult,
    ProjectInput,
    SearchDiagnostics,
    StructuralSystem,
)
from ..engines.cost_model import CostModel
from .grid import GridPoint, ParameterGrid, SearchRanges, chunked

logger = logging.getLogger(__name__)

# Grid points handed to a worker process at a time
CHUNK_SIZE = 256

# (total cost, grid index, design)
Best = Tuple[float, int, DesignResult]


@dataclass(frozen=True)
class SearchBudget:
    """Optional limits on one search run"""
    max_evaluations: Optional[int] = None
    time_limit: Optional[float] = None     # seconds

    def __post_init__(self):
        if self.max_evaluations is not None and self.max_evaluations < 1:
            raise ValueError("max_evaluations must be positive")
        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError("time_limit must be positive")


@dataclass(frozen=True)
class SearchOutcome:
    result: Optional[DesignResult]
    diagnostics: SearchDiagnostics


def _better(candidate: Optional[Best], best: Optional[Best]) -> bool:
    if candidate is None:
        return False
    if best is None:
        return True
    return (candidate[0], candidate[1]) < (best[0], best[1])


def _scan(
    search: "CandidateSearch",
    points: Iterable[GridPoint],
    deadline: Optional[float] = None,
) -> Tuple[Optional[Best], SearchDiagnostics]:
    """Evaluate points in order, keeping the cheapest feasible design"""
    diagnostics = SearchDiagnostics()
    best: Optional[Best] = None
    for point in points:
        if deadline is not None and time.monotonic() >= deadline:
            diagnostics.truncated = True
            break
        diagnostics.evaluated += 1
        result = search.evaluate(point, diagnostics)
        if result is None:
            continue
        diagnostics.feasible += 1
        candidate = (result.total_cost, point.index, result)
        if _better(candidate, best):
            best = candidate
    return best, diagnostics


class CandidateSearch(ABC):
    """
    Exhaustive search of one structural system.

    Subclasses describe the design space with grid() and score one point
    with evaluate(); run() owns enumeration, budgets and the reduction.
    """

    system: StructuralSystem

    def __init__(
        self,
        project: ProjectInput,
        costs: CostParameters,
        ranges: Optional[SearchRanges] = None,
    ):
        self.project = project
        self.costs = costs
        self.ranges = ranges or SearchRanges()
        self.cost_model = CostModel(costs)

    @property
    def plan_area(self) -> float:
        return self.project.plan_area

    @abstractmethod
    def grid(self) -> ParameterGrid:
        """Design space of this system for the bound project"""

    @abstractmethod
    def evaluate(self, point: GridPoint, diagnostics: SearchDiagnostics) -> Optional[DesignResult]:
        """
        Check one grid point.

        Returns the feasible design, or None after recording the failure
        category in diagnostics.
        """

    def run(self, workers: int = 1, budget: Optional[SearchBudget] = None) -> SearchOutcome:
        """Search the whole grid and return the cheapest feasible design"""
        budget = budget or SearchBudget()
        grid = self.grid()
        total = len(grid)
        start = time.monotonic()
        deadline = start + budget.time_limit if budget.time_limit else None

        logger.info(
            f"{self.system.label}: searching {total} grid points "
            f"(L={self.project.bay_length} ft, W={self.project.bay_width} ft, workers={workers})"
        )

        points: Iterable[GridPoint] = grid
        capped = budget.max_evaluations is not None and budget.max_evaluations < total
        if capped:
            points = itertools.islice(grid, budget.max_evaluations)

        if workers > 1:
            best, diagnostics = self._run_parallel(points, workers, deadline)
        else:
            best, diagnostics = _scan(self, points, deadline)

        diagnostics.truncated = diagnostics.truncated or capped
        diagnostics.elapsed = time.monotonic() - start
        result = best[2] if best else None

        if diagnostics.truncated:
            logger.warning(
                f"{self.system.label}: search stopped early after "
                f"{diagnostics.evaluated} of {total} points, returning best found so far"
            )
        if result is None:
            logger.info(f"{self.system.label}: no feasible design ({diagnostics.failures})")
        else:
            logger.info(
                f"{self.system.label}: best ${result.total_cost:,.0f} "
                f"({diagnostics.feasible} feasible, {diagnostics.elapsed:.2f}s)"
            )
        return SearchOutcome(result=result, diagnostics=diagnostics)

    def _run_parallel(
        self,
        points: Iterable[GridPoint],
        workers: int,
        deadline: Optional[float],
    ) -> Tuple[Optional[Best], SearchDiagnostics]:
        chunks = list(chunked(points, CHUNK_SIZE))
        if not chunks:
            return None, SearchDiagnostics()

        max_workers = max(1, min(workers, os.cpu_count() or 1, len(chunks)))
        best: Optional[Best] = None
        diagnostics = SearchDiagnostics()

        with ProcessPoolExecutor(max_workers=max_workers) as ex:
            futures = [ex.submit(_scan, self, c, deadline) for c in chunks]
            done = 0
            for future in as_completed(futures):
                chunk_best, chunk_diagnostics = future.result()
                diagnostics.merge(chunk_diagnostics)
                if _better(chunk_best, best):
                    best = chunk_best
                done += 1
                logger.debug(f"{self.system.label}: {done}/{len(chunks)} chunks evaluated")

        return best, diagnostics
