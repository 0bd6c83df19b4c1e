"""
Parameter grids for the candidate searches.

Every discretization of the design space lives in SearchRanges so the
searches, the benchmark script and the tests all enumerate the same
points. Grids are explicit generators: each point carries its position in
the enumeration, which is the tie-break when two designs cost the same.
"""

import itertools
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

from ..core.constants import (
    CONCRETE_STRENGTHS,
    HIGH_STRENGTH_SPAN_RULES,
    MAX_FLAT_PLATE_THICKNESS,
    MAX_ONE_WAY_SLAB_THICKNESS,
    MAX_TWO_WAY_SLAB_THICKNESS,
    MAX_BEAM_DEPTH,
)

# (start, stop, step), both ends inclusive
Range = Tuple[float, float, float]


def frange(start: float, stop: float, step: float) -> Tuple[float, ...]:
    """
    Inclusive float range computed from an integer index.

    Values are start + i*step rounded to 10 places, so the sequence never
    accumulates drift and always reaches stop when stop is on the lattice.
    """
    if step <= 0:
        raise ValueError(f"Range step must be positive, got {step}")
    if start > stop:
        return ()
    count = int(math.floor((stop - start) / step + 1e-9)) + 1
    return tuple(round(start + i * step, 10) for i in range(count))


@dataclass(frozen=True)
class ParameterAxis:
    name: str
    values: Tuple[float, ...]

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class GridPoint:
    """One point of a parameter grid and its enumeration index"""
    index: int
    values: Dict[str, float]

    def __getitem__(self, name: str) -> float:
        return self.values[name]


class ParameterGrid:
    """Cartesian product of parameter axes, first axis varying slowest"""

    def __init__(self, axes: Sequence[ParameterAxis]):
        self.axes = tuple(axes)

    def __len__(self) -> int:
        return math.prod(len(axis) for axis in self.axes)

    def __iter__(self) -> Iterator[GridPoint]:
        names = [axis.name for axis in self.axes]
        for index, combo in enumerate(itertools.product(*(axis.values for axis in self.axes))):
            yield GridPoint(index=index, values=dict(zip(names, combo)))

    def __repr__(self) -> str:
        shape = " x ".join(f"{axis.name}[{len(axis)}]" for axis in self.axes)
        return f"ParameterGrid({shape})"


def chunked(points: Iterable[GridPoint], size: int) -> Iterator[List[GridPoint]]:
    """Consecutive runs of at most size points, in order"""
    chunk: List[GridPoint] = []
    for point in points:
        chunk.append(point)
        if len(chunk) >= size:
            yield chunk
            chunk = []
    if chunk:
        yield chunk


@dataclass(frozen=True)
class SearchRanges:
    """Discretization of every search parameter"""
    concrete_strengths: Tuple[float, ...] = CONCRETE_STRENGTHS
    thickness_step: float = 0.5

    # Flat plate
    flat_plate_max_thickness: float = MAX_FLAT_PLATE_THICKNESS
    flat_plate_balance: Range = (0.6, 1.1, 0.05)
    flat_plate_eccentricity: Range = (0.6, 0.95, 0.05)

    # Slabs between beams
    one_way_slab_max_thickness: float = MAX_ONE_WAY_SLAB_THICKNESS
    two_way_slab_max_thickness: float = MAX_TWO_WAY_SLAB_THICKNESS
    slab_balance: Range = (0.6, 1.1, 0.1)
    slab_eccentricity: Range = (0.6, 0.95, 0.05)

    # Beams
    one_way_beam_width: Range = (12, 24, 2)
    two_way_beam_width: Range = (12, 20, 2)
    beam_depth_step: float = 2
    beam_max_depth: float = MAX_BEAM_DEPTH
    one_way_beam_balance: Range = (0.7, 1.1, 0.05)
    two_way_beam_balance: Range = (0.8, 1.1, 0.05)
    beam_eccentricity: Range = (0.7, 0.95, 0.05)

    span_rules: Tuple[Tuple[float, float], ...] = field(default=HIGH_STRENGTH_SPAN_RULES)

    def strengths_for_span(self, span_ft: float) -> Tuple[float, ...]:
        """Concrete strengths worth searching at this span"""
        return tuple(
            fc for fc in self.concrete_strengths
            if all(not (fc > limit and span_ft < min_span) for limit, min_span in self.span_rules)
        )
