"""
Cost Model
Concrete price premiums, slab unit-cost interpolation and steel quantities
"""

import math
from typing import Sequence

from ..core.constants import (
    CUBIC_FEET_PER_CUBIC_YARD,
    STRAND_WEIGHT_PER_FT,
    ANCHORAGE_ALLOWANCE,
    REBAR_BAR_AREA,
    REBAR_WEIGHT_PER_FT,
    STEEL_UNIT_WEIGHT,
)
from ..core.data_models import (
    ConcretePremiumSchedule,
    CostParameters,
    SlabCostPoint,
    validate_cost_table,
)


def base_concrete_cost(fc: float, schedule: ConcretePremiumSchedule) -> float:
    """
    Ready-mix price ($/cy) for a specified strength.

    Flat up to the reference strength, then premium_per_ksi per 1000 psi up
    to the first threshold, then high_premium_per_ksi per 1000 psi beyond
    the second threshold.
    """
    cost = schedule.base_cost_per_cy
    if fc <= schedule.reference_strength:
        return cost

    first_band = min(fc, schedule.first_threshold) - schedule.reference_strength
    cost += schedule.premium_per_ksi * first_band / 1000

    if fc > schedule.second_threshold:
        cost += schedule.high_premium_per_ksi * (fc - schedule.second_threshold) / 1000

    return cost


def interpolated_slab_cost(thickness: float, table: Sequence[SlabCostPoint]) -> float:
    """
    Slab unit cost ($/sf) by linear interpolation of the cost table.

    Thicknesses outside the table take the boundary unit cost. Raises
    CostTableError for a malformed table.
    """
    return _interpolate(thickness, validate_cost_table(table))


def _interpolate(thickness: float, points: Sequence[SlabCostPoint]) -> float:
    # points must already be validated and sorted
    if thickness <= points[0].thickness:
        return points[0].cost_per_sf
    if thickness >= points[-1].thickness:
        return points[-1].cost_per_sf

    for lower, upper in zip(points, points[1:]):
        if lower.thickness <= thickness <= upper.thickness:
            fraction = (thickness - lower.thickness) / (upper.thickness - lower.thickness)
            return lower.cost_per_sf + fraction * (upper.cost_per_sf - lower.cost_per_sf)

    raise ValueError(f"Thickness {thickness} not bracketed by cost table")


def strength_adjusted_slab_cost(
    base_cost: float,
    thickness: float,
    fc: float,
    schedule: ConcretePremiumSchedule,
) -> float:
    """Slab unit cost ($/sf) with the concrete premium over the reference strength"""
    volume_per_sf = thickness / 12 / CUBIC_FEET_PER_CUBIC_YARD   # cy/sf
    premium = (
        base_concrete_cost(fc, schedule)
        - base_concrete_cost(schedule.reference_strength, schedule)
    )
    return base_cost + volume_per_sf * premium


def tendon_length(span_ft: float, eccentricity: float) -> float:
    """Draped tendon length (ft) including the anchorage allowance"""
    sag_ft = 2 * eccentricity / 12
    return math.sqrt(span_ft ** 2 + sag_ft ** 2) * ANCHORAGE_ALLOWANCE


def strand_weight(num_strands: int, span_ft: float, eccentricity: float) -> float:
    """Total strand weight (lb) for a group of tendons"""
    return num_strands * STRAND_WEIGHT_PER_FT * tendon_length(span_ft, eccentricity)


def rebar_weight_per_sf(area_per_ft: float) -> float:
    """#4 bar weight (lb/sf) for a steel area given per foot of width"""
    return area_per_ft / REBAR_BAR_AREA * REBAR_WEIGHT_PER_FT


def beam_rebar_weight(ratio: float, stem_volume_cf: float) -> float:
    """Longitudinal beam steel (lb) as a ratio of the stem volume"""
    return ratio * stem_volume_cf * STEEL_UNIT_WEIGHT


class CostModel:
    """
    Cost calculator bound to one set of unit costs.
    Pure: every method depends only on its arguments and the bound costs.
    """

    def __init__(self, costs: CostParameters):
        self.costs = costs
        self.schedule = costs.premium_schedule

    def slab_unit_cost(self, thickness: float, fc: float) -> float:
        """Strength-adjusted slab concrete cost ($/sf)"""
        base = _interpolate(thickness, self.costs.pt_slab_costs)
        return strength_adjusted_slab_cost(base, thickness, fc, self.schedule)

    def slab_concrete_cost(self, thickness: float, fc: float, area_sf: float) -> float:
        return self.slab_unit_cost(thickness, fc) * area_sf

    def formwork_cost(self, area_sf: float) -> float:
        return self.costs.pt_formwork_cost_per_sf * area_sf

    def beam_forming_cost(self, volume_cf: float) -> float:
        return self.costs.beam_forming_cost_per_cf * volume_cf

    def beam_pouring_cost(self, volume_cf: float) -> float:
        return self.costs.beam_pouring_cost_per_cf * volume_cf

    def strand_cost(self, weight_lb: float) -> float:
        return self.costs.pt_strand_cost_per_lb * weight_lb

    def rebar_cost(self, weight_lb: float) -> float:
        return self.costs.mild_steel_cost_per_lb * weight_lb
