"""
Design of a one-foot post-tensioned slab strip for one trial point.

Shared by all three systems: a flat plate is a strip spanning the bay,
beam-supported slabs are strips spanning between beams. Checks run in a
fixed order and the first failure ends the evaluation.
"""

import math
from dataclasses import dataclass
from typing import Dict, Sequence, Union

from ..core.constants import (
    CONCRETE_UNIT_WEIGHT,
    CONTINUOUS_MOMENT_COEFFICIENT,
    PARKING_LIVE_LOAD,
    SERVICE_LIVE_LOAD_FRACTION,
    SLAB_EFFECTIVE_DEPTH_OFFSET,
    STRAND_AREA,
    STRIP_WIDTH,
)
from ..core.data_models import FailureReason, MildSteelDetails, Occupancy
from ..engines.capacity import (
    DeflectionCheck,
    check_deflection,
    check_moment_capacity,
    check_punching_shear,
    factored_moment,
    meets_min_prestress,
)
from ..engines.cost_model import strand_weight
from ..engines.materials import (
    cover_requirement,
    effective_strand_stress,
    loss_ratio,
    stress_limits,
)
from ..engines.rebar import size_mild_steel
from ..engines.section import slab_strip
from ..engines.stress import StressCheck, check_stresses


@dataclass(frozen=True)
class StripConditions:
    """Span, support and load conditions of a slab strip"""
    span_ft: float                  # tendon span
    distribution_width_ft: float    # width over which the tendons are spread
    longer_span_ft: float           # longer bay dimension, for negative steel
    eccentricity_offset: float      # e_max = h/2 - cover - offset
    min_eccentricity: float         # smaller e_max is pruned
    occupancy: Occupancy
    steel_cost_per_lb: float
    load_share: float = 1.0         # share of the slab load carried in this direction
    two_way: bool = False


@dataclass(frozen=True)
class StripDesign:
    """A slab strip that passed every check"""
    concrete_strength: float
    thickness: float
    balance_ratio: float
    eccentricity_ratio: float
    eccentricity: float
    prestress_force: float      # Pe, lb/ft
    avg_prestress: float        # psi
    num_strands: int
    strand_weight: float        # lb, all tendons of the bay in this direction
    mild_steel: MildSteelDetails
    stresses: StressCheck
    deflection: DeflectionCheck
    checks: Dict[str, bool]


def slab_moments(thickness: float, span_ft: float, load_share: float = 1.0):
    """Dead and live moments (in-lb per ft) on a continuous strip"""
    dead_load = CONCRETE_UNIT_WEIGHT * thickness / 12 * load_share    # plf
    live_load = PARKING_LIVE_LOAD * load_share                        # plf
    factor = CONTINUOUS_MOMENT_COEFFICIENT * span_ft ** 2 * 12
    return dead_load * factor, live_load * factor


def max_slab_eccentricity(thickness: float, fc: float, offset: float) -> float:
    return thickness / 2 - cover_requirement(fc) - offset


def design_strip(
    fc: float,
    thickness: float,
    balance_ratio: float,
    eccentricity_ratio: float,
    conditions: StripConditions,
) -> Union[StripDesign, FailureReason]:
    """Evaluate one strip, returning the design or the first failed check"""
    e_max = max_slab_eccentricity(thickness, fc, conditions.eccentricity_offset)
    if e_max < conditions.min_eccentricity:
        return FailureReason.ECCENTRICITY_TOO_SMALL
    e = eccentricity_ratio * e_max

    section = slab_strip(thickness)
    dead_moment, live_moment = slab_moments(thickness, conditions.span_ft, conditions.load_share)

    # Load balancing: P e = balance x dead load moment
    pe = balance_ratio * dead_moment / e
    pi = pe / loss_ratio(fc)

    stresses = check_stresses(
        section, pi, pe, e,
        dead_moment,
        dead_moment + SERVICE_LIVE_LOAD_FRACTION * live_moment,
        stress_limits(fc),
    )
    if not stresses.transfer_ok:
        return FailureReason.STRESS_TRANSFER
    if not stresses.service_ok:
        return FailureReason.STRESS_SERVICE

    avg_prestress = pe / section.area
    if not meets_min_prestress(avg_prestress, conditions.occupancy):
        return FailureReason.MIN_PRESTRESS

    d = thickness - SLAB_EFFECTIVE_DEPTH_OFFSET
    moment = check_moment_capacity(pe, fc, STRIP_WIDTH, d, factored_moment(dead_moment, live_moment))
    if not moment.passed:
        return moment.failure

    live_load = PARKING_LIVE_LOAD * conditions.load_share / 12     # lb/in
    deflection = check_deflection(
        section, fc, conditions.span_ft, live_load, live_moment, pe, e, conditions.two_way
    )
    if not deflection.deflection_ok:
        return FailureReason.DEFLECTION
    if not deflection.vibration_ok:
        return FailureReason.VIBRATION

    punching = check_punching_shear(fc, d, avg_prestress)
    if not punching.passed:
        return FailureReason.PUNCHING_SHEAR

    if not deflection.camber_ok:
        return FailureReason.CAMBER

    mild_steel = size_mild_steel(
        section, fc, d, deflection.cracking_moment, stresses.service,
        conditions.longer_span_ft, conditions.steel_cost_per_lb,
    )

    total_force = pe * conditions.distribution_width_ft
    num_strands = math.ceil(total_force / (effective_strand_stress(fc) * STRAND_AREA))

    return StripDesign(
        concrete_strength=fc,
        thickness=thickness,
        balance_ratio=balance_ratio,
        eccentricity_ratio=eccentricity_ratio,
        eccentricity=e,
        prestress_force=pe,
        avg_prestress=avg_prestress,
        num_strands=num_strands,
        strand_weight=strand_weight(num_strands, conditions.span_ft, e),
        mild_steel=mild_steel,
        stresses=stresses,
        deflection=deflection,
        checks={
            "stress_transfer": stresses.transfer_ok,
            "stress_service": stresses.service_ok,
            "min_prestress": meets_min_prestress(avg_prestress, conditions.occupancy),
            "moment": moment.passed,
            "deflection": deflection.deflection_ok,
            "vibration": deflection.vibration_ok,
            "punching_shear": punching.passed,
            "camber": deflection.camber_ok,
        },
    )


def cheapest_strip(
    fc: float,
    thickness: float,
    balance_ratios: Sequence[float],
    eccentricity_ratios: Sequence[float],
    conditions: StripConditions,
    strand_cost_per_lb: float,
    area_sf: float,
) -> Union[StripDesign, FailureReason]:
    """
    Cheapest passing prestress for a slab of fixed strength and thickness.

    Concrete and formwork are fixed by the thickness, so only strand and
    mild steel costs separate the options. First found wins on ties.
    """
    best = None
    best_cost = math.inf
    for balance in balance_ratios:
        for ratio in eccentricity_ratios:
            strip = design_strip(fc, thickness, balance, ratio, conditions)
            if strip is FailureReason.ECCENTRICITY_TOO_SMALL:
                return strip
            if not isinstance(strip, StripDesign):
                continue
            cost = strip.strand_weight * strand_cost_per_lb + strip.mild_steel.cost_per_sf * area_sf
            if cost < best_cost:
                best, best_cost = strip, cost

    if best is None:
        return FailureReason.NO_SLAB_PRESTRESS
    return best
