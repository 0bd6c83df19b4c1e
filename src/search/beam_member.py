"""
Prestress design of a post-tensioned beam for a fixed section.

The beam is checked as a rectangular section of full depth. Its balance
and eccentricity ratios are searched on their own: beam strand cost does
not interact with the slab design, so the cheapest passing combination is
kept independently of the slab.
"""

import math
from dataclasses import dataclass
from typing import Sequence, Union

from ..core.constants import (
    BEAM_EXTRA_COVER,
    BEAM_TENDON_OFFSET,
    CONTINUOUS_MOMENT_COEFFICIENT,
    SERVICE_LIVE_LOAD_FRACTION,
    STRAND_AREA,
)
from ..core.data_models import FailureReason
from ..engines.capacity import MomentCheck, check_moment_capacity, factored_moment
from ..engines.cost_model import strand_weight
from ..engines.materials import cover_requirement, effective_strand_stress, loss_ratio, stress_limits
from ..engines.section import rectangular_section
from ..engines.stress import StressCheck, check_stresses


@dataclass(frozen=True)
class BeamLoads:
    """Uniform line loads on the beam (plf)"""
    dead: float
    live: float

    def moments(self, span_ft: float):
        """Dead and live moments (in-lb)"""
        factor = CONTINUOUS_MOMENT_COEFFICIENT * span_ft ** 2 * 12
        return self.dead * factor, self.live * factor


@dataclass(frozen=True)
class BeamDesign:
    width: float                # in
    depth: float                # in, total
    balance_ratio: float
    eccentricity_ratio: float
    eccentricity: float         # in
    prestress_force: float      # Pe, lb
    avg_prestress: float        # psi
    num_strands: int
    strand_weight: float        # lb
    stresses: StressCheck
    moment: MomentCheck


def beam_tendon_depth(fc: float) -> float:
    """Distance from the extreme fiber to the tendon centroid (in)"""
    return cover_requirement(fc) + BEAM_EXTRA_COVER + BEAM_TENDON_OFFSET


def design_beam(
    fc: float,
    width: float,
    depth: float,
    span_ft: float,
    loads: BeamLoads,
    balance_ratios: Sequence[float],
    eccentricity_ratios: Sequence[float],
) -> Union[BeamDesign, FailureReason]:
    """Cheapest passing prestress for the beam, first found on ties"""
    tendon_depth = beam_tendon_depth(fc)
    e_max = depth / 2 - tendon_depth
    if e_max <= 0:
        return FailureReason.ECCENTRICITY_TOO_SMALL

    section = rectangular_section(width, depth)
    limits = stress_limits(fc)
    losses = loss_ratio(fc)
    fpe = effective_strand_stress(fc)
    dead_moment, live_moment = loads.moments(span_ft)
    service_moment = dead_moment + SERVICE_LIVE_LOAD_FRACTION * live_moment
    mu = factored_moment(dead_moment, live_moment)
    d = depth - tendon_depth

    best = None
    for balance in balance_ratios:
        for ratio in eccentricity_ratios:
            e = ratio * e_max
            pe = balance * dead_moment / e
            stresses = check_stresses(section, pe / losses, pe, e, dead_moment, service_moment, limits)
            if not stresses.passed:
                continue
            moment = check_moment_capacity(pe, fc, width, d, mu)
            if not moment.passed:
                continue

            num_strands = math.ceil(pe / (fpe * STRAND_AREA))
            weight = strand_weight(num_strands, span_ft, e)
            if best is None or weight < best.strand_weight:
                best = BeamDesign(
                    width=width,
                    depth=depth,
                    balance_ratio=balance,
                    eccentricity_ratio=ratio,
                    eccentricity=e,
                    prestress_force=pe,
                    avg_prestress=pe / section.area,
                    num_strands=num_strands,
                    strand_weight=weight,
                    stresses=stresses,
                    moment=moment,
                )

    if best is None:
        return FailureReason.NO_BEAM_PRESTRESS
    return best
