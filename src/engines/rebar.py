"""
Mild Steel Sizing - ACI 318-19
Temperature/shrinkage (Cl 24.4.3.2), minimum bonded reinforcement (Cl 8.6.1)
and two-way PT slab negative moment steel (Cl 8.6.2.3)
"""

import math
from typing import Dict

from ..core.constants import (
    REBAR_YIELD_STRENGTH,
    STRIP_WIDTH,
    TEMPERATURE_SHRINKAGE_RATIO,
    TEMPERATURE_SHRINKAGE_RATIO_LOW_GRADE,
    TEMPERATURE_SHRINKAGE_RATIO_FLOOR,
    BONDED_REINFORCEMENT_FACTOR,
    TWO_WAY_NEGATIVE_STEEL_RATIO,
    TWO_WAY_TENSION_THRESHOLD,
)
from ..core.data_models import MildSteelDetails
from .cost_model import rebar_weight_per_sf
from .section import SectionProperties
from .stress import FiberStresses, tension_resultant

TEMPERATURE_SHRINKAGE = "temperature/shrinkage"
MINIMUM_BONDED = "minimum bonded"
TWO_WAY_NEGATIVE = "two-way negative moment"


def temperature_shrinkage_ratio(fy: float = REBAR_YIELD_STRENGTH) -> float:
    """Minimum steel ratio by bar grade"""
    if fy < 60000:
        return TEMPERATURE_SHRINKAGE_RATIO_LOW_GRADE
    if fy < 75000:
        return TEMPERATURE_SHRINKAGE_RATIO
    return max(TEMPERATURE_SHRINKAGE_RATIO * 60000 / fy, TEMPERATURE_SHRINKAGE_RATIO_FLOOR)


def mild_steel_areas(
    section: SectionProperties,
    fc: float,
    effective_depth: float,
    cracking_moment: float,
    service: FiberStresses,
    longer_span_ft: float,
    fy: float = REBAR_YIELD_STRENGTH,
) -> Dict[str, float]:
    """
    Required steel area (sq in per ft) for each minimum-steel case.

    Additional tension steel Nc/(0.5 fy) is added to the two-way case only
    when the service tension exceeds 2 sqrt(fc).
    """
    h = section.depth
    temp = temperature_shrinkage_ratio(fy) * h * STRIP_WIDTH

    bonded = max(cracking_moment / (BONDED_REINFORCEMENT_FACTOR * fy * effective_depth), temp)

    negative = TWO_WAY_NEGATIVE_STEEL_RATIO * h * longer_span_ft * 12
    additional = 0.0
    if service.max_tension > TWO_WAY_TENSION_THRESHOLD * math.sqrt(fc):
        additional = tension_resultant(service, h, STRIP_WIDTH) / (0.5 * fy)
    two_way = max(negative + additional, temp)

    return {
        TEMPERATURE_SHRINKAGE: temp,
        MINIMUM_BONDED: bonded,
        TWO_WAY_NEGATIVE: two_way,
    }


def size_mild_steel(
    section: SectionProperties,
    fc: float,
    effective_depth: float,
    cracking_moment: float,
    service: FiberStresses,
    longer_span_ft: float,
    steel_cost_per_lb: float,
    fy: float = REBAR_YIELD_STRENGTH,
) -> MildSteelDetails:
    """Governing (largest) minimum steel case with its weight and cost"""
    areas = mild_steel_areas(section, fc, effective_depth, cracking_moment, service,
                             longer_span_ft, fy)
    # Ties resolve to the earlier case in the order above
    governing_case = max(areas, key=areas.get)
    area = areas[governing_case]
    weight = rebar_weight_per_sf(area)

    return MildSteelDetails(
        governing_case=governing_case,
        area=area,
        ratio=area / (STRIP_WIDTH * effective_depth),
        weight_per_sf=weight,
        cost_per_sf=weight * steel_cost_per_lb,
    )
