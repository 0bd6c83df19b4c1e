"""
Flat Plate Search
Two-way PT flat plate spanning the bay length, tendons spread across the bay width
"""

import math
from typing import Optional

from ..core.constants import (
    CONCRETE_UNIT_WEIGHT,
    MIN_FLAT_PLATE_THICKNESS,
    MIN_FLAT_PLATE_ECCENTRICITY,
    SPAN_DEPTH_RATIOS,
    STRAND_DIAMETER,
)
from ..core.data_models import (
    CostBreakdown,
    DesignResult,
    SearchDiagnostics,
    StructuralSystem,
)
from .base import CandidateSearch
from .grid import GridPoint, ParameterAxis, ParameterGrid, frange
from .slab_strip import StripConditions, StripDesign, design_strip


class FlatPlateSearch(CandidateSearch):
    system = StructuralSystem.FLAT_PLATE

    @property
    def conditions(self) -> StripConditions:
        project = self.project
        return StripConditions(
            span_ft=project.bay_length,
            distribution_width_ft=project.bay_width,
            longer_span_ft=max(project.bay_length, project.bay_width),
            eccentricity_offset=STRAND_DIAMETER / 2,
            min_eccentricity=MIN_FLAT_PLATE_ECCENTRICITY,
            occupancy=project.occupancy,
            steel_cost_per_lb=self.costs.mild_steel_cost_per_lb,
        )

    def min_thickness(self) -> float:
        """Span/50 rounded up to the inch, never below 5 in"""
        ratio = SPAN_DEPTH_RATIOS["flat_plate"]
        return max(MIN_FLAT_PLATE_THICKNESS, math.ceil(self.project.bay_length * 12 / ratio))

    def grid(self) -> ParameterGrid:
        r = self.ranges
        return ParameterGrid([
            ParameterAxis("concrete_strength", r.strengths_for_span(self.project.bay_length)),
            ParameterAxis("thickness", frange(self.min_thickness(), r.flat_plate_max_thickness,
                                              r.thickness_step)),
            ParameterAxis("balance_ratio", frange(*r.flat_plate_balance)),
            ParameterAxis("eccentricity_ratio", frange(*r.flat_plate_eccentricity)),
        ])

    def evaluate(self, point: GridPoint, diagnostics: SearchDiagnostics) -> Optional[DesignResult]:
        strip = design_strip(
            point["concrete_strength"],
            point["thickness"],
            point["balance_ratio"],
            point["eccentricity_ratio"],
            self.conditions,
        )
        if not isinstance(strip, StripDesign):
            diagnostics.record_failure(strip)
            return None
        return self._build_result(strip)

    def _build_result(self, strip: StripDesign) -> DesignResult:
        area = self.plan_area
        cm = self.cost_model
        fc, t = strip.concrete_strength, strip.thickness

        cost = CostBreakdown(
            concrete=cm.slab_concrete_cost(t, fc, area),
            formwork=cm.formwork_cost(area),
            pt_strand=cm.strand_cost(strip.strand_weight),
            mild_steel=strip.mild_steel.cost_per_sf * area,
        )
        steel_weight = strip.strand_weight + strip.mild_steel.weight_per_sf * area

        return DesignResult(
            system=self.system,
            slab_thickness=t,
            concrete_strength=fc,
            balance_ratio=strip.balance_ratio,
            eccentricity=strip.eccentricity,
            eccentricity_ratio=strip.eccentricity_ratio,
            prestress_force=strip.prestress_force,
            avg_prestress=strip.avg_prestress,
            num_strands=strip.num_strands,
            cost=cost,
            weight_per_sf=CONCRETE_UNIT_WEIGHT * t / 12 + steel_weight / area,
            mild_steel=strip.mild_steel,
            checks=dict(strip.checks),
        )
