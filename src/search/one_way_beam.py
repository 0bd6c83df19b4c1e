"""
One-Way Beam & Slab Search

Beams span the bay length at the bay width spacing; the slab spans the
clear distance between beam faces. For each (strength, beam width, web
depth, slab thickness) configuration the slab and the beam prestress are
searched independently and the cheapest passing option of each is kept.
"""

import math
from typing import Dict, Optional, Tuple, Union

from ..core.constants import (
    BEAM_REBAR_RATIO_ONE_WAY,
    CONCRETE_UNIT_WEIGHT,
    MIN_BEAM_DEPTH,
    MIN_ONE_WAY_SLAB_THICKNESS,
    MIN_SLAB_ECCENTRICITY,
    PARKING_LIVE_LOAD,
    SLAB_STRAND_DIAMETER,
    SPAN_DEPTH_RATIOS,
)
from ..core.data_models import (
    CostBreakdown,
    DesignResult,
    FailureReason,
    SearchDiagnostics,
    StructuralSystem,
)
from ..engines.cost_model import beam_rebar_weight
from .base import CandidateSearch
from .beam_member import BeamDesign, BeamLoads, design_beam
from .grid import GridPoint, ParameterAxis, ParameterGrid, frange
from .slab_strip import StripConditions, StripDesign, cheapest_strip


def beam_depth_range(span_ft: float, max_depth: float, step: float) -> Tuple[float, ...]:
    """Web depths between span/20 and span/12, limited to 12..max_depth in"""
    lower = max(MIN_BEAM_DEPTH, math.floor(span_ft * 12 / SPAN_DEPTH_RATIOS["beam_min"]))
    upper = min(max_depth, math.ceil(span_ft * 12 / SPAN_DEPTH_RATIOS["beam_max"]))
    return frange(lower, upper, step)


def stem_volume(width: float, web_depth: float, length_ft: float) -> float:
    """Beam web volume below the slab (cf)"""
    return width * web_depth * length_ft / 144


class OneWayBeamSearch(CandidateSearch):
    system = StructuralSystem.ONE_WAY_BEAM

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._slab_cache: Dict[Tuple[float, float, float], Union[StripDesign, FailureReason]] = {}

    def clear_span(self, beam_width: float) -> float:
        return self.project.bay_width - beam_width / 12

    def min_slab_thickness(self, beam_width: float) -> float:
        """Clear span/48 rounded up to the inch, never below 4 in"""
        ratio = SPAN_DEPTH_RATIOS["one_way_slab"]
        return max(MIN_ONE_WAY_SLAB_THICKNESS, math.ceil(self.clear_span(beam_width) * 12 / ratio))

    def grid(self) -> ParameterGrid:
        r = self.ranges
        widths = frange(*r.one_way_beam_width)
        # Widest beam gives the shortest clear span and the thinnest slab
        t_min = min(self.min_slab_thickness(b) for b in widths) if widths else MIN_ONE_WAY_SLAB_THICKNESS
        return ParameterGrid([
            ParameterAxis("concrete_strength", r.strengths_for_span(self.project.bay_length)),
            ParameterAxis("beam_width", widths),
            ParameterAxis("beam_depth", beam_depth_range(self.project.bay_length, r.beam_max_depth,
                                                         r.beam_depth_step)),
            ParameterAxis("thickness", frange(t_min, r.one_way_slab_max_thickness, r.thickness_step)),
        ])

    def slab_conditions(self, beam_width: float) -> StripConditions:
        project = self.project
        return StripConditions(
            span_ft=self.clear_span(beam_width),
            distribution_width_ft=project.bay_length,
            longer_span_ft=max(project.bay_length, project.bay_width),
            eccentricity_offset=SLAB_STRAND_DIAMETER / 2,
            min_eccentricity=MIN_SLAB_ECCENTRICITY,
            occupancy=project.occupancy,
            steel_cost_per_lb=self.costs.mild_steel_cost_per_lb,
        )

    def _slab(self, fc: float, beam_width: float, thickness: float) -> Union[StripDesign, FailureReason]:
        key = (fc, beam_width, thickness)
        if key not in self._slab_cache:
            r = self.ranges
            self._slab_cache[key] = cheapest_strip(
                fc, thickness,
                frange(*r.slab_balance), frange(*r.slab_eccentricity),
                self.slab_conditions(beam_width),
                self.costs.pt_strand_cost_per_lb,
                self.plan_area,
            )
        return self._slab_cache[key]

    def evaluate(self, point: GridPoint, diagnostics: SearchDiagnostics) -> Optional[DesignResult]:
        fc = point["concrete_strength"]
        width = point["beam_width"]
        web_depth = point["beam_depth"]
        t = point["thickness"]

        if t < self.min_slab_thickness(width):
            diagnostics.record_failure(FailureReason.BELOW_MIN_THICKNESS)
            return None

        slab = self._slab(fc, width, t)
        if not isinstance(slab, StripDesign):
            diagnostics.record_failure(slab)
            return None

        project = self.project
        loads = BeamLoads(
            dead=CONCRETE_UNIT_WEIGHT * t / 12 * project.bay_width
            + CONCRETE_UNIT_WEIGHT * width * web_depth / 144,
            live=PARKING_LIVE_LOAD * project.bay_width,
        )
        r = self.ranges
        beam = design_beam(
            fc, width, web_depth + t, project.bay_length, loads,
            frange(*r.one_way_beam_balance), frange(*r.beam_eccentricity),
        )
        if not isinstance(beam, BeamDesign):
            diagnostics.record_failure(beam)
            return None

        return self._build_result(slab, beam, web_depth)

    def _build_result(self, slab: StripDesign, beam: BeamDesign, web_depth: float) -> DesignResult:
        area = self.plan_area
        cm = self.cost_model
        fc, t = slab.concrete_strength, slab.thickness

        volume = stem_volume(beam.width, web_depth, self.project.bay_length)
        beam_rebar = beam_rebar_weight(BEAM_REBAR_RATIO_ONE_WAY, volume)
        strand = slab.strand_weight + beam.strand_weight
        slab_rebar = slab.mild_steel.weight_per_sf * area

        cost = CostBreakdown(
            concrete=cm.slab_concrete_cost(t, fc, area),
            formwork=cm.formwork_cost(area),
            beam_forming=cm.beam_forming_cost(volume),
            beam_pouring=cm.beam_pouring_cost(volume),
            pt_strand=cm.strand_cost(strand),
            mild_steel=cm.rebar_cost(slab_rebar + beam_rebar),
        )

        checks = dict(slab.checks)
        checks["beam_stresses"] = beam.stresses.passed
        checks["beam_moment"] = beam.moment.passed

        return DesignResult(
            system=self.system,
            slab_thickness=t,
            concrete_strength=fc,
            balance_ratio=slab.balance_ratio,
            eccentricity=slab.eccentricity,
            eccentricity_ratio=slab.eccentricity_ratio,
            prestress_force=slab.prestress_force,
            avg_prestress=slab.avg_prestress,
            num_strands=slab.num_strands + beam.num_strands,
            cost=cost,
            weight_per_sf=(
                CONCRETE_UNIT_WEIGHT * t / 12
                + CONCRETE_UNIT_WEIGHT * volume / area
                + (strand + slab_rebar + beam_rebar) / area
            ),
            mild_steel=slab.mild_steel,
            checks=checks,
            beam_width=beam.width,
            beam_depth=beam.depth,
            beam_avg_prestress=beam.avg_prestress,
        )
