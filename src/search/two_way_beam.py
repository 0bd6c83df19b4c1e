"""
Two-Way Beam & Slab Search

Beams run on all four sides of the bay. The slab load is split between the
two span directions by the Rankine-Grashof rule; the slab and the beams are
designed for the governing direction and the other direction's strand
force is scaled by the ratio of the directional moments.
"""

import math
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

from ..core.constants import (
    BEAM_REBAR_RATIO_TWO_WAY,
    CONCRETE_UNIT_WEIGHT,
    MIN_SLAB_ECCENTRICITY,
    MIN_TWO_WAY_SLAB_THICKNESS,
    PARKING_LIVE_LOAD,
    SLAB_STRAND_DIAMETER,
    SPAN_DEPTH_RATIOS,
    STRAND_AREA,
)
from ..core.data_models import (
    CostBreakdown,
    DesignResult,
    FailureReason,
    SearchDiagnostics,
    StructuralSystem,
)
from ..engines.cost_model import beam_rebar_weight, strand_weight
from ..engines.materials import effective_strand_stress
from .base import CandidateSearch
from .beam_member import BeamDesign, BeamLoads, design_beam
from .grid import GridPoint, ParameterAxis, ParameterGrid, frange
from .one_way_beam import beam_depth_range, stem_volume
from .slab_strip import StripConditions, StripDesign, cheapest_strip


@dataclass(frozen=True)
class LoadSplit:
    """Share of the slab load carried along each bay direction"""
    short_span: float       # ft
    long_span: float        # ft
    short_share: float
    long_share: float

    @property
    def aspect_ratio(self) -> float:
        return self.long_span / self.short_span


def load_split(bay_length: float, bay_width: float) -> LoadSplit:
    """Rankine-Grashof split: the short direction carries r^4 / (1 + r^4)"""
    short, long = min(bay_length, bay_width), max(bay_length, bay_width)
    r4 = (long / short) ** 4
    short_share = r4 / (1 + r4)
    return LoadSplit(short, long, short_share, 1 - short_share)


def strands_for_force(force: float, fc: float) -> int:
    return math.ceil(force / (effective_strand_stress(fc) * STRAND_AREA))


class TwoWayBeamSearch(CandidateSearch):
    system = StructuralSystem.TWO_WAY_BEAM

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.split = load_split(self.project.bay_length, self.project.bay_width)
        self._slab_cache: Dict[Tuple[float, float, float], Union[StripDesign, FailureReason]] = {}

    def min_slab_thickness(self) -> float:
        """Short span/55 rounded up to the inch, never below 3 in"""
        ratio = SPAN_DEPTH_RATIOS["two_way_slab"]
        return max(MIN_TWO_WAY_SLAB_THICKNESS, math.ceil(self.split.short_span * 12 / ratio))

    def grid(self) -> ParameterGrid:
        r = self.ranges
        long_span = self.split.long_span
        return ParameterGrid([
            ParameterAxis("concrete_strength", r.strengths_for_span(self.project.bay_length)),
            ParameterAxis("beam_width", frange(*r.two_way_beam_width)),
            ParameterAxis("beam_depth", beam_depth_range(long_span, r.beam_max_depth, r.beam_depth_step)),
            ParameterAxis("thickness", frange(self.min_slab_thickness(), r.two_way_slab_max_thickness,
                                              r.thickness_step)),
        ])

    def _clear_spans(self, beam_width: float) -> Tuple[float, float]:
        return (self.split.short_span - beam_width / 12, self.split.long_span - beam_width / 12)

    def _slab_governs_short(self, beam_width: float) -> bool:
        short_clear, long_clear = self._clear_spans(beam_width)
        split = self.split
        return split.short_share * short_clear ** 2 >= split.long_share * long_clear ** 2

    def slab_conditions(self, beam_width: float) -> StripConditions:
        short_clear, long_clear = self._clear_spans(beam_width)
        split = self.split
        if self._slab_governs_short(beam_width):
            span, width, share = short_clear, split.long_span, split.short_share
        else:
            span, width, share = long_clear, split.short_span, split.long_share
        return StripConditions(
            span_ft=span,
            distribution_width_ft=width,
            longer_span_ft=split.long_span,
            eccentricity_offset=SLAB_STRAND_DIAMETER / 2,
            min_eccentricity=MIN_SLAB_ECCENTRICITY,
            occupancy=self.project.occupancy,
            steel_cost_per_lb=self.costs.mild_steel_cost_per_lb,
            load_share=share,
            two_way=True,
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

    def _secondary_slab_strands(self, slab: StripDesign, beam_width: float) -> Tuple[int, float]:
        """Strand count and weight of the non-governing slab direction"""
        short_clear, long_clear = self._clear_spans(beam_width)
        split = self.split
        short_moment = split.short_share * short_clear ** 2
        long_moment = split.long_share * long_clear ** 2
        if self._slab_governs_short(beam_width):
            ratio, span, width = long_moment / short_moment, long_clear, split.short_span
        else:
            ratio, span, width = short_moment / long_moment, short_clear, split.long_span
        count = strands_for_force(slab.prestress_force * ratio * width, slab.concrete_strength)
        return count, strand_weight(count, span, slab.eccentricity)

    def beam_loads(self, thickness: float, beam_width: float, web_depth: float) -> Dict[str, BeamLoads]:
        """Line loads on the beam spanning each direction"""
        split = self.split
        slab_dead = CONCRETE_UNIT_WEIGHT * thickness / 12
        stem = CONCRETE_UNIT_WEIGHT * beam_width * web_depth / 144
        # Beams along the long side carry the short-direction slab share
        return {
            "long": BeamLoads(
                dead=slab_dead * split.short_span * split.short_share + stem,
                live=PARKING_LIVE_LOAD * split.short_span * split.short_share,
            ),
            "short": BeamLoads(
                dead=slab_dead * split.long_span * split.long_share + stem,
                live=PARKING_LIVE_LOAD * split.long_span * split.long_share,
            ),
        }

    def evaluate(self, point: GridPoint, diagnostics: SearchDiagnostics) -> Optional[DesignResult]:
        fc = point["concrete_strength"]
        width = point["beam_width"]
        web_depth = point["beam_depth"]
        t = point["thickness"]

        slab = self._slab(fc, width, t)
        if not isinstance(slab, StripDesign):
            diagnostics.record_failure(slab)
            return None

        split = self.split
        loads = self.beam_loads(t, width, web_depth)
        spans = {"long": split.long_span, "short": split.short_span}
        dead = {side: loads[side].moments(spans[side])[0] for side in spans}
        governing, other = ("long", "short") if dead["long"] >= dead["short"] else ("short", "long")
        moment_ratio = dead[other] / dead[governing]

        r = self.ranges
        beam = design_beam(
            fc, width, web_depth + t, spans[governing], loads[governing],
            frange(*r.two_way_beam_balance), frange(*r.beam_eccentricity),
        )
        if not isinstance(beam, BeamDesign):
            diagnostics.record_failure(beam)
            return None

        other_strands = strands_for_force(beam.prestress_force * moment_ratio, fc)
        other_weight = strand_weight(other_strands, spans[other], beam.eccentricity)

        return self._build_result(slab, beam, web_depth, other_strands, other_weight)

    def _build_result(
        self,
        slab: StripDesign,
        beam: BeamDesign,
        web_depth: float,
        other_beam_strands: int,
        other_beam_weight: float,
    ) -> DesignResult:
        area = self.plan_area
        cm = self.cost_model
        fc, t = slab.concrete_strength, slab.thickness

        volume = stem_volume(beam.width, web_depth, self.project.bay_length + self.project.bay_width)
        beam_rebar = beam_rebar_weight(BEAM_REBAR_RATIO_TWO_WAY, volume)
        slab_rebar = slab.mild_steel.weight_per_sf * area
        secondary_count, secondary_weight = self._secondary_slab_strands(slab, beam.width)
        strand = slab.strand_weight + secondary_weight + beam.strand_weight + other_beam_weight

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
            num_strands=slab.num_strands + secondary_count + beam.num_strands + other_beam_strands,
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
            aspect_ratio=self.split.aspect_ratio,
        )
