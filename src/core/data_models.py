"""
Data Models for the PT Floor System Optimizer
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any, Iterable, Tuple

import pandas as pd

from .constants import (
    DEFAULT_MILD_STEEL_COST_PER_LB,
    DEFAULT_CONCRETE_COST_PER_CY,
    INFEASIBLE_UNIT_COST,
    MIN_AVG_PRESTRESS_PARKING,
    MIN_AVG_PRESTRESS_GENERAL,
)
from .cost_tables import (
    DEFAULT_PT_SLAB_COSTS,
    DEFAULT_UNIT_COSTS,
    CONCRETE_REFERENCE_STRENGTH,
    CONCRETE_PREMIUM_THRESHOLD,
    CONCRETE_PREMIUM_PER_KSI,
    CONCRETE_HIGH_PREMIUM_THRESHOLD,
    CONCRETE_HIGH_PREMIUM_PER_KSI,
)

logger = logging.getLogger(__name__)


class InputError(ValueError):
    """Caller-supplied project or cost data violates the input contract"""


class CostTableError(InputError):
    """Slab cost table is too short, non-finite or has duplicate thicknesses"""


class StructuralSystem(Enum):
    """Floor framing systems compared by the optimizer"""
    FLAT_PLATE = "flat_plate"
    ONE_WAY_BEAM = "one_way_beam"
    TWO_WAY_BEAM = "two_way_beam"

    @property
    def label(self) -> str:
        return {
            StructuralSystem.FLAT_PLATE: "Flat Plate",
            StructuralSystem.ONE_WAY_BEAM: "One-Way Beam & Slab",
            StructuralSystem.TWO_WAY_BEAM: "Two-Way Beam & Slab",
        }[self]


# Reported as the optimal system when no system has a feasible design
NO_FEASIBLE_SYSTEM = "none"


class Occupancy(Enum):
    """Occupancy type, selects the minimum average precompression"""
    PARKING = "parking"     # ACI 362.1R
    GENERAL = "general"     # ACI 318-19 Cl 8.6.2.1

    @property
    def min_avg_prestress(self) -> float:
        if self is Occupancy.PARKING:
            return MIN_AVG_PRESTRESS_PARKING
        return MIN_AVG_PRESTRESS_GENERAL


class FailureReason(Enum):
    """Why a grid point was pruned or rejected"""
    ECCENTRICITY_TOO_SMALL = "eccentricity_too_small"
    STRESS_TRANSFER = "stress_transfer"
    STRESS_SERVICE = "stress_service"
    MIN_PRESTRESS = "min_prestress"
    TENSION_CONTROL = "tension_control"
    MOMENT_CAPACITY = "moment_capacity"
    DEFLECTION = "deflection"
    VIBRATION = "vibration"
    PUNCHING_SHEAR = "punching_shear"
    CAMBER = "camber"
    NO_SLAB_PRESTRESS = "no_slab_prestress"
    NO_BEAM_PRESTRESS = "no_beam_prestress"
    BELOW_MIN_THICKNESS = "below_min_thickness"


def _require_finite(name: str, value: float, allow_zero: bool = True) -> float:
    if value is None or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InputError(f"{name} must be a finite number, got {value!r}")
    if value < 0 or (value == 0 and not allow_zero):
        raise InputError(f"{name} must be {'non-negative' if allow_zero else 'positive'}, got {value}")
    return float(value)


def _pick(data: Dict[str, Any], snake: str, camel: str, default: Any = None) -> Any:
    """Read a key from either the snake_case or the camelCase record shape"""
    if snake in data:
        return data[snake]
    return data.get(camel, default)


@dataclass(frozen=True)
class SeismicParameters:
    """Seismic site data. Carried with the project, not used by the search."""
    sds: float = 0.434
    sd1: float = 0.163
    risk_category: str = "II"
    importance_factor: float = 1.0
    response_modification_coefficient: float = 8.0
    seismic_design_category: str = "C"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sds": self.sds,
            "sd1": self.sd1,
            "risk_category": self.risk_category,
            "importance_factor": self.importance_factor,
            "response_modification_coefficient": self.response_modification_coefficient,
            "seismic_design_category": self.seismic_design_category,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SeismicParameters":
        return cls(
            sds=float(data.get("sds", 0.434)),
            sd1=float(data.get("sd1", 0.163)),
            risk_category=str(_pick(data, "risk_category", "riskCategory", "II")),
            importance_factor=float(_pick(data, "importance_factor", "importanceFactor", 1.0)),
            response_modification_coefficient=float(_pick(
                data, "response_modification_coefficient", "responseModificationCoefficient", 8.0
            )),
            seismic_design_category=str(_pick(
                data, "seismic_design_category", "seismicDesignCategory", "C"
            )),
        )


@dataclass(frozen=True)
class ProjectInput:
    """Bay geometry and site metadata for one optimization run"""
    bay_length: float           # Beam / flat plate span (ft)
    bay_width: float            # Bay width, slab span of one-way systems (ft)
    beam_depth: float = 12.0    # User beam depth (in), advisory only
    name: str = "Untitled Project"
    soil_class: str = "C"
    seismic: SeismicParameters = field(default_factory=SeismicParameters)
    occupancy: Occupancy = Occupancy.PARKING

    def __post_init__(self):
        _require_finite("bay_length", self.bay_length, allow_zero=False)
        _require_finite("bay_width", self.bay_width, allow_zero=False)

    @property
    def plan_area(self) -> float:
        """Bay plan area (sf)"""
        return self.bay_length * self.bay_width

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "bay_length": self.bay_length,
            "bay_width": self.bay_width,
            "beam_depth": self.beam_depth,
            "soil_class": self.soil_class,
            "seismic": self.seismic.to_dict(),
            "occupancy": self.occupancy.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectInput":
        seismic = _pick(data, "seismic", "seismicParameters") or {}
        return cls(
            name=data.get("name", "Untitled Project"),
            bay_length=_pick(data, "bay_length", "bayLength"),
            bay_width=_pick(data, "bay_width", "bayWidth"),
            beam_depth=float(_pick(data, "beam_depth", "beamDepth", 12.0)),
            soil_class=str(_pick(data, "soil_class", "soilClass", "C")),
            seismic=SeismicParameters.from_dict(seismic),
            occupancy=Occupancy(data.get("occupancy", Occupancy.PARKING.value)),
        )


@dataclass(frozen=True)
class SlabCostPoint:
    """One point of the piecewise-linear slab cost curve"""
    thickness: float    # in
    cost_per_sf: float  # $/sf


def validate_cost_table(points: Iterable[SlabCostPoint]) -> Tuple[SlabCostPoint, ...]:
    """Return the cost table sorted by thickness, or raise CostTableError.

    The table needs at least two points, finite values and distinct
    thicknesses so every interval can be interpolated.
    """
    table = tuple(sorted(points, key=lambda p: p.thickness))
    if len(table) < 2:
        raise CostTableError(
            f"Slab cost table needs at least 2 thickness/cost points, got {len(table)}"
        )
    for point in table:
        if not (math.isfinite(point.thickness) and math.isfinite(point.cost_per_sf)):
            raise CostTableError(f"Non-finite slab cost point: {point}")
        if point.thickness <= 0 or point.cost_per_sf < 0:
            raise CostTableError(f"Slab cost point out of range: {point}")
    for lower, upper in zip(table, table[1:]):
        if lower.thickness == upper.thickness:
            raise CostTableError(f"Duplicate thickness {lower.thickness} in slab cost table")
    return table


@dataclass(frozen=True)
class ConcretePremiumSchedule:
    """Ready-mix price as a function of specified strength ($/cy)"""
    base_cost_per_cy: float = DEFAULT_CONCRETE_COST_PER_CY
    reference_strength: float = CONCRETE_REFERENCE_STRENGTH
    first_threshold: float = CONCRETE_PREMIUM_THRESHOLD
    premium_per_ksi: float = CONCRETE_PREMIUM_PER_KSI
    second_threshold: float = CONCRETE_HIGH_PREMIUM_THRESHOLD
    high_premium_per_ksi: float = CONCRETE_HIGH_PREMIUM_PER_KSI

    def __post_init__(self):
        for name in ("base_cost_per_cy", "premium_per_ksi", "high_premium_per_ksi"):
            _require_finite(name, getattr(self, name))
        if not (self.reference_strength <= self.first_threshold <= self.second_threshold):
            raise InputError(
                "Premium thresholds must satisfy reference <= first <= second, got "
                f"{self.reference_strength}, {self.first_threshold}, {self.second_threshold}"
            )


@dataclass(frozen=True)
class CostParameters:
    """Unit costs supplied once per optimization run"""
    pt_slab_costs: Tuple[SlabCostPoint, ...] = tuple(
        SlabCostPoint(t, c) for t, c in DEFAULT_PT_SLAB_COSTS
    )
    pt_formwork_cost_per_sf: float = DEFAULT_UNIT_COSTS["pt_formwork_cost_per_sf"]
    beam_forming_cost_per_cf: float = DEFAULT_UNIT_COSTS["beam_forming_cost_per_cf"]
    beam_pouring_cost_per_cf: float = DEFAULT_UNIT_COSTS["beam_pouring_cost_per_cf"]
    pt_strand_cost_per_lb: float = DEFAULT_UNIT_COSTS["pt_strand_cost_per_lb"]
    mild_steel_cost_per_lb: Optional[float] = DEFAULT_UNIT_COSTS["mild_steel_cost_per_lb"]
    concrete_cost_per_cy: Optional[float] = DEFAULT_UNIT_COSTS["concrete_cost_per_cy"]

    def __post_init__(self):
        object.__setattr__(self, "pt_slab_costs", validate_cost_table(self.pt_slab_costs))

        if self.mild_steel_cost_per_lb is None:
            logger.warning(
                f"Mild steel cost not supplied, using default "
                f"${DEFAULT_MILD_STEEL_COST_PER_LB:.2f}/lb"
            )
            object.__setattr__(self, "mild_steel_cost_per_lb", DEFAULT_MILD_STEEL_COST_PER_LB)
        if self.concrete_cost_per_cy is None:
            object.__setattr__(self, "concrete_cost_per_cy", DEFAULT_CONCRETE_COST_PER_CY)

        for name in (
            "pt_formwork_cost_per_sf",
            "beam_forming_cost_per_cf",
            "beam_pouring_cost_per_cf",
            "pt_strand_cost_per_lb",
            "mild_steel_cost_per_lb",
            "concrete_cost_per_cy",
        ):
            object.__setattr__(self, name, _require_finite(name, getattr(self, name)))

    @property
    def premium_schedule(self) -> ConcretePremiumSchedule:
        return ConcretePremiumSchedule(base_cost_per_cy=self.concrete_cost_per_cy)

    def with_overrides(self, **changes: Any) -> "CostParameters":
        """Copy with some unit costs replaced"""
        values = self.to_kwargs()
        values.update(changes)
        return CostParameters(**values)

    def to_kwargs(self) -> Dict[str, Any]:
        return {
            "pt_slab_costs": self.pt_slab_costs,
            "pt_formwork_cost_per_sf": self.pt_formwork_cost_per_sf,
            "beam_forming_cost_per_cf": self.beam_forming_cost_per_cf,
            "beam_pouring_cost_per_cf": self.beam_pouring_cost_per_cf,
            "pt_strand_cost_per_lb": self.pt_strand_cost_per_lb,
            "mild_steel_cost_per_lb": self.mild_steel_cost_per_lb,
            "concrete_cost_per_cy": self.concrete_cost_per_cy,
        }

    def to_dict(self) -> Dict[str, Any]:
        data = self.to_kwargs()
        data["pt_slab_costs"] = [
            {"thickness": p.thickness, "cost_per_sf": p.cost_per_sf}
            for p in self.pt_slab_costs
        ]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CostParameters":
        """Build from a stored record (snake_case or the camelCase source shape)"""
        rows = _pick(data, "pt_slab_costs", "ptSlabCosts")
        if rows is None:
            raise CostTableError("Cost parameters are missing the slab cost table")
        points = tuple(
            SlabCostPoint(
                thickness=float(_pick(row, "thickness", "thickness")),
                cost_per_sf=float(_pick(row, "cost_per_sf", "costPerSf")),
            )
            for row in rows
        )

        def unit(snake: str, camel: str) -> Optional[float]:
            value = _pick(data, snake, camel)
            return None if value is None else float(value)

        def required(snake: str, camel: str) -> float:
            value = unit(snake, camel)
            if value is None:
                return DEFAULT_UNIT_COSTS[snake]
            return value

        return cls(
            pt_slab_costs=points,
            pt_formwork_cost_per_sf=required("pt_formwork_cost_per_sf", "ptFormworkCostPerSf"),
            beam_forming_cost_per_cf=required("beam_forming_cost_per_cf", "beamFormingCostPerCf"),
            beam_pouring_cost_per_cf=required("beam_pouring_cost_per_cf", "beamPouringCostPerCf"),
            pt_strand_cost_per_lb=required("pt_strand_cost_per_lb", "ptStrandCostPerLb"),
            mild_steel_cost_per_lb=unit("mild_steel_cost_per_lb", "mildSteelCostPerLb"),
            concrete_cost_per_cy=unit("concrete_cost_per_cy", "concreteCostPerCy"),
        )


@dataclass(frozen=True)
class DesignCandidate:
    """One trial point of the parameter grid"""
    concrete_strength: float        # fc (psi)
    thickness: float                # slab thickness (in)
    balance_ratio: float
    eccentricity_ratio: float
    prestress_force: float          # Pe (lb/ft)
    rebar_ratio: float = 0.0
    beam_width: Optional[float] = None   # in
    beam_depth: Optional[float] = None   # in, web below slab


@dataclass(frozen=True)
class CostBreakdown:
    """Cost components for one bay ($)"""
    concrete: float = 0.0
    formwork: float = 0.0
    beam_forming: float = 0.0
    beam_pouring: float = 0.0
    pt_strand: float = 0.0
    mild_steel: float = 0.0

    @property
    def total(self) -> float:
        return (
            self.concrete + self.formwork + self.beam_forming
            + self.beam_pouring + self.pt_strand + self.mild_steel
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "concrete": self.concrete,
            "formwork": self.formwork,
            "beam_forming": self.beam_forming,
            "beam_pouring": self.beam_pouring,
            "pt_strand": self.pt_strand,
            "mild_steel": self.mild_steel,
        }


@dataclass(frozen=True)
class MildSteelDetails:
    """Governing minimum bonded steel of the slab"""
    governing_case: str
    area: float             # sq in per ft
    ratio: float            # As / (b d)
    weight_per_sf: float    # lb/sf
    cost_per_sf: float      # $/sf

    def to_dict(self) -> Dict[str, Any]:
        return {
            "governing_case": self.governing_case,
            "area": self.area,
            "ratio": self.ratio,
            "weight_per_sf": self.weight_per_sf,
            "cost_per_sf": self.cost_per_sf,
        }


@dataclass(frozen=True)
class DesignResult:
    """Cheapest feasible design retained for one structural system.

    Construction fails if any check is false, so a DesignResult can only
    exist for a design that passed every check.
    """
    system: StructuralSystem
    slab_thickness: float           # in
    concrete_strength: float        # psi
    balance_ratio: float
    eccentricity: float             # in
    eccentricity_ratio: float
    prestress_force: float          # Pe, lb/ft
    avg_prestress: float            # psi
    num_strands: int
    cost: CostBreakdown
    weight_per_sf: float            # psf
    mild_steel: MildSteelDetails
    checks: Dict[str, bool]
    beam_width: Optional[float] = None          # in
    beam_depth: Optional[float] = None          # in, total incl. slab
    beam_avg_prestress: Optional[float] = None  # psi
    aspect_ratio: Optional[float] = None

    def __post_init__(self):
        if not self.checks:
            raise ValueError("DesignResult requires at least one check")
        failed = [name for name, passed in self.checks.items() if not passed]
        if failed:
            raise ValueError(f"DesignResult cannot hold a failed design: {', '.join(failed)}")
        if not math.isfinite(self.cost.total):
            raise ValueError(f"DesignResult cost is not finite: {self.cost.total}")

    @property
    def total_cost(self) -> float:
        return self.cost.total

    @property
    def candidate(self) -> DesignCandidate:
        """The grid point this design was built from"""
        web_depth = None
        if self.beam_depth is not None:
            web_depth = self.beam_depth - self.slab_thickness
        return DesignCandidate(
            concrete_strength=self.concrete_strength,
            thickness=self.slab_thickness,
            balance_ratio=self.balance_ratio,
            eccentricity_ratio=self.eccentricity_ratio,
            prestress_force=self.prestress_force,
            rebar_ratio=self.mild_steel.ratio,
            beam_width=self.beam_width,
            beam_depth=web_depth,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "system": self.system.value,
            "slab_thickness": self.slab_thickness,
            "concrete_strength": self.concrete_strength,
            "balance_ratio": self.balance_ratio,
            "eccentricity": self.eccentricity,
            "eccentricity_ratio": self.eccentricity_ratio,
            "prestress_force": self.prestress_force,
            "avg_prestress": self.avg_prestress,
            "num_strands": self.num_strands,
            "beam_width": self.beam_width,
            "beam_depth": self.beam_depth,
            "beam_avg_prestress": self.beam_avg_prestress,
            "aspect_ratio": self.aspect_ratio,
            "total_cost": self.total_cost,
            "cost_breakdown": self.cost.to_dict(),
            "weight_per_sf": self.weight_per_sf,
            "mild_steel": self.mild_steel.to_dict(),
            "checks": dict(self.checks),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DesignResult":
        return cls(
            system=StructuralSystem(data["system"]),
            slab_thickness=data["slab_thickness"],
            concrete_strength=data["concrete_strength"],
            balance_ratio=data["balance_ratio"],
            eccentricity=data["eccentricity"],
            eccentricity_ratio=data["eccentricity_ratio"],
            prestress_force=data["prestress_force"],
            avg_prestress=data["avg_prestress"],
            num_strands=data["num_strands"],
            cost=CostBreakdown(**data["cost_breakdown"]),
            weight_per_sf=data["weight_per_sf"],
            mild_steel=MildSteelDetails(**data["mild_steel"]),
            checks=dict(data["checks"]),
            beam_width=data.get("beam_width"),
            beam_depth=data.get("beam_depth"),
            beam_avg_prestress=data.get("beam_avg_prestress"),
            aspect_ratio=data.get("aspect_ratio"),
        )


@dataclass
class SearchDiagnostics:
    """Counts per failure category for one search run"""
    evaluated: int = 0
    feasible: int = 0
    failures: Dict[str, int] = field(default_factory=dict)
    truncated: bool = False
    elapsed: float = 0.0    # seconds

    def record_failure(self, reason: FailureReason, count: int = 1) -> None:
        self.failures[reason.value] = self.failures.get(reason.value, 0) + count

    def failure_count(self, reason: FailureReason) -> int:
        return self.failures.get(reason.value, 0)

    @property
    def pruned(self) -> int:
        return self.failure_count(FailureReason.ECCENTRICITY_TOO_SMALL)

    def merge(self, other: "SearchDiagnostics") -> "SearchDiagnostics":
        """Combine counts from another run into this one (returns self)"""
        self.evaluated += other.evaluated
        self.feasible += other.feasible
        for key, count in other.failures.items():
            self.failures[key] = self.failures.get(key, 0) + count
        self.truncated = self.truncated or other.truncated
        self.elapsed = max(self.elapsed, other.elapsed)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "evaluated": self.evaluated,
            "feasible": self.feasible,
            "failures": dict(sorted(self.failures.items())),
            "truncated": self.truncated,
            "elapsed": round(self.elapsed, 3),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchDiagnostics":
        return cls(
            evaluated=data.get("evaluated", 0),
            feasible=data.get("feasible", 0),
            failures=dict(data.get("failures", {})),
            truncated=data.get("truncated", False),
            elapsed=data.get("elapsed", 0.0),
        )


@dataclass(frozen=True)
class SpanComparison:
    """Unit cost of each system at one span ($/sf)"""
    span: float
    flat_plate_cost: float = INFEASIBLE_UNIT_COST
    one_way_beam_cost: float = INFEASIBLE_UNIT_COST
    two_way_beam_cost: float = INFEASIBLE_UNIT_COST

    def cost_for(self, system: StructuralSystem) -> float:
        return getattr(self, f"{system.value}_cost")

    def to_dict(self) -> Dict[str, float]:
        return {
            "span": self.span,
            "flat_plate_cost": self.flat_plate_cost,
            "one_way_beam_cost": self.one_way_beam_cost,
            "two_way_beam_cost": self.two_way_beam_cost,
        }


@dataclass(frozen=True)
class OptimizationResults:
    """Outcome of one optimization request"""
    flat_plate: Optional[DesignResult] = None
    one_way_beam: Optional[DesignResult] = None
    two_way_beam: Optional[DesignResult] = None
    optimal_system: str = NO_FEASIBLE_SYSTEM
    comparisons: List[SpanComparison] = field(default_factory=list)
    diagnostics: Dict[str, SearchDiagnostics] = field(default_factory=dict)

    def result_for(self, system: StructuralSystem) -> Optional[DesignResult]:
        return getattr(self, system.value)

    @property
    def has_feasible_design(self) -> bool:
        return self.optimal_system != NO_FEASIBLE_SYSTEM

    @property
    def optimal_result(self) -> Optional[DesignResult]:
        if not self.has_feasible_design:
            return None
        return self.result_for(StructuralSystem(self.optimal_system))

    def comparison_frame(self) -> pd.DataFrame:
        """Comparison table as a DataFrame indexed by span"""
        frame = pd.DataFrame(
            [row.to_dict() for row in self.comparisons],
            columns=["span", "flat_plate_cost", "one_way_beam_cost", "two_way_beam_cost"],
        )
        return frame.set_index("span")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "flat_plate": self.flat_plate.to_dict() if self.flat_plate else None,
            "one_way_beam": self.one_way_beam.to_dict() if self.one_way_beam else None,
            "two_way_beam": self.two_way_beam.to_dict() if self.two_way_beam else None,
            "optimal_system": self.optimal_system,
            "comparisons": [row.to_dict() for row in self.comparisons],
            "diagnostics": {k: v.to_dict() for k, v in self.diagnostics.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OptimizationResults":
        def design(key: str) -> Optional[DesignResult]:
            value = data.get(key)
            return DesignResult.from_dict(value) if value else None

        return cls(
            flat_plate=design("flat_plate"),
            one_way_beam=design("one_way_beam"),
            two_way_beam=design("two_way_beam"),
            optimal_system=data.get("optimal_system", NO_FEASIBLE_SYSTEM),
            comparisons=[SpanComparison(**row) for row in data.get("comparisons", [])],
            diagnostics={
                k: SearchDiagnostics.from_dict(v)
                for k, v in data.get("diagnostics", {}).items()
            },
        )
