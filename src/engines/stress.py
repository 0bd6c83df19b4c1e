"""
Fiber Stress Evaluation - ACI 318-19 Ch 24.5

Sign convention used throughout the package:
    compression negative, tension positive
    eccentricity positive when the tendon is below the centroid
    moment positive when sagging (bottom fiber in tension)

    f_top    = -P/A + P*e/St - M/St
    f_bottom = -P/A - P*e/Sb + M/Sb
"""

from dataclasses import dataclass

from .materials import StressLimits
from .section import SectionProperties


@dataclass(frozen=True)
class FiberStresses:
    """Extreme fiber stresses (psi)"""
    top: float
    bottom: float

    @property
    def max_tension(self) -> float:
        """Largest tensile stress, 0 if the section is fully compressed"""
        return max(self.top, self.bottom, 0.0)

    @property
    def max_compression(self) -> float:
        """Largest compressive stress as a positive magnitude"""
        return max(-self.top, -self.bottom, 0.0)

    def within(self, compression_limit: float, tension_limit: float) -> bool:
        """True when both fibers satisfy -compression_limit <= f <= tension_limit"""
        return all(
            -compression_limit <= f <= tension_limit
            for f in (self.top, self.bottom)
        )


@dataclass(frozen=True)
class StressCheck:
    """Transfer and service stresses of one candidate"""
    transfer: FiberStresses
    service: FiberStresses
    transfer_ok: bool
    service_ok: bool

    @property
    def passed(self) -> bool:
        return self.transfer_ok and self.service_ok


def fiber_stresses(
    section: SectionProperties,
    force: float,
    eccentricity: float,
    moment: float,
) -> FiberStresses:
    """Top and bottom fiber stresses for axial prestress, tendon eccentricity and moment"""
    axial = -force / section.area
    return FiberStresses(
        top=axial + force * eccentricity / section.s_top - moment / section.s_top,
        bottom=axial - force * eccentricity / section.s_bottom + moment / section.s_bottom,
    )


def check_stresses(
    section: SectionProperties,
    initial_force: float,
    effective_force: float,
    eccentricity: float,
    dead_moment: float,
    service_moment: float,
    limits: StressLimits,
) -> StressCheck:
    """
    Transfer check uses the initial force with the dead load moment; service
    check uses the effective force with the service moment.
    """
    transfer = fiber_stresses(section, initial_force, eccentricity, dead_moment)
    service = fiber_stresses(section, effective_force, eccentricity, service_moment)
    return StressCheck(
        transfer=transfer,
        service=service,
        transfer_ok=transfer.within(limits.transfer_compression, limits.transfer_tension),
        service_ok=service.within(limits.service_compression, limits.service_tension),
    )


def tension_block_depth(stresses: FiberStresses, depth: float) -> float:
    """Depth (in) of the tensile zone from the linear stress distribution"""
    top, bottom = stresses.top, stresses.bottom
    if top <= 0 and bottom <= 0:
        return 0.0
    if top >= 0 and bottom >= 0:
        return depth
    tension = max(top, bottom)
    compression = -min(top, bottom)
    return depth * tension / (tension + compression)


def tension_resultant(stresses: FiberStresses, depth: float, width: float) -> float:
    """Nc = 0.5 ft y_t b (lb), resultant of the tensile stress block"""
    return 0.5 * stresses.max_tension * tension_block_depth(stresses, depth) * width
