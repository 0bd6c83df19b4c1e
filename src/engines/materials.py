"""
Material Properties - ACI 318-19
Concrete modulus, stress limits, cover and prestress losses as functions of fc
"""

import math
from dataclasses import dataclass
from typing import Optional

from ..core.constants import (
    TRANSFER_STRENGTH_RATIO,
    TRANSFER_COMPRESSION_FACTOR,
    TRANSFER_TENSION_FACTOR,
    SERVICE_COMPRESSION_SUSTAINED_FACTOR,
    SERVICE_COMPRESSION_TOTAL_FACTOR,
    SERVICE_TENSION_FACTOR,
    MODULUS_OF_RUPTURE_FACTOR,
    STRAND_ULTIMATE_STRENGTH,
    STRAND_JACKING_RATIO,
)


@dataclass(frozen=True)
class StressLimits:
    """Allowable fiber stresses (psi), all given as positive magnitudes"""
    transfer_compression: float
    transfer_tension: float
    service_compression_sustained: float
    service_compression: float
    service_tension: float


def _check_strength(fc: float) -> None:
    if not (fc > 0 and math.isfinite(fc)):
        raise ValueError(f"Concrete strength must be positive and finite, got {fc}")


def concrete_modulus(fc: float) -> float:
    """Ec = 57000 sqrt(fc) (psi), ACI 318-19 Cl 19.2.2.1"""
    _check_strength(fc)
    return 57000 * math.sqrt(fc)


def modulus_of_rupture(fc: float) -> float:
    """fr = 7.5 sqrt(fc) (psi)"""
    _check_strength(fc)
    return MODULUS_OF_RUPTURE_FACTOR * math.sqrt(fc)


def stress_limits(fc: float, fci: Optional[float] = None) -> StressLimits:
    """
    Allowable stresses per ACI 318-19 Tables 24.5.3.1 and 24.5.4.1.

    fci defaults to 70% of fc. The sustained-load compression limit is
    reported only; the checks use the total-load limit.
    """
    _check_strength(fc)
    if fci is None:
        fci = TRANSFER_STRENGTH_RATIO * fc
    _check_strength(fci)

    return StressLimits(
        transfer_compression=TRANSFER_COMPRESSION_FACTOR * fci,
        transfer_tension=TRANSFER_TENSION_FACTOR * math.sqrt(fci),
        service_compression_sustained=SERVICE_COMPRESSION_SUSTAINED_FACTOR * fc,
        service_compression=SERVICE_COMPRESSION_TOTAL_FACTOR * fc,
        service_tension=SERVICE_TENSION_FACTOR * math.sqrt(fc),
    )


def cover_requirement(fc: float) -> float:
    """Clear cover to tendons (in)"""
    _check_strength(fc)
    if fc >= 5000:
        return 1.5
    if fc >= 4000:
        return 1.75
    return 2.0


def loss_ratio(fc: float) -> float:
    """Fraction of the initial prestress retained after long-term losses"""
    _check_strength(fc)
    if fc <= 5000:
        return 0.80
    if fc <= 7000:
        return 0.82
    if fc <= 10000:
        return 0.84
    return 0.85


def beta1(fc: float) -> float:
    """Stress block depth factor, ACI 318-19 Table 22.2.2.4.3"""
    _check_strength(fc)
    if fc <= 4000:
        return 0.85
    return max(0.85 - 0.05 * (fc - 4000) / 1000, 0.65)


def effective_strand_stress(fc: float) -> float:
    """fpe = 0.74 fpu x loss ratio (psi)"""
    return STRAND_JACKING_RATIO * STRAND_ULTIMATE_STRENGTH * loss_ratio(fc)
