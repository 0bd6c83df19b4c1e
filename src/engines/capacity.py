"""
Capacity Checks - ACI 318-19
Flexural strength (Cl 20.3.2.4, 21.2.2), deflection and camber (Cl 24.2),
floor vibration, wheel-load punching shear (Cl 22.6.5.2) and minimum
average precompression.

All checks are pure and return a result record; infeasibility is reported
through the record, never raised.
"""

import math
from dataclasses import dataclass
from typing import Optional

from ..core.constants import (
    STRAND_ULTIMATE_STRENGTH,
    STRAND_YIELD_RATIO,
    TENDON_STRESS_INCREMENT,
    TENDON_STRESS_RATIO_CAP,
    TENDON_STRESS_ADDITIVE_CAP,
    CONCRETE_ULTIMATE_STRAIN,
    TENSION_CONTROLLED_STRAIN,
    COMPRESSION_CONTROLLED_STRAIN,
    PHI_TENSION_CONTROLLED,
    PHI_COMPRESSION_CONTROLLED,
    CRACKED_INERTIA_RATIO,
    CRACKED_INERTIA_RATIO_TWO_WAY,
    LONG_TERM_CAMBER_FACTOR,
    DEFLECTION_LIMIT_RATIO,
    CAMBER_LIMIT_RATIO,
    GRAVITY_IN_PER_S2,
    FREQUENCY_CONSTANT,
    MIN_NATURAL_FREQUENCY,
    TWO_WAY_FREQUENCY_FACTOR,
    WHEEL_LOAD,
    WHEEL_CONTACT_SIZE,
    PHI_SHEAR,
    PUNCHING_ALPHA_S,
    PUNCHING_BETA,
    PRESTRESS_SHEAR_FACTOR,
    LOAD_FACTOR_DEAD,
    LOAD_FACTOR_LIVE,
)
from ..core.data_models import Occupancy, FailureReason
from .materials import beta1, concrete_modulus, effective_strand_stress, modulus_of_rupture
from .section import SectionProperties


@dataclass(frozen=True)
class MomentCheck:
    aps: float              # sq in
    fps: float              # psi
    a: float                # stress block depth (in)
    c: float                # neutral axis depth (in)
    tensile_strain: float
    phi: float
    phi_mn: float           # in-lb
    mu: float               # in-lb
    failure: Optional[FailureReason] = None

    @property
    def passed(self) -> bool:
        return self.failure is None


@dataclass(frozen=True)
class DeflectionCheck:
    cracking_moment: float      # in-lb
    effective_inertia: float    # in^4
    live_deflection: float      # in
    camber: float               # in
    net_deflection: float       # in
    deflection_limit: float     # in
    camber_limit: float         # in
    frequency: float            # Hz

    @property
    def deflection_ok(self) -> bool:
        return self.net_deflection <= self.deflection_limit

    @property
    def camber_ok(self) -> bool:
        return self.camber <= self.camber_limit

    @property
    def vibration_ok(self) -> bool:
        return self.frequency >= MIN_NATURAL_FREQUENCY


@dataclass(frozen=True)
class PunchingCheck:
    perimeter: float    # bo (in)
    vc: float           # nominal capacity (psi)
    vu: float           # demand (psi)

    @property
    def passed(self) -> bool:
        return self.vu <= PHI_SHEAR * self.vc


def factored_moment(dead_moment: float, live_moment: float) -> float:
    """Mu = 1.2 MD + 1.6 ML"""
    return LOAD_FACTOR_DEAD * dead_moment + LOAD_FACTOR_LIVE * live_moment


def strength_reduction_factor(tensile_strain: float) -> float:
    """phi by net tensile strain, ACI 318-19 Table 21.2.2"""
    if tensile_strain >= TENSION_CONTROLLED_STRAIN:
        return PHI_TENSION_CONTROLLED
    if tensile_strain <= COMPRESSION_CONTROLLED_STRAIN:
        return PHI_COMPRESSION_CONTROLLED
    span = TENSION_CONTROLLED_STRAIN - COMPRESSION_CONTROLLED_STRAIN
    fraction = (tensile_strain - COMPRESSION_CONTROLLED_STRAIN) / span
    return PHI_COMPRESSION_CONTROLLED + fraction * (PHI_TENSION_CONTROLLED - PHI_COMPRESSION_CONTROLLED)


def check_moment_capacity(
    effective_force: float,
    fc: float,
    width: float,
    effective_depth: float,
    mu: float,
) -> MomentCheck:
    """
    Flexural strength of an unbonded tendon section.

    Aps is back-calculated from the effective force at the fc-specific
    effective strand stress. Sections with a net tensile strain below
    0.002 are rejected as compression controlled.
    """
    fpe = effective_strand_stress(fc)
    aps = effective_force / fpe
    rho_p = aps / (width * effective_depth)

    fps = min(
        fpe + TENDON_STRESS_INCREMENT + min(fc / (100 * rho_p), TENDON_STRESS_RATIO_CAP),
        STRAND_YIELD_RATIO * STRAND_ULTIMATE_STRENGTH,
        fpe + TENDON_STRESS_ADDITIVE_CAP,
    )

    a = aps * fps / (0.85 * fc * width)
    c = a / beta1(fc)
    strain = CONCRETE_ULTIMATE_STRAIN * (effective_depth - c) / c

    if strain < COMPRESSION_CONTROLLED_STRAIN:
        return MomentCheck(aps, fps, a, c, strain, PHI_COMPRESSION_CONTROLLED, 0.0, mu,
                           failure=FailureReason.TENSION_CONTROL)

    phi = strength_reduction_factor(strain)
    phi_mn = phi * aps * fps * (effective_depth - a / 2)
    failure = None if phi_mn >= mu else FailureReason.MOMENT_CAPACITY
    return MomentCheck(aps, fps, a, c, strain, phi, phi_mn, mu, failure=failure)


def check_deflection(
    section: SectionProperties,
    fc: float,
    span_ft: float,
    live_load: float,
    live_moment: float,
    effective_force: float,
    eccentricity: float,
    two_way: bool = False,
) -> DeflectionCheck:
    """
    Live load deflection, long-term camber and natural frequency.

    live_load is in lb/in along the member and live_moment in in-lb. The
    effective inertia follows Branson with Icr taken as a fixed share of Ig.
    """
    ec = concrete_modulus(fc)
    ig = section.inertia
    span = span_ft * 12

    mcr = modulus_of_rupture(fc) * ig / section.y_bottom
    if live_moment <= 2.0 / 3.0 * mcr:
        ie = ig
    else:
        icr = (CRACKED_INERTIA_RATIO_TWO_WAY if two_way else CRACKED_INERTIA_RATIO) * ig
        ie = icr + (mcr / live_moment) ** 3 * (ig - icr)

    live_deflection = 5 * live_load * span ** 4 / (384 * ec * ie)
    # Parabolic tendon, equivalent upward load 8 P e / L^2
    camber = 5 * effective_force * eccentricity * span ** 2 / (48 * ec * ie)
    net = live_deflection - LONG_TERM_CAMBER_FACTOR * camber

    if live_deflection > 0:
        frequency = FREQUENCY_CONSTANT * math.sqrt(GRAVITY_IN_PER_S2 / live_deflection)
    else:
        frequency = math.inf
    if two_way:
        frequency *= TWO_WAY_FREQUENCY_FACTOR

    return DeflectionCheck(
        cracking_moment=mcr,
        effective_inertia=ie,
        live_deflection=live_deflection,
        camber=camber,
        net_deflection=net,
        deflection_limit=span / DEFLECTION_LIMIT_RATIO,
        camber_limit=span / CAMBER_LIMIT_RATIO,
        frequency=frequency,
    )


def check_punching_shear(fc: float, effective_depth: float, avg_prestress: float) -> PunchingCheck:
    """Punching under a factored 3000 lb wheel on a 4.5 in square patch"""
    d = effective_depth
    bo = 4 * (d + WHEEL_CONTACT_SIZE)
    lambda_s = min(math.sqrt(2 / (1 + 0.004 * d)), 1.0)
    root_fc = math.sqrt(fc)

    vc = min(
        (2 + 4 / PUNCHING_BETA) * lambda_s * root_fc,
        (PUNCHING_ALPHA_S * d / bo + 2) * lambda_s * root_fc,
        4 * lambda_s * root_fc,
    ) + PRESTRESS_SHEAR_FACTOR * avg_prestress

    return PunchingCheck(perimeter=bo, vc=vc, vu=LOAD_FACTOR_LIVE * WHEEL_LOAD / (bo * d))


def meets_min_prestress(avg_prestress: float, occupancy: Occupancy) -> bool:
    """Average precompression P/A against the occupancy minimum"""
    return avg_prestress >= occupancy.min_avg_prestress
