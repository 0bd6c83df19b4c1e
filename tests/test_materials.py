"""
Tests for concrete material properties and stress limits.
"""

import math

import pytest

from src.engines.materials import (
    beta1,
    concrete_modulus,
    cover_requirement,
    effective_strand_stress,
    loss_ratio,
    modulus_of_rupture,
    stress_limits,
)


class TestModulus:
    def test_concrete_modulus(self):
        assert concrete_modulus(4000) == pytest.approx(57000 * math.sqrt(4000))

    def test_modulus_of_rupture(self):
        assert modulus_of_rupture(5000) == pytest.approx(7.5 * math.sqrt(5000))

    @pytest.mark.parametrize("fc", [0, -5000, float("nan"), float("inf")])
    def test_invalid_strength_rejected(self, fc):
        with pytest.raises(ValueError):
            concrete_modulus(fc)


class TestStressLimits:
    def test_limits_at_5000_psi(self):
        """fci = 3500 psi at transfer."""
        limits = stress_limits(5000)
        assert limits.transfer_compression == pytest.approx(2100.0)
        assert limits.transfer_tension == pytest.approx(3 * math.sqrt(3500))
        assert limits.service_compression_sustained == pytest.approx(2250.0)
        assert limits.service_compression == pytest.approx(3000.0)
        assert limits.service_tension == pytest.approx(6 * math.sqrt(5000))

    def test_explicit_transfer_strength(self):
        limits = stress_limits(5000, fci=4000)
        assert limits.transfer_compression == pytest.approx(2400.0)


class TestStrengthDependentValues:
    @pytest.mark.parametrize("fc, cover", [(3000, 2.0), (4000, 1.75), (4500, 1.75), (5000, 1.5), (15000, 1.5)])
    def test_cover(self, fc, cover):
        assert cover_requirement(fc) == cover

    @pytest.mark.parametrize("fc, ratio", [(5000, 0.80), (7000, 0.82), (10000, 0.84), (12000, 0.85)])
    def test_loss_ratio(self, fc, ratio):
        assert loss_ratio(fc) == ratio

    @pytest.mark.parametrize("fc, expected", [(3000, 0.85), (4000, 0.85), (5000, 0.80), (8000, 0.65), (12000, 0.65)])
    def test_beta1(self, fc, expected):
        assert beta1(fc) == pytest.approx(expected)

    def test_effective_strand_stress(self):
        assert effective_strand_stress(5000) == pytest.approx(0.74 * 270000 * 0.80)
