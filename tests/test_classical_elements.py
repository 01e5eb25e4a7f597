# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for osculating classical elements from state vectors."""

import ast
import math
from pathlib import Path

import pytest

from tleprop.domain.classical_elements import ClassicalOrbitalElements
from tleprop.domain.julian_date import JulianDate
from tleprop.domain.satellite import StateVector


_MU = 398600.8
_R = 7000.0
_V_CIRC = math.sqrt(_MU / _R)


class TestCircularEquatorial:
    """ce: only the true longitude is defined."""

    def test_elements(self):
        coe = ClassicalOrbitalElements.from_position_velocity(
            (_R, 0.0, 0.0), (0.0, _V_CIRC, 0.0), _MU,
        )
        assert coe.semimajor_axis_km == pytest.approx(_R, rel=1e-9)
        assert coe.semilatus_rectum_km == pytest.approx(_R, rel=1e-9)
        assert coe.eccentricity < 1e-8
        assert coe.inclination_rad == pytest.approx(0.0, abs=1e-12)
        assert coe.true_longitude_rad == pytest.approx(0.0, abs=1e-9)
        assert coe.mean_anomaly_rad == pytest.approx(0.0, abs=1e-9)

    def test_undefined_angles_are_nan(self):
        coe = ClassicalOrbitalElements.from_position_velocity(
            (_R, 0.0, 0.0), (0.0, _V_CIRC, 0.0), _MU,
        )
        assert math.isnan(coe.raan_rad)
        assert math.isnan(coe.arg_perigee_rad)
        assert math.isnan(coe.true_anomaly_rad)
        assert math.isnan(coe.arg_latitude_rad)
        assert math.isnan(coe.longitude_periapsis_rad)

    def test_true_longitude_quarter_orbit(self):
        coe = ClassicalOrbitalElements.from_position_velocity(
            (0.0, _R, 0.0), (-_V_CIRC, 0.0, 0.0), _MU,
        )
        assert coe.true_longitude_rad == pytest.approx(math.pi / 2.0, abs=1e-9)


class TestCircularInclined:
    """ci: argument of latitude instead of perigee."""

    def test_elements(self):
        inc = math.radians(45.0)
        coe = ClassicalOrbitalElements.from_position_velocity(
            (_R, 0.0, 0.0),
            (0.0, _V_CIRC * math.cos(inc), _V_CIRC * math.sin(inc)),
            _MU,
        )
        assert coe.eccentricity < 1e-8
        assert coe.inclination_rad == pytest.approx(inc, abs=1e-12)
        assert coe.raan_rad == pytest.approx(0.0, abs=1e-9)
        assert coe.arg_latitude_rad == pytest.approx(0.0, abs=1e-6)
        assert math.isnan(coe.arg_perigee_rad)
        assert math.isnan(coe.true_anomaly_rad)


class TestElliptical:
    """ee / ei: perigee-based angles defined."""

    def test_equatorial_at_perigee(self):
        coe = ClassicalOrbitalElements.from_position_velocity(
            (_R, 0.0, 0.0), (0.0, 1.1 * _V_CIRC, 0.0), _MU,
        )
        assert coe.eccentricity == pytest.approx(0.21, rel=1e-9)
        assert coe.semimajor_axis_km == pytest.approx(_R / 0.79, rel=1e-9)
        assert coe.semilatus_rectum_km == pytest.approx(1.21 * _R, rel=1e-9)
        assert coe.longitude_periapsis_rad == pytest.approx(0.0, abs=1e-6)
        assert coe.true_anomaly_rad == pytest.approx(0.0, abs=1e-6)
        assert math.isnan(coe.raan_rad)

    def test_inclined_at_perigee(self):
        inc = math.radians(30.0)
        v = 1.1 * _V_CIRC
        coe = ClassicalOrbitalElements.from_position_velocity(
            (_R, 0.0, 0.0), (0.0, v * math.cos(inc), v * math.sin(inc)), _MU,
        )
        assert coe.eccentricity == pytest.approx(0.21, rel=1e-9)
        assert coe.inclination_rad == pytest.approx(inc, abs=1e-12)
        assert coe.raan_rad == pytest.approx(0.0, abs=1e-9)
        assert coe.arg_perigee_rad == pytest.approx(0.0, abs=1e-6)
        assert coe.true_anomaly_rad == pytest.approx(0.0, abs=1e-6)
        assert coe.mean_anomaly_rad == pytest.approx(0.0, abs=1e-6)

    def test_mean_anomaly_after_perigee(self):
        """True anomaly 90° with e=0.21 -> Kepler's equation."""
        ecc = 0.21
        p = 1.21 * _R
        r = p / (1.0 + ecc * math.cos(math.pi / 2.0))
        h = math.sqrt(_MU * p)
        v_r = _MU / h * ecc
        v_t = h / r
        coe = ClassicalOrbitalElements.from_position_velocity(
            (0.0, r, 0.0), (-v_t, v_r, 0.0), _MU,
        )
        assert coe.true_anomaly_rad == pytest.approx(math.pi / 2.0, abs=1e-9)
        big_e = math.atan2(math.sqrt(1.0 - ecc * ecc), ecc)
        expected_m = big_e - ecc * math.sin(big_e)
        assert coe.mean_anomaly_rad == pytest.approx(expected_m, abs=1e-9)

    def test_hyperbolic_negative_axis(self):
        coe = ClassicalOrbitalElements.from_position_velocity(
            (_R, 0.0, 0.0), (0.0, 1.6 * _V_CIRC, 0.0), _MU,
        )
        assert coe.eccentricity > 1.0
        assert coe.semimajor_axis_km < 0.0


class TestFromStateVector:

    def test_delegates_to_position_velocity(self):
        sv = StateVector(JulianDate(2459650.5), (_R, 0.0, 0.0), (0.0, _V_CIRC, 0.0))
        coe = ClassicalOrbitalElements.from_state_vector(sv, _MU)
        assert coe.semimajor_axis_km == pytest.approx(_R, rel=1e-9)

    def test_zero_position_raises(self):
        sv = StateVector(JulianDate(2459650.5), (0.0, 0.0, 0.0), (0.0, 0.0, 0.0))
        with pytest.raises(ValueError):
            ClassicalOrbitalElements.from_state_vector(sv, _MU)


class TestDomainPurity:
    """Verify classical_elements.py depends only on stdlib and numpy."""

    def test_no_external_imports(self):
        source_path = (
            Path(__file__).resolve().parent.parent
            / "src" / "tleprop" / "domain" / "classical_elements.py"
        )
        tree = ast.parse(source_path.read_text(encoding="utf-8"))
        allowed = {"__future__", "math", "dataclasses", "typing", "numpy"}
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    top = alias.name.split(".")[0]
                    assert top in allowed or top == "tleprop", \
                        f"Forbidden import: {alias.name}"
            elif isinstance(node, ast.ImportFrom):
                if node.module:
                    top = node.module.split(".")[0]
                    assert top in allowed or top == "tleprop", \
                        f"Forbidden import from: {node.module}"
