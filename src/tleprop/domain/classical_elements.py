# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Osculating classical orbital elements from a Cartesian state vector.

Follows Vallado's rv2coe, including the special orbit types where some
angles are undefined:

    ei: elliptical inclined (all angles defined)
    ee: elliptical equatorial (no RAAN/argument of perigee; longitude of periapsis)
    ci: circular inclined (no perigee; argument of latitude)
    ce: circular equatorial (true longitude only)

Undefined angles are NaN. All angles in radians, distances in km.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from tleprop.domain.satellite import StateVector

_SMALL = 1e-8
_TWO_PI = 2.0 * math.pi


@dataclass(frozen=True)
class ClassicalOrbitalElements:
    """Osculating elements. NaN marks an angle undefined for the orbit type."""
    semilatus_rectum_km: float
    semimajor_axis_km: float
    eccentricity: float
    inclination_rad: float
    raan_rad: float
    arg_perigee_rad: float
    true_anomaly_rad: float
    mean_anomaly_rad: float
    arg_latitude_rad: float
    true_longitude_rad: float
    longitude_periapsis_rad: float

    @staticmethod
    def from_state_vector(state: StateVector, mu_km3_s2: float) -> ClassicalOrbitalElements:
        """Elements of a StateVector (km, km/s) for gravitational parameter mu."""
        return ClassicalOrbitalElements.from_position_velocity(
            state.position, state.velocity, mu_km3_s2,
        )

    @staticmethod
    def from_position_velocity(
        position_km,
        velocity_km_s,
        mu_km3_s2: float,
    ) -> ClassicalOrbitalElements:
        """
        Convert position/velocity to classical elements (Vallado rv2coe).

        Args:
            position_km: 3-vector, km.
            velocity_km_s: 3-vector, km/s.
            mu_km3_s2: Gravitational parameter, km³/s².

        Returns:
            ClassicalOrbitalElements. The semi-major axis is +inf for a
            parabolic orbit.

        Raises:
            ValueError: If the position vector is (near) zero.
        """
        r = np.asarray(position_km, dtype=float)
        v = np.asarray(velocity_km_s, dtype=float)
        mu = mu_km3_s2

        r_mag = float(np.linalg.norm(r))
        v_mag = float(np.linalg.norm(v))
        if r_mag < _SMALL:
            raise ValueError("Position vector magnitude too small")

        h_vec = np.cross(r, v)
        h_mag = float(np.linalg.norm(h_vec))
        n_vec = np.array([-h_vec[1], h_vec[0], 0.0])
        n_mag = float(np.linalg.norm(n_vec))

        r_dot_v = float(np.dot(r, v))
        e_vec = ((v_mag**2 - mu / r_mag) * r - r_dot_v * v) / mu
        ecc = float(np.linalg.norm(e_vec))

        energy = v_mag**2 / 2.0 - mu / r_mag
        a = -mu / (2.0 * energy) if abs(energy) > _SMALL else math.inf
        p = h_mag**2 / mu

        incl = math.acos(_clip(h_vec[2] / h_mag))

        equatorial = incl < _SMALL or abs(incl - math.pi) < _SMALL
        if ecc < _SMALL:
            orbit_type = "ce" if equatorial else "ci"
        else:
            orbit_type = "ee" if equatorial else "ei"

        raan = math.nan
        if n_mag > _SMALL:
            raan = math.acos(_clip(n_vec[0] / n_mag))
            if n_vec[1] < 0.0:
                raan = _TWO_PI - raan

        arg_perigee = math.nan
        if orbit_type == "ei":
            arg_perigee = _angle(n_vec, e_vec)
            if e_vec[2] < 0.0:
                arg_perigee = _TWO_PI - arg_perigee

        true_anomaly = math.nan
        if orbit_type[0] == "e":
            true_anomaly = _angle(e_vec, r)
            if r_dot_v < 0.0:
                true_anomaly = _TWO_PI - true_anomaly

        mean_anomaly = math.nan
        arg_latitude = math.nan
        if orbit_type == "ci":
            arg_latitude = _angle(n_vec, r)
            if r[2] < 0.0:
                arg_latitude = _TWO_PI - arg_latitude
            mean_anomaly = arg_latitude

        longitude_periapsis = math.nan
        if ecc > _SMALL and orbit_type == "ee":
            longitude_periapsis = math.acos(_clip(e_vec[0] / ecc))
            if e_vec[1] < 0.0:
                longitude_periapsis = _TWO_PI - longitude_periapsis
            if incl > math.pi / 2.0:
                longitude_periapsis = _TWO_PI - longitude_periapsis

        true_longitude = math.nan
        if r_mag > _SMALL and orbit_type == "ce":
            true_longitude = math.acos(_clip(r[0] / r_mag))
            if r[1] < 0.0:
                true_longitude = _TWO_PI - true_longitude
            if incl > math.pi / 2.0:
                true_longitude = _TWO_PI - true_longitude
            mean_anomaly = true_longitude

        if orbit_type[0] == "e":
            _, mean_anomaly = _eccentric_and_mean_anomaly(ecc, true_anomaly)

        return ClassicalOrbitalElements(
            semilatus_rectum_km=p,
            semimajor_axis_km=a,
            eccentricity=ecc,
            inclination_rad=incl,
            raan_rad=raan,
            arg_perigee_rad=arg_perigee,
            true_anomaly_rad=true_anomaly,
            mean_anomaly_rad=mean_anomaly,
            arg_latitude_rad=arg_latitude,
            true_longitude_rad=true_longitude,
            longitude_periapsis_rad=longitude_periapsis,
        )


def _clip(x: float) -> float:
    return float(np.clip(x, -1.0, 1.0))


def _angle(a: np.ndarray, b: np.ndarray) -> float:
    """Angle between two vectors, NaN if either is (near) zero."""
    denom = float(np.linalg.norm(a) * np.linalg.norm(b))
    if denom <= _SMALL**2:
        return math.nan
    return math.acos(_clip(float(np.dot(a, b)) / denom))


def _eccentric_and_mean_anomaly(ecc: float, nu: float) -> tuple[float, float]:
    """
    Eccentric (or hyperbolic/parabolic) anomaly and mean anomaly from true anomaly.

    Vallado newtonnu. Returns NaN pairs where the anomaly is not reachable
    (hyperbolic asymptote, parabolic beyond 168°).
    """
    e0 = math.nan
    m = math.nan

    if abs(ecc) < _SMALL:
        e0 = nu
        m = nu
    elif ecc < 1.0 - _SMALL:
        denom = 1.0 + ecc * math.cos(nu)
        sine = math.sqrt(1.0 - ecc * ecc) * math.sin(nu) / denom
        cose = (ecc + math.cos(nu)) / denom
        e0 = math.atan2(sine, cose)
        m = e0 - ecc * math.sin(e0)
    elif ecc > 1.0 + _SMALL:
        if abs(nu) + 0.00001 < math.pi - math.acos(1.0 / ecc):
            sine = math.sqrt(ecc * ecc - 1.0) * math.sin(nu) / (1.0 + ecc * math.cos(nu))
            e0 = math.asinh(sine)
            m = ecc * math.sinh(e0) - e0
    elif math.degrees(abs(nu)) < 168.0:
        e0 = math.tan(nu * 0.5)
        m = e0 + (e0 * e0 * e0) / 3.0

    if ecc < 1.0 and not math.isnan(m):
        m = math.fmod(m, _TWO_PI)
        if m < 0.0:
            m += _TWO_PI
        e0 = math.fmod(e0, _TWO_PI)

    return e0, m
