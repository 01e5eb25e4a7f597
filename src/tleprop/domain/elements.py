# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Element record adaptation: TLE units to SGP4 engine units.

TLE mean elements are SGP4-specific, NOT pure Keplerian. This module only
converts units and the epoch; the propagation theory lives behind the
PropagationEngine port.

No external dependencies — only stdlib dataclasses/enum.
"""
from dataclasses import dataclass
from enum import Enum

from tleprop.domain.julian_date import JulianDate, days_to_datetime
from tleprop.domain.tle import TwoLineElement
from tleprop.domain.units import Units

# Two-digit epoch years below this are 20xx, the rest 19xx
_EPOCH_CENTURY_PIVOT = 57


class GravityModel(Enum):
    """Earth gravity constant sets understood by SGP4."""
    WGS72_OLD = "wgs72old"
    WGS72 = "wgs72"
    WGS84 = "wgs84"


@dataclass(frozen=True)
class ElementRecord:
    """Mean elements in engine units, ready for SGP4 initialization."""
    catalog_number: str
    classification: str
    epoch_year: int
    epoch_day_of_year: float
    epoch: JulianDate
    epoch_days_since_1950: float    # days since 1949-12-31 00:00 UT
    bstar: float                    # 1/earth radii
    mean_motion_dot: float          # rad/min²
    mean_motion_ddot: float         # rad/min³
    eccentricity: float
    arg_perigee_rad: float
    inclination_rad: float
    mean_anomaly_rad: float
    mean_motion_rad_min: float
    raan_rad: float
    ephemeris_type: int = 0
    element_set_number: int = 0
    revolution_number: int = 0


def tle_epoch(epoch_year: int, epoch_day_of_year: float) -> JulianDate:
    """Split Julian Date of a TLE epoch (two-digit year, fractional day)."""
    year = epoch_year + (2000 if epoch_year < _EPOCH_CENTURY_PIVOT else 1900)
    return JulianDate.from_datetime(days_to_datetime(year, epoch_day_of_year))


def adapt_tle(tle: TwoLineElement) -> ElementRecord:
    """
    Convert a TwoLineElement into an ElementRecord.

    Mean motion rev/day -> rad/min, its derivatives per day² and day³ ->
    per min² and min³, and all angles degrees -> radians.

    Args:
        tle: Parsed or hand-built TLE.

    Returns:
        ElementRecord with the epoch as a split Julian Date.
    """
    xpdotp = Units.REV_PER_DAY_PER_RAD_PER_MIN
    epoch = tle_epoch(tle.epoch_year, tle.epoch_day_of_year)

    return ElementRecord(
        catalog_number=tle.catalog_number,
        classification=tle.classification,
        epoch_year=tle.epoch_year,
        epoch_day_of_year=tle.epoch_day_of_year,
        epoch=epoch,
        epoch_days_since_1950=(epoch.whole + epoch.frac) - Units.SGP4_REFERENCE_JD,
        bstar=tle.bstar,
        mean_motion_dot=tle.mean_motion_dot / (xpdotp * Units.MINUTES_PER_DAY),
        mean_motion_ddot=tle.mean_motion_ddot / (
            xpdotp * Units.MINUTES_PER_DAY * Units.MINUTES_PER_DAY
        ),
        eccentricity=tle.eccentricity,
        arg_perigee_rad=tle.arg_perigee_deg * Units.DEG_TO_RAD,
        inclination_rad=tle.inclination_deg * Units.DEG_TO_RAD,
        mean_anomaly_rad=tle.mean_anomaly_deg * Units.DEG_TO_RAD,
        mean_motion_rad_min=tle.mean_motion_rev_per_day / xpdotp,
        raan_rad=tle.raan_deg * Units.DEG_TO_RAD,
        ephemeris_type=tle.ephemeris_type,
        element_set_number=tle.element_set_number,
        revolution_number=tle.revolution_number,
    )
