# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
tleprop

Parse Two-Line Element sets and propagate them with SGP4. Includes a
column-exact TLE parser with ordered diagnostics, a split-precision
Julian Date, unit adaptation to SGP4 engine inputs, a Satellite facade
with a latched error state, osculating classical elements, and TLE
catalog file I/O.
"""

from tleprop.domain.units import Units
from tleprop.domain.julian_date import (
    DateTime,
    JulianDate,
    days_to_datetime,
)
from tleprop.domain.tle import (
    TleParseError,
    TleParseResult,
    TwoLineElement,
    parse_tle,
    tle_line_checksum,
)
from tleprop.domain.elements import (
    ElementRecord,
    GravityModel,
    adapt_tle,
    tle_epoch,
)
from tleprop.domain.classical_elements import ClassicalOrbitalElements
from tleprop.domain.satellite import (
    Satellite,
    Sgp4Error,
    StateVector,
)
from tleprop.ports.propagation import PropagationEngine

__all__ = [
    "Units",
    "DateTime",
    "JulianDate",
    "days_to_datetime",
    "TleParseError",
    "TleParseResult",
    "TwoLineElement",
    "parse_tle",
    "tle_line_checksum",
    "ElementRecord",
    "GravityModel",
    "adapt_tle",
    "tle_epoch",
    "ClassicalOrbitalElements",
    "Satellite",
    "Sgp4Error",
    "StateVector",
    "PropagationEngine",
]
