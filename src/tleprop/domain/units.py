# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Unit-conversion constants shared by the time and element layers.

No external dependencies — only stdlib math/dataclasses.
"""
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class _Units:
    """Fixed conversion factors between TLE units and SGP4 engine units."""
    MINUTES_PER_DAY: float = 1440.0
    SECONDS_PER_DAY: float = 86400.0
    DEG_TO_RAD: float = math.pi / 180.0
    # rev/day -> rad/min is a division by this factor
    REV_PER_DAY_PER_RAD_PER_MIN: float = 1440.0 / (2.0 * math.pi)
    # Julian Date of 1949-12-31 00:00 UT, the SGP4 epoch reference
    SGP4_REFERENCE_JD: float = 2433281.5


Units: _Units = _Units()
