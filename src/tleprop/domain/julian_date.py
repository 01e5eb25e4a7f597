# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Split-precision Julian Date value object and calendar conversions.

A Julian Date near the present is a 7-digit day count, so a single 64-bit
float only resolves it to ~40 μs. JulianDate keeps the value as a sum
``whole + frac``, which holds sub-microsecond timing across arithmetic
and comparisons.

Calendar conversions follow Vallado's jday/invjday/days2mdhms and are
valid for years 1900-2100. Nothing is validated: an impossible date gives
a consistent but meaningless Julian Date.

No external dependencies — only stdlib math/dataclasses.
"""
import math
from dataclasses import dataclass

from tleprop.domain.units import Units

# Days in each month of a common year, index 0 unused
_MONTH_LENGTHS = (0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


@dataclass(frozen=True)
class DateTime:
    """Calendar time (UTC). Seconds may be fractional."""
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: float = 0.0


def days_to_datetime(year: int, days: float) -> DateTime:
    """
    Convert a fractional day-of-year into a calendar time.

    Day 1.0 is January 1st, 00:00. Uses the simple every-4-years leap rule,
    which is exact inside 1901-2099.

    Args:
        year: Four-digit year.
        days: Fractional day of year (1.0 <= days < 367.0).

    Returns:
        DateTime in the given year.
    """
    day_of_year = math.floor(days)
    month_lengths = list(_MONTH_LENGTHS)
    if year % 4 == 0:
        month_lengths[2] = 29

    month = 1
    elapsed = 0
    while day_of_year > elapsed + month_lengths[month] and month < 12:
        elapsed += month_lengths[month]
        month += 1
    day = day_of_year - elapsed

    temp = (days - day_of_year) * 24.0
    hour = math.floor(temp)
    temp = (temp - hour) * 60.0
    minute = math.floor(temp)
    second = (temp - minute) * 60.0

    return DateTime(
        year=year, month=month, day=int(day),
        hour=int(hour), minute=int(minute), second=second,
    )


@dataclass(frozen=True, eq=False)
class JulianDate:
    """
    Absolute time as a split Julian Date, true value ``whole + frac``.

    Normalized form has ``whole`` on a .5 boundary (midnight) and
    ``0 <= frac < 1``. Arithmetic never normalizes: adding days only
    touches ``frac``. Call normalized() explicitly when a canonical split
    is needed.

    Equality and ordering compare the signed difference, so two dates with
    different splits of the same value are equal. For that reason the type
    is not hashable.
    """

    whole: float
    frac: float = 0.0

    # -- Construction ------------------------------------------------------- #

    @staticmethod
    def from_datetime(t: DateTime) -> "JulianDate":
        """Create from a calendar time. ``whole`` lands on midnight."""
        return JulianDate.from_calendar(
            t.year, t.month, t.day, t.hour, t.minute, t.second,
        )

    @staticmethod
    def from_calendar(
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: float = 0.0,
    ) -> "JulianDate":
        """Create from calendar fields (Vallado jday, 1900-2100)."""
        whole = (
            367.0 * year
            - math.floor((7 * (year + math.floor((month + 9) / 12.0))) * 0.25)
            + math.floor(275 * month / 9.0)
            + day
            + 1721013.5
        )
        frac = (second + minute * 60.0 + hour * 3600.0) / Units.SECONDS_PER_DAY

        if abs(frac) > 1.0:
            whole_days = math.floor(frac)
            whole += whole_days
            frac -= whole_days

        return JulianDate(whole, frac)

    # -- Conversions -------------------------------------------------------- #

    @property
    def value(self) -> float:
        """Collapsed single-float Julian Date. Loses the extra precision."""
        return self.whole + self.frac

    def normalized(self) -> "JulianDate":
        """Return the canonical split: ``whole`` at midnight, ``0 <= frac < 1``."""
        whole = self.whole
        frac = self.frac

        frac_days = whole - math.floor(whole) - 0.5
        if frac_days != 0.0:
            whole -= frac_days
            frac += frac_days

        if frac < 0.0 or frac >= 1.0:
            whole_days = math.floor(frac)
            whole += whole_days
            frac -= whole_days

        return JulianDate(whole, frac)

    def to_datetime(self) -> DateTime:
        """Convert to calendar time (Vallado invjday). Accepts any split."""
        jd = self.whole
        jd_frac = self.frac

        if abs(jd_frac) >= 1.0:
            whole_days = math.floor(jd_frac)
            jd += whole_days
            jd_frac -= whole_days

        dt = jd - math.floor(jd) - 0.5
        if dt != 0.0:
            jd -= dt
            jd_frac += dt

        temp = jd - 2415019.5
        tu = temp / 365.25
        year = 1900 + math.floor(tu)
        leap_years = math.floor((year - 1901) * 0.25)
        days = math.floor(temp - ((year - 1900) * 365.0 + leap_years))

        # Start of a year
        if days + jd_frac < 1.0:
            year -= 1
            leap_years = math.floor((year - 1901) * 0.25)
            days = math.floor(temp - ((year - 1900) * 365.0 + leap_years))

        return days_to_datetime(int(year), days + jd_frac)

    # -- Arithmetic --------------------------------------------------------- #

    def __add__(self, days: float) -> "JulianDate":
        """Add days. Only ``frac`` changes; the result is not normalized."""
        if isinstance(days, JulianDate) or not isinstance(days, (int, float)):
            return NotImplemented
        return JulianDate(self.whole, self.frac + days)

    def __radd__(self, days: float) -> "JulianDate":
        return self.__add__(days)

    def __sub__(self, other):
        """Subtract a JulianDate (returns signed days) or days (returns JulianDate)."""
        if isinstance(other, JulianDate):
            # Grouping keeps the large terms apart
            return (self.whole - other.whole) + (self.frac - other.frac)
        if isinstance(other, (int, float)):
            return JulianDate(self.whole, self.frac - other)
        return NotImplemented

    # -- Comparison --------------------------------------------------------- #

    def __eq__(self, other) -> bool:
        if not isinstance(other, JulianDate):
            return NotImplemented
        return (self - other) == 0.0

    def __ne__(self, other) -> bool:
        if not isinstance(other, JulianDate):
            return NotImplemented
        return (self - other) != 0.0

    def __lt__(self, other) -> bool:
        if not isinstance(other, JulianDate):
            return NotImplemented
        return (self - other) < 0.0

    def __le__(self, other) -> bool:
        if not isinstance(other, JulianDate):
            return NotImplemented
        return (self - other) <= 0.0

    def __gt__(self, other) -> bool:
        if not isinstance(other, JulianDate):
            return NotImplemented
        return (self - other) > 0.0

    def __ge__(self, other) -> bool:
        if not isinstance(other, JulianDate):
            return NotImplemented
        return (self - other) >= 0.0

    __hash__ = None

    def __repr__(self) -> str:
        return f"JulianDate(whole={self.whole:.1f}, frac={self.frac:.12f})"
