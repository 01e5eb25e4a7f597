# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Two-Line Element (TLE) record parsing.

Parses the fixed-column Celestrak/Space-Track TLE format into a
TwoLineElement. Parsing never raises on bad data: it reports exactly one
TleParseError, and the checks always run in the same order:

    1. MALFORMED_SPACING: a mandatory blank column holds something else
    2. MALFORMED_FORMAT: the fields could not all be scanned
    3. INVALID_VALUE: a scanned value is out of range
    4. CHECKSUM_MISMATCH: the modulo-10 line checksum is wrong

So a CHECKSUM_MISMATCH means the layout and every value were fine.

Fields are read with C ``scanf`` matching rules (skip blanks, then consume
at most the field width). Legacy producers write small element set and
revolution numbers without leading zeros; the scanner then swallows the
checksum digit, which is detected and undone after the scan.

TLE format: https://celestrak.org/NORAD/documentation/tle-fmt.php
No external dependencies — only stdlib logging/dataclasses/enum.
"""
import logging
from dataclasses import dataclass
from enum import IntEnum

_log = logging.getLogger(__name__)

TLE_LINE_LEN = 69

# 1-based columns that must hold a blank
_LINE_1_SPACES = (2, 9, 18, 33, 44, 53, 62, 64)
_LINE_2_SPACES = (2, 8, 17, 26, 34, 43, 52)

_LINE_1_FIELD_COUNT = 16
_LINE_2_FIELD_COUNT = 10

# Implied-decimal exponent fields are scanned as integers when no '.' is
# present, which shifts the mantissa by five digits
_IMPLIED_DECIMAL_SHIFT = 5

_VALID_CLASSIFICATIONS = frozenset("UCS")

# C isspace()
_BLANKS = " \t\n\v\f\r"
_DIGITS = "0123456789"
_SIGNS = "+-"
# strtod special values, longest spelling first
_SPECIAL_REALS = ("infinity", "inf", "nan")


class TleParseError(IntEnum):
    """Outcome of parsing a TLE. Non-NONE values are reported in this order."""
    NONE = 0
    MALFORMED_SPACING = 1
    MALFORMED_FORMAT = 2
    INVALID_VALUE = 3
    CHECKSUM_MISMATCH = 4


@dataclass(frozen=True)
class TwoLineElement:
    """All fields of a TLE pair, in the units the format uses."""
    # Line 1
    catalog_number: str
    classification: str
    launch_year: int
    launch_number: int
    launch_piece: str
    epoch_year: int
    epoch_day_of_year: float
    mean_motion_dot: float          # rev/day²
    mean_motion_ddot: float         # rev/day³
    bstar: float                    # 1/earth radii
    ephemeris_type: int
    element_set_number: int
    line_1_checksum: int
    # Line 2
    inclination_deg: float
    raan_deg: float
    eccentricity: float
    arg_perigee_deg: float
    mean_anomaly_deg: float
    mean_motion_rev_per_day: float
    revolution_number: int
    line_2_checksum: int


@dataclass(frozen=True)
class TleParseResult:
    """Parse outcome. ``tle`` is None unless ``error`` is NONE."""
    error: TleParseError
    tle: TwoLineElement | None = None

    @property
    def ok(self) -> bool:
        return self.error == TleParseError.NONE


def tle_line_checksum(line: str) -> int:
    """Compute TLE checksum: sum digits ('-' counts as 1), mod 10."""
    total = 0
    for ch in line[:TLE_LINE_LEN - 1]:
        if ch in _DIGITS:
            total += int(ch)
        elif ch == "-":
            total += 1
    return total % 10


class _FieldScanner:
    """
    Reads consecutive fields from one TLE line like C ``sscanf``.

    Every read skips leading blanks and consumes at most ``width``
    characters. The first failed read stops the scan: that read and all
    later ones return None and do not count towards ``matched``.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._stopped = False
        self.matched = 0

    def _start_field(self) -> bool:
        if self._stopped:
            return False
        text = self._text
        while self._pos < len(text) and text[self._pos] in _BLANKS:
            self._pos += 1
        if self._pos >= len(text):
            self._stopped = True
            return False
        return True

    def _take(self, chars: str, start: int, end: int) -> int:
        """Advance over characters in ``chars`` from ``start`` up to ``end``."""
        text = self._text
        pos = start
        while pos < end and text[pos] in chars:
            pos += 1
        return pos

    def _accept(self, end: int) -> str:
        token = self._text[self._pos:end]
        self._pos = end
        self.matched += 1
        return token

    def _fail(self) -> None:
        self._stopped = True
        return None

    def _integer_end(self, width: int) -> int | None:
        limit = min(self._pos + width, len(self._text))
        start = self._pos
        if start < limit and self._text[start] in _SIGNS:
            start += 1
        end = self._take(_DIGITS, start, limit)
        return end if end > start else None

    def unsigned(self, width: int, bits: int = 32) -> int | None:
        """``%Nu``: optional sign, digits. Negatives wrap like C unsigned."""
        if not self._start_field():
            return None
        end = self._integer_end(width)
        if end is None:
            return self._fail()
        return int(self._accept(end)) % (1 << bits)

    def signed(self, width: int) -> int | None:
        """``%Nd``: optional sign, digits."""
        if not self._start_field():
            return None
        end = self._integer_end(width)
        if end is None:
            return self._fail()
        return int(self._accept(end))

    def real(self, width: int) -> float | None:
        """``%Nlf``: [sign] digits [. digits] [e [sign] digits], or inf/nan."""
        if not self._start_field():
            return None
        text = self._text
        limit = min(self._pos + width, len(text))
        pos = self._pos
        if pos < limit and text[pos] in _SIGNS:
            pos += 1
        for special in _SPECIAL_REALS:
            end = pos + len(special)
            if end <= limit and text[pos:end].lower() == special:
                return float(self._accept(end))
        int_end = self._take(_DIGITS, pos, limit)
        n_digits = int_end - pos
        pos = int_end
        if pos < limit and text[pos] == ".":
            frac_end = self._take(_DIGITS, pos + 1, limit)
            n_digits += frac_end - (pos + 1)
            pos = frac_end
        if n_digits == 0:
            return self._fail()
        if pos < limit and text[pos] in "eE":
            exp_start = pos + 1
            if exp_start < limit and text[exp_start] in _SIGNS:
                exp_start += 1
            exp_end = self._take(_DIGITS, exp_start, limit)
            if exp_end > exp_start:
                pos = exp_end
        return float(self._accept(pos))

    def word(self, width: int) -> str | None:
        """``%Ns``: up to ``width`` non-blank characters."""
        if not self._start_field():
            return None
        limit = min(self._pos + width, len(self._text))
        end = self._pos
        while end < limit and self._text[end] not in _BLANKS:
            end += 1
        return self._accept(end)

    def char(self) -> str | None:
        """`` %c``: the next non-blank character."""
        if not self._start_field():
            return None
        return self._accept(self._pos + 1)

    def position(self) -> int | None:
        """`` %n``: cursor after skipping blanks. Not counted as a field."""
        if self._stopped:
            return None
        text = self._text
        while self._pos < len(text) and text[self._pos] in _BLANKS:
            self._pos += 1
        return self._pos


def _digit_value(ch: str) -> int:
    """Digit value, or -1 (never a valid checksum) for anything else."""
    return int(ch) if ch in _DIGITS else -1


def _has_spaces(line: str, columns: tuple[int, ...]) -> bool:
    return all(line[col - 1] == " " for col in columns)


def parse_tle(line_1: str, line_2: str) -> TleParseResult:
    """
    Parse a TLE pair into a TwoLineElement.

    Only the first 69 characters of each line are read. Lines shorter
    than that are reported as MALFORMED_FORMAT without further checks.

    Args:
        line_1: First TLE line.
        line_2: Second TLE line.

    Returns:
        TleParseResult with the first detected error (see module docs);
        ``tle`` is set only when the error is NONE.
    """
    if len(line_1) < TLE_LINE_LEN or len(line_2) < TLE_LINE_LEN:
        return TleParseResult(TleParseError.MALFORMED_FORMAT)
    line_1 = line_1[:TLE_LINE_LEN]
    line_2 = line_2[:TLE_LINE_LEN]

    if not (_has_spaces(line_1, _LINE_1_SPACES) and _has_spaces(line_2, _LINE_2_SPACES)):
        return TleParseResult(TleParseError.MALFORMED_SPACING)

    # Line 1
    s1 = _FieldScanner(line_1)
    line_1_number = s1.unsigned(1, bits=8)
    catalog_number = s1.word(5)
    classification = s1.char()
    launch_year = s1.unsigned(2)
    launch_number = s1.unsigned(3)
    launch_piece = s1.word(3)
    epoch_year = s1.unsigned(2)
    epoch_day_of_year = s1.real(12)
    mean_motion_dot = s1.real(10)
    mean_motion_ddot = s1.real(6)
    n_ddot_exp = s1.signed(2)
    bstar = s1.real(6)
    bstar_exp = s1.signed(2)
    ephemeris_type = s1.unsigned(1, bits=8)
    element_set_number = s1.unsigned(4)
    l1_pre_checksum = s1.position()
    line_1_checksum = s1.unsigned(1, bits=8)
    l1_scanned = s1.matched

    # Line 2; mean motion is one column narrower when it starts with a blank
    mean_motion_width = 10 if line_2[52] == " " else 11
    s2 = _FieldScanner(line_2)
    line_2_number = s2.unsigned(1, bits=8)
    catalog_number_2 = s2.word(5)
    inclination_deg = s2.real(8)
    raan_deg = s2.real(8)
    eccentricity_int = s2.unsigned(7, bits=64)
    arg_perigee_deg = s2.real(8)
    mean_anomaly_deg = s2.real(8)
    mean_motion_rev_per_day = s2.real(mean_motion_width)
    revolution_number = s2.unsigned(5, bits=64)
    l2_pre_checksum = s2.position()
    line_2_checksum = s2.unsigned(1, bits=8)
    l2_scanned = s2.matched

    if (
        l1_scanned == _LINE_1_FIELD_COUNT - 1
        and l1_pre_checksum >= TLE_LINE_LEN
        and line_1[TLE_LINE_LEN - 5] == " "
    ):
        # Element set number without leading zeros ate the checksum
        element_set_number //= 10
        line_1_checksum = _digit_value(line_1[TLE_LINE_LEN - 1])
        l1_scanned += 1
        _log.debug("Recovered line 1 checksum from element set number")
    if (
        l2_scanned == _LINE_2_FIELD_COUNT - 1
        and l2_pre_checksum >= TLE_LINE_LEN
        and line_2[TLE_LINE_LEN - 6] == " "
    ):
        # Same for a revolution number without leading zeros
        revolution_number //= 10
        line_2_checksum = _digit_value(line_2[TLE_LINE_LEN - 1])
        l2_scanned += 1
        _log.debug("Recovered line 2 checksum from revolution number")

    if l1_scanned != _LINE_1_FIELD_COUNT or l2_scanned != _LINE_2_FIELD_COUNT:
        return TleParseResult(TleParseError.MALFORMED_FORMAT)

    if line_1[44] != ".":
        n_ddot_exp -= _IMPLIED_DECIMAL_SHIFT
    if line_1[53] != ".":
        bstar_exp -= _IMPLIED_DECIMAL_SHIFT

    mean_motion_ddot *= 10.0 ** n_ddot_exp
    bstar *= 10.0 ** bstar_exp
    eccentricity = eccentricity_int / 1.0e7

    valid = (
        line_1_number == 1
        and classification in _VALID_CLASSIFICATIONS
        and launch_year < 100
        and epoch_year < 100
        and 1.0 <= epoch_day_of_year <= 366.0
        and -15 < n_ddot_exp < 10
        and -15 < bstar_exp < 10
        and ephemeris_type == 0
        and element_set_number < 10000
        and line_2_number == 2
        and catalog_number == catalog_number_2
        and 0.0 <= inclination_deg <= 180.0
        and 0.0 <= raan_deg <= 360.0
        and 0.0 <= arg_perigee_deg <= 360.0
        and 0.0 <= mean_anomaly_deg <= 360.0
    )
    if not valid:
        return TleParseResult(TleParseError.INVALID_VALUE)

    if (
        tle_line_checksum(line_1) != line_1_checksum
        or tle_line_checksum(line_2) != line_2_checksum
    ):
        return TleParseResult(TleParseError.CHECKSUM_MISMATCH)

    tle = TwoLineElement(
        catalog_number=catalog_number,
        classification=classification,
        launch_year=launch_year,
        launch_number=launch_number,
        launch_piece=launch_piece,
        epoch_year=epoch_year,
        epoch_day_of_year=epoch_day_of_year,
        mean_motion_dot=mean_motion_dot,
        mean_motion_ddot=mean_motion_ddot,
        bstar=bstar,
        ephemeris_type=ephemeris_type,
        element_set_number=element_set_number,
        line_1_checksum=line_1_checksum,
        inclination_deg=inclination_deg,
        raan_deg=raan_deg,
        eccentricity=eccentricity,
        arg_perigee_deg=arg_perigee_deg,
        mean_anomaly_deg=mean_anomaly_deg,
        mean_motion_rev_per_day=mean_motion_rev_per_day,
        revolution_number=revolution_number,
        line_2_checksum=line_2_checksum,
    )
    return TleParseResult(TleParseError.NONE, tle)
