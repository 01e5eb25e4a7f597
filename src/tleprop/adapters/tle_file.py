# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
TLE catalog files: reading, writing and line formatting.

Catalogs hold either bare TLE pairs or three-line entries (name, line 1,
line 2), as served by CelesTrak and Space-Track. Blank lines are ignored.
Entries that fail to parse are skipped with a warning; a file whose lines
do not pair up at all raises TleFileError.

TLE format: https://celestrak.org/NORAD/documentation/tle-fmt.php
"""
import logging
import math
from dataclasses import dataclass

from tleprop.domain.tle import (
    TLE_LINE_LEN,
    TleParseError,
    TwoLineElement,
    parse_tle,
    tle_line_checksum,
)

_log = logging.getLogger(__name__)


class TleFileError(ValueError):
    """A TLE catalog is structurally broken, or a record cannot be written."""


@dataclass(frozen=True)
class TleEntry:
    """One catalog entry: optional name, raw lines, parsed record."""
    name: str
    line_1: str
    line_2: str
    tle: TwoLineElement


def _is_line(text: str, number: str) -> bool:
    return text.startswith(number + " ")


def split_tle_catalog(text: str) -> list[tuple[str, str, str]]:
    """
    Split catalog text into (name, line 1, line 2) triples without parsing.

    The name is empty for 2-line catalogs.

    Raises:
        TleFileError: If a line 1 is not followed by a line 2, or a line 2
            appears without a line 1.
    """
    lines = [line.rstrip("\r\n") for line in text.splitlines() if line.strip()]
    triples: list[tuple[str, str, str]] = []
    name = ""
    i = 0
    while i < len(lines):
        line = lines[i]
        if _is_line(line, "1"):
            if i + 1 >= len(lines) or not _is_line(lines[i + 1], "2"):
                raise TleFileError(f"Line {i + 1}: TLE line 1 without a line 2")
            triples.append((name, line, lines[i + 1]))
            name = ""
            i += 2
        elif _is_line(line, "2"):
            raise TleFileError(f"Line {i + 1}: TLE line 2 without a line 1")
        else:
            name = line.strip()
            i += 1
    return triples


def parse_tle_catalog(text: str) -> list[TleEntry]:
    """
    Parse catalog text into entries.

    Args:
        text: Contents of a 2-line or 3-line TLE catalog.

    Returns:
        Successfully parsed entries, in file order.

    Raises:
        TleFileError: If the lines do not pair up (see split_tle_catalog).
    """
    entries: list[TleEntry] = []
    for name, line_1, line_2 in split_tle_catalog(text):
        result = parse_tle(line_1, line_2)
        if result.tle is None:
            _log.warning("Skipping %s: %s", name or line_1[2:7], result.error.name)
            continue
        entries.append(TleEntry(name, line_1, line_2, result.tle))
    return entries


def read_tle_file(path: str) -> list[TleEntry]:
    """Read and parse a TLE catalog file. See parse_tle_catalog()."""
    with open(path, encoding="utf-8") as f:
        text = f.read()
    entries = parse_tle_catalog(text)
    _log.debug("Read %d TLE entries from %s", len(entries), path)
    return entries


def _format_decimal_rate(value: float) -> str:
    """First derivative field: sign + '.NNNNNNNN' (10 columns)."""
    sign = "-" if value < 0 else " "
    digits = f"{abs(value):.8f}"
    if digits.startswith("0"):
        digits = digits[1:]
    return sign + digits


def _format_implied_exponent(value: float) -> str:
    """Implied-decimal field: sign + 5 mantissa digits + signed exponent (8 columns)."""
    if value == 0.0:
        return " 00000-0"
    sign = "-" if value < 0 else " "
    magnitude = abs(value)
    exponent = math.floor(math.log10(magnitude)) + 1
    mantissa = round(magnitude / 10.0**exponent * 1e5)
    if mantissa >= 100000:
        mantissa //= 10
        exponent += 1
    exp_sign = "-" if exponent < 0 else "+"
    return f"{sign}{mantissa:05d}{exp_sign}{abs(exponent)}"


def format_tle(tle: TwoLineElement) -> tuple[str, str]:
    """
    Format a TwoLineElement as two 69-column lines with checksums.

    Element set and revolution numbers are right-aligned with blanks,
    as most producers write them. The stored checksums are ignored and
    recomputed.
    """
    line_1 = (
        f"1 {tle.catalog_number:>5}{tle.classification} "
        f"{tle.launch_year:02d}{tle.launch_number:03d}{tle.launch_piece:<3} "
        f"{tle.epoch_year:02d}{tle.epoch_day_of_year:012.8f} "
        f"{_format_decimal_rate(tle.mean_motion_dot)} "
        f"{_format_implied_exponent(tle.mean_motion_ddot)} "
        f"{_format_implied_exponent(tle.bstar)} "
        f"{tle.ephemeris_type:1d} "
        f"{tle.element_set_number:4d}"
    )
    ecc_str = f"{tle.eccentricity:.7f}"[2:]  # "0.0000000" -> "0000000"
    line_2 = (
        f"2 {tle.catalog_number:>5} "
        f"{tle.inclination_deg:8.4f} "
        f"{tle.raan_deg:8.4f} "
        f"{ecc_str} "
        f"{tle.arg_perigee_deg:8.4f} "
        f"{tle.mean_anomaly_deg:8.4f} "
        f"{tle.mean_motion_rev_per_day:11.8f}"
        f"{tle.revolution_number:5d}"
    )
    return (
        line_1 + str(tle_line_checksum(line_1)),
        line_2 + str(tle_line_checksum(line_2)),
    )


def write_tle_file(entries: list[TleEntry], path: str) -> int:
    """
    Write entries as a TLE catalog (3-line form when an entry has a name).

    Lines are regenerated from the parsed records, so the output is
    always column-exact.

    Returns:
        Number of entries written.

    Raises:
        TleFileError: If a record does not fit the TLE columns.
    """
    lines: list[str] = []
    for entry in entries:
        line_1, line_2 = format_tle(entry.tle)
        if len(line_1) != TLE_LINE_LEN or len(line_2) != TLE_LINE_LEN:
            label = entry.name or entry.tle.catalog_number
            raise TleFileError(f"{label}: value too wide for TLE columns")
        error = parse_tle(line_1, line_2).error
        if error != TleParseError.NONE:
            label = entry.name or entry.tle.catalog_number
            raise TleFileError(f"{label}: formatted record rejected ({error.name})")
        if entry.name:
            lines.append(entry.name)
        lines.append(line_1)
        lines.append(line_2)

    with open(path, "w", encoding="utf-8") as f:
        if lines:
            f.write("\n".join(lines) + "\n")

    return len(entries)
