# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for TLE checking and SGP4 propagation.

Usage:
    # Propagate every entry of a catalog: 10 states, 60 minutes apart
    tleprop stations.txt --steps 10 --step-minutes 60

    # Start 1 day before epoch, WGS-84 constants
    tleprop stations.txt --start-minutes -1440 --gravity-model wgs84

    # Only report parse diagnostics for each record
    tleprop stations.txt --check
"""
import argparse
import logging
import sys

from tleprop.adapters.sgp4_engine import Sgp4Engine
from tleprop.adapters.tle_file import (
    TleEntry,
    TleFileError,
    read_tle_file,
    split_tle_catalog,
)
from tleprop.domain.elements import GravityModel
from tleprop.domain.julian_date import DateTime
from tleprop.domain.satellite import Satellite, Sgp4Error
from tleprop.domain.tle import TleParseError, parse_tle
from tleprop.ports.propagation import PropagationEngine


def format_datetime(t: DateTime) -> str:
    """ISO-like calendar string with millisecond seconds."""
    return (
        f"{t.year:04d}-{t.month:02d}-{t.day:02d} "
        f"{t.hour:02d}:{t.minute:02d}:{t.second:06.3f}"
    )


def _entry_label(name: str, line_1: str) -> str:
    catalog = line_1[2:7].strip()
    return f"{name} [{catalog}]" if name else catalog


def run_check(path: str) -> tuple[int, int]:
    """
    Print one parse verdict per catalog record.

    Returns:
        (records checked, records rejected).
    """
    with open(path, encoding="utf-8") as f:
        text = f.read()

    rejected = 0
    triples = split_tle_catalog(text)
    for name, line_1, line_2 in triples:
        error = parse_tle(line_1, line_2).error
        if error != TleParseError.NONE:
            rejected += 1
        verdict = "OK" if error == TleParseError.NONE else error.name
        print(f"{_entry_label(name, line_1)}: {verdict}")
    return len(triples), rejected


def propagate_entry(
    entry: TleEntry,
    engine: PropagationEngine,
    gravity_model: GravityModel,
    start_minutes: float,
    step_minutes: float,
    steps: int,
) -> None:
    """Print the epoch and a TEME state table for one catalog entry."""
    sat = Satellite.from_tle(entry.tle, engine, gravity_model)
    epoch = format_datetime(sat.epoch().to_datetime())
    print(f"{_entry_label(entry.name, entry.line_1)}  epoch {epoch} UTC")
    if sat.last_error() != Sgp4Error.NONE:
        print(f"  initialization failed: {sat.last_error().name}")
        return

    print(
        f"  {'minutes':>10}  {'x km':>12} {'y km':>12} {'z km':>12}"
        f"  {'vx km/s':>10} {'vy km/s':>10} {'vz km/s':>10}"
    )
    for k in range(steps):
        minutes = start_minutes + k * step_minutes
        error, state = sat.propagate_from_epoch(minutes)
        if error != Sgp4Error.NONE:
            print(f"  {minutes:10.2f}  {error.name}")
            continue
        x, y, z = state.position
        vx, vy, vz = state.velocity
        print(
            f"  {minutes:10.2f}  {x:12.4f} {y:12.4f} {z:12.4f}"
            f"  {vx:10.6f} {vy:10.6f} {vz:10.6f}"
        )


def run(
    path: str,
    gravity_model: GravityModel = GravityModel.WGS72,
    start_minutes: float = 0.0,
    step_minutes: float = 60.0,
    steps: int = 5,
) -> int:
    """
    Propagate every parseable entry of a catalog file.

    Returns:
        Number of entries propagated.
    """
    entries = read_tle_file(path)
    engine = Sgp4Engine()
    for entry in entries:
        propagate_entry(
            entry, engine, gravity_model, start_minutes, step_minutes, steps,
        )
    return len(entries)


def main():
    parser = argparse.ArgumentParser(
        description="Parse TLE catalogs and propagate them with SGP4"
    )
    parser.add_argument('file', help="Path to a 2-line or 3-line TLE catalog")
    parser.add_argument(
        '--start-minutes', type=float, default=0.0,
        help="First output time in minutes since each epoch (default: 0)"
    )
    parser.add_argument(
        '--step-minutes', type=float, default=60.0,
        help="Spacing of output times in minutes (default: 60)"
    )
    parser.add_argument(
        '--steps', type=int, default=5,
        help="Number of output times per entry (default: 5)"
    )
    parser.add_argument(
        '--gravity-model', default=GravityModel.WGS72.value,
        choices=[m.value for m in GravityModel],
        help="Earth gravity constants (default: wgs72)"
    )
    parser.add_argument(
        '--check', action='store_true', default=False,
        help="Only report parse diagnostics for each record"
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true', default=False,
        help="Log parser and engine details to stderr"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        if args.check:
            total, rejected = run_check(args.file)
            print(f"Checked {total} records, {rejected} rejected.")
        else:
            count = run(
                path=args.file,
                gravity_model=GravityModel(args.gravity_model),
                start_minutes=args.start_minutes,
                step_minutes=args.step_minutes,
                steps=args.steps,
            )
            print(f"Propagated {count} satellites.")

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except TleFileError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
