# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for the SGP4 engine and TLE catalog files.

External dependencies (sgp4, file I/O) are confined to this layer.
"""
from tleprop.adapters.sgp4_engine import Sgp4Engine, catalog_to_satnum
from tleprop.adapters.tle_file import (
    TleEntry,
    TleFileError,
    format_tle,
    parse_tle_catalog,
    read_tle_file,
    split_tle_catalog,
    write_tle_file,
)

__all__ = [
    "Sgp4Engine",
    "catalog_to_satnum",
    "TleEntry",
    "TleFileError",
    "format_tle",
    "parse_tle_catalog",
    "read_tle_file",
    "split_tle_catalog",
    "write_tle_file",
]
