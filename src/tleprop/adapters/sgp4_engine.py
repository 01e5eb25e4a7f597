# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
SGP4 adapter: runs Vallado's SGP4 through the sgp4 package.

External dependency (sgp4) is confined to this layer. The Satrec object
returned by initialize() is the opaque engine handle: it caches the
propagation coefficients and is mutated by every propagate() call.
"""
import logging
import string

from sgp4.api import Satrec, WGS72OLD, WGS72, WGS84
from sgp4.earth_gravity import wgs72old, wgs72, wgs84

from tleprop.domain.elements import ElementRecord, GravityModel
from tleprop.ports.propagation import PropagationEngine, Vec3

_log = logging.getLogger(__name__)

# Improved operation mode, as opposed to 'a' (legacy AFSPC)
_OPS_MODE = "i"

_WHICHCONST = {
    GravityModel.WGS72_OLD: WGS72OLD,
    GravityModel.WGS72: WGS72,
    GravityModel.WGS84: WGS84,
}

_GRAVITY = {
    GravityModel.WGS72_OLD: wgs72old,
    GravityModel.WGS72: wgs72,
    GravityModel.WGS84: wgs84,
}

# Alpha-5 leading letters: A=10 ... Z=33, skipping I and O
_ALPHA5_LETTERS = "".join(c for c in string.ascii_uppercase if c not in "IO")

# Reported by initialize() for a catalog number sgp4init cannot take
_UNDECODABLE_CATALOG = -1


def catalog_to_satnum(catalog_number: str) -> int:
    """
    Decode a 5-character catalog number, including Alpha-5 ("A0001").

    Raises:
        ValueError: If the string is neither numeric nor Alpha-5.
    """
    catalog_number = catalog_number.strip()
    if catalog_number and catalog_number[0] in _ALPHA5_LETTERS:
        prefix = _ALPHA5_LETTERS.index(catalog_number[0]) + 10
        return prefix * 10000 + int(catalog_number[1:])
    return int(catalog_number)


class Sgp4Engine(PropagationEngine):
    """PropagationEngine backed by sgp4.api.Satrec."""

    def initialize(
        self, gravity_model: GravityModel, record: ElementRecord,
    ) -> tuple[Satrec | None, int]:
        try:
            satnum = catalog_to_satnum(record.catalog_number)
        except ValueError:
            _log.warning(
                "Catalog number %r is neither numeric nor Alpha-5",
                record.catalog_number,
            )
            return None, _UNDECODABLE_CATALOG

        sat = Satrec()
        sat.sgp4init(
            _WHICHCONST[gravity_model],
            _OPS_MODE,
            satnum,
            record.epoch_days_since_1950,
            record.bstar,
            record.mean_motion_dot,
            record.mean_motion_ddot,
            record.eccentricity,
            record.arg_perigee_rad,
            record.inclination_rad,
            record.mean_anomaly_rad,
            record.mean_motion_rad_min,
            record.raan_rad,
        )
        _log.debug(
            "SGP4 init %s (%s): error %d",
            record.catalog_number, gravity_model.value, sat.error,
        )
        return sat, int(sat.error)

    def propagate(
        self, handle: Satrec, minutes_since_epoch: float,
    ) -> tuple[int, Vec3, Vec3]:
        error_code, position_km, velocity_km_s = handle.sgp4_tsince(minutes_since_epoch)
        return int(error_code), tuple(position_km), tuple(velocity_km_s)

    def gravitational_parameter(self, gravity_model: GravityModel) -> float:
        return _GRAVITY[gravity_model].mu
