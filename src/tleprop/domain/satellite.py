# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Satellite facade over an SGP4 propagation engine.

A Satellite owns one initialized element record (held as an opaque engine
handle) and converts between split Julian Dates and the "minutes since
epoch" time SGP4 runs on.

Nothing here raises on physically bad input. Every initialization and
propagation overwrites a latched Sgp4Error, so a time series can keep
going past a window where the engine fails (e.g. after decay). Check
last_error() or the returned error after each call.

A Satellite is not safe for concurrent use: the engine handle caches
coefficients and is mutated on each propagation. Use one instance per
thread, or serialize access.
"""
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from tleprop.domain.classical_elements import ClassicalOrbitalElements
from tleprop.domain.elements import ElementRecord, GravityModel, adapt_tle
from tleprop.domain.julian_date import JulianDate
from tleprop.domain.tle import TLE_LINE_LEN, TleParseError, TwoLineElement, parse_tle
from tleprop.domain.units import Units
from tleprop.ports.propagation import PropagationEngine, Vec3

_log = logging.getLogger(__name__)

_ZERO_VEC: Vec3 = (0.0, 0.0, 0.0)


class Sgp4Error(IntEnum):
    """Latched SGP4 status. Ordering is stable; ordinal comparisons are allowed."""
    NONE = 0
    MEAN_ELEMENTS = 1
    MEAN_MOTION = 2
    PERT_ELEMENTS = 3
    SEMI_LATUS_RECTUM = 4
    EPOCH_ELEMENTS_SUB_ORBITAL = 5
    DECAYED = 6
    INVALID_TLE = 7
    UNKNOWN = 8

    @classmethod
    def from_code(cls, code: int) -> "Sgp4Error":
        """Map a raw engine code (0-6) to an Sgp4Error; anything else is UNKNOWN."""
        if code < 0 or code >= cls.INVALID_TLE:
            return cls.UNKNOWN
        return cls(code)


@dataclass(frozen=True)
class StateVector:
    """TEME position (km) and velocity (km/s) at an epoch."""
    epoch: JulianDate
    position: Vec3
    velocity: Vec3


class Satellite:
    """
    One satellite: element record, engine handle, and error latch.

    Construction initializes the engine immediately. Use from_tle() or
    from_tle_text() rather than building an ElementRecord by hand unless
    you need custom elements.
    """

    def __init__(
        self,
        record: ElementRecord | None,
        engine: PropagationEngine,
        gravity_model: GravityModel = GravityModel.WGS72,
    ) -> None:
        self._engine = engine
        self._gravity_model = gravity_model
        self._record = record
        self._handle: Any = None
        self.tle_parse_error = TleParseError.NONE

        if record is None:
            self._epoch = JulianDate(0.0, 0.0)
            self._last_error = Sgp4Error.INVALID_TLE
            return

        self._epoch = record.epoch
        self._handle, code = engine.initialize(gravity_model, record)
        self._last_error = Sgp4Error.from_code(code)
        if self._last_error != Sgp4Error.NONE:
            _log.warning(
                "SGP4 initialization of %s failed: %s",
                record.catalog_number, self._last_error.name,
            )

    # -- Construction ------------------------------------------------------- #

    @classmethod
    def from_tle(
        cls,
        tle: TwoLineElement,
        engine: PropagationEngine,
        gravity_model: GravityModel = GravityModel.WGS72,
    ) -> "Satellite":
        """Adapt a TwoLineElement and initialize the engine with it."""
        return cls(adapt_tle(tle), engine, gravity_model)

    @classmethod
    def from_tle_text(
        cls,
        line_1: str | None,
        line_2: str | None,
        engine: PropagationEngine,
        gravity_model: GravityModel = GravityModel.WGS72,
    ) -> "Satellite":
        """
        Parse a TLE pair and initialize the engine with it.

        Missing or too-short lines latch INVALID_TLE without being parsed.
        A parse failure also latches INVALID_TLE; the parser's verdict is
        kept in ``tle_parse_error``.
        """
        if (
            line_1 is None or line_2 is None
            or len(line_1) < TLE_LINE_LEN or len(line_2) < TLE_LINE_LEN
        ):
            return cls(None, engine, gravity_model)

        result = parse_tle(line_1, line_2)
        if result.tle is None:
            _log.warning("TLE rejected: %s", result.error.name)
            sat = cls(None, engine, gravity_model)
            sat.tle_parse_error = result.error
            return sat
        return cls.from_tle(result.tle, engine, gravity_model)

    # -- Accessors ---------------------------------------------------------- #

    @property
    def record(self) -> ElementRecord | None:
        """The adapted element record, None if the input text was invalid."""
        return self._record

    @property
    def gravity_model(self) -> GravityModel:
        return self._gravity_model

    def epoch(self) -> JulianDate:
        """Julian Date of the element set epoch."""
        return self._epoch

    def last_error(self) -> Sgp4Error:
        """Error from the most recent initialization or propagation."""
        return self._last_error

    # -- Propagation -------------------------------------------------------- #

    def propagate_from_epoch(self, minutes: float) -> tuple[Sgp4Error, StateVector]:
        """
        Propagate to a time offset from the epoch.

        Args:
            minutes: Minutes since epoch (negative is allowed).

        Returns:
            (error, state). The state is meaningful only when error is NONE.
            Its epoch is ``epoch() + minutes / 1440``, not normalized.
        """
        epoch = self._epoch + minutes / Units.MINUTES_PER_DAY
        if self._handle is None:
            self._last_error = Sgp4Error.INVALID_TLE
            return self._last_error, StateVector(epoch, _ZERO_VEC, _ZERO_VEC)

        code, position, velocity = self._engine.propagate(self._handle, minutes)
        self._last_error = Sgp4Error.from_code(code)
        return self._last_error, StateVector(epoch, position, velocity)

    def propagate(self, jd: JulianDate) -> tuple[Sgp4Error, StateVector]:
        """
        Propagate to an absolute time.

        The offset is taken with the split-precision difference, and the
        returned state carries ``jd`` itself as its epoch.
        """
        minutes = (jd - self._epoch) * Units.MINUTES_PER_DAY
        error, state = self.propagate_from_epoch(minutes)
        return error, StateVector(jd, state.position, state.velocity)

    def classical_elements(self, state: StateVector) -> ClassicalOrbitalElements:
        """Osculating elements of a state vector under this satellite's gravity model."""
        mu = self._engine.gravitational_parameter(self._gravity_model)
        return ClassicalOrbitalElements.from_state_vector(state, mu)
