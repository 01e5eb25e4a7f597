# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the sgp4-package adapter."""

from dataclasses import replace

import pytest

from tleprop.adapters.sgp4_engine import Sgp4Engine, catalog_to_satnum
from tleprop.domain.elements import GravityModel, adapt_tle
from tleprop.domain.tle import parse_tle


_ISS_LINE_1 = "1 25544U 98067A   22071.78032407  .00021395  00000-0  39008-3 0  9996"
_ISS_LINE_2 = "2 25544  51.6424  94.0370 0004047 256.5103  89.8846 15.49386383330227"


class TestCatalogToSatnum:
    """NORAD catalog strings, including Alpha-5."""

    def test_numeric(self):
        assert catalog_to_satnum("25544") == 25544

    def test_leading_blanks(self):
        assert catalog_to_satnum("    5") == 5

    def test_alpha5_first_letter(self):
        assert catalog_to_satnum("A0001") == 100001

    def test_alpha5_skips_i_and_o(self):
        assert catalog_to_satnum("J1234") == 181234
        assert catalog_to_satnum("P0000") == 230000

    def test_alpha5_last_letter(self):
        assert catalog_to_satnum("Z9999") == 339999

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            catalog_to_satnum("25X44")


class TestSgp4Engine:
    """Initialization and propagation through sgp4.api.Satrec."""

    def test_initialize_returns_handle_and_code(self):
        record = adapt_tle(parse_tle(_ISS_LINE_1, _ISS_LINE_2).tle)
        handle, code = Sgp4Engine().initialize(GravityModel.WGS72, record)
        assert code == 0
        assert handle.satnum == 25544

    def test_matches_sgp4_twoline2rv(self):
        """Same state as the sgp4 package's own TLE reader."""
        from sgp4.api import Satrec, WGS72

        record = adapt_tle(parse_tle(_ISS_LINE_1, _ISS_LINE_2).tle)
        engine = Sgp4Engine()
        handle, _ = engine.initialize(GravityModel.WGS72, record)
        code, r, v = engine.propagate(handle, 120.0)

        reference = Satrec.twoline2rv(_ISS_LINE_1, _ISS_LINE_2, WGS72)
        ref_code, ref_r, ref_v = reference.sgp4_tsince(120.0)

        assert code == ref_code == 0
        for a, b in zip(r, ref_r):
            assert a == pytest.approx(b, abs=1e-3)
        for a, b in zip(v, ref_v):
            assert a == pytest.approx(b, abs=1e-6)

    def test_undecodable_catalog_number(self, caplog):
        record = adapt_tle(parse_tle(_ISS_LINE_1, _ISS_LINE_2).tle)
        record = replace(record, catalog_number="2554X")
        handle, code = Sgp4Engine().initialize(GravityModel.WGS72, record)
        assert handle is None
        assert code == -1
        assert "2554X" in caplog.text

    def test_propagate_returns_tuples(self):
        record = adapt_tle(parse_tle(_ISS_LINE_1, _ISS_LINE_2).tle)
        engine = Sgp4Engine()
        handle, _ = engine.initialize(GravityModel.WGS84, record)
        code, r, v = engine.propagate(handle, 0.0)
        assert isinstance(code, int)
        assert len(r) == 3
        assert len(v) == 3

    @pytest.mark.parametrize("model,mu", [
        (GravityModel.WGS72_OLD, 398600.79964),
        (GravityModel.WGS72, 398600.8),
        (GravityModel.WGS84, 398600.5),
    ])
    def test_gravitational_parameter(self, model, mu):
        assert Sgp4Engine().gravitational_parameter(model) == pytest.approx(mu)
