"""Tests for raw record shape detection and field extraction."""

import math

import pytest

from flightabove.contracts.enums import RecordShape
from flightabove.services.flights.extraction import (
    as_number,
    as_text,
    detect_shape,
    extract_fields,
    extract_position,
)

LIGHT_RECORD = {
    "fr24_id": "3a5b7c1d",
    "hex": "A1B2C3",
    "callsign": "UAL1234",
    "lat": 37.81,
    "lon": -122.36,
    "track": 275,
    "alt": 12000,
    "gspeed": 320,
    "vspeed": -640,
    "squawk": "1200",
    "timestamp": "2024-06-01T12:00:00Z",
    "source": "ADSB",
}

FULL_RECORD = {
    **LIGHT_RECORD,
    "flight": "UA1234",
    "type": "B39M",
    "reg": "N37522",
    "painted_as": "UAL",
    "operating_as": "UAL",
    "orig_iata": "SFO",
    "orig_icao": "KSFO",
    "dest_iata": "ORD",
    "dest_icao": "KORD",
    "eta": "2024-06-01T16:10:00Z",
}


def _positional() -> list:
    row = [None] * 19
    row[0] = "4CA7B2"
    row[1] = 53.42
    row[2] = -6.27
    row[3] = 90
    row[4] = 8000
    row[5] = 250
    row[8] = "A320"
    row[9] = "EI-DEI"
    row[11] = "DUB"
    row[12] = "LHR"
    row[13] = "EI154"
    row[16] = "EIN154"
    row[18] = "EIN"
    return row


class TestDetectShape:
    def test_full(self):
        assert detect_shape(FULL_RECORD) == RecordShape.FULL

    def test_light(self):
        assert detect_shape(LIGHT_RECORD) == RecordShape.LIGHT

    def test_generic(self):
        assert detect_shape({"latitude": 1, "longitude": 2, "speed": 300}) == RecordShape.GENERIC

    def test_positional(self):
        assert detect_shape(_positional()) == RecordShape.POSITIONAL
        assert detect_shape((1, 2, 3)) == RecordShape.POSITIONAL

    @pytest.mark.parametrize("raw", [None, 42, "UAL1234", b"bytes"])
    def test_empty(self, raw):
        assert detect_shape(raw) == RecordShape.EMPTY

    def test_generic_flight_key_is_not_full(self):
        assert detect_shape({"flight": "BA283", "reg": "G-XLEA"}) == RecordShape.GENERIC


class TestExtractFields:
    def test_light_record(self):
        f = extract_fields(LIGHT_RECORD)
        assert f.callsign == "UAL1234"
        assert f.altitude_ft == 12000
        assert f.speed == 320
        assert f.speed_in_knots is True
        assert f.heading_deg == 275
        assert (f.latitude, f.longitude) == (37.81, -122.36)
        assert f.fr24_id == "3a5b7c1d"
        assert f.flight_number is None
        assert f.origin is None

    def test_full_record_adds_route(self):
        f = extract_fields(FULL_RECORD)
        assert f.flight_number == "UA1234"
        assert f.airline_code == "UAL"
        assert (f.origin, f.destination) == ("SFO", "ORD")
        assert f.aircraft == "B39M"
        assert f.registration == "N37522"
        assert f.estimated_arrival == "2024-06-01T16:10:00Z"

    def test_full_record_keeps_livery_separately(self):
        f = extract_fields({**FULL_RECORD, "operating_as": "SKW", "painted_as": "UAL"})
        assert f.airline_code == "SKW"
        assert f.livery_code == "UAL"

    def test_full_record_livery_only(self):
        f = extract_fields({**FULL_RECORD, "operating_as": None})
        assert f.airline_code is None
        assert f.livery_code == "UAL"

    def test_full_record_icao_route_fallback(self):
        raw = {**FULL_RECORD, "orig_iata": "", "dest_iata": None}
        f = extract_fields(raw)
        assert (f.origin, f.destination) == ("KSFO", "KORD")

    def test_positional_record(self):
        f = extract_fields(_positional())
        assert f.callsign == "EIN154"
        assert f.flight_number == "EI154"
        assert f.airline_code == "EIN"
        assert (f.origin, f.destination) == ("DUB", "LHR")
        assert f.speed == 250
        assert f.speed_in_knots is True
        assert f.registration == "EI-DEI"
        assert f.hex_code == "4CA7B2"

    def test_short_positional_record(self):
        f = extract_fields(["ABC123", 10.0, 20.0])
        assert (f.latitude, f.longitude) == (10.0, 20.0)
        assert f.callsign is None

    def test_generic_speed_in_mph(self):
        f = extract_fields({"flight_number": "DL5", "speed": 450, "latitude": 1, "longitude": 2})
        assert f.speed == 450
        assert f.speed_in_knots is False

    def test_generic_speed_in_knots(self):
        f = extract_fields({"speed_kt": 400, "speed": 999})
        assert f.speed == 400
        assert f.speed_in_knots is True

    def test_generic_aliases(self):
        f = extract_fields({
            "flightNumber": "AF66",
            "airlineCode": "AFR",
            "lng": 2.55,
            "lat": 49.0,
            "direction": 180,
            "estimatedArrival": "14:35",
        })
        assert f.flight_number == "AF66"
        assert f.airline_code == "AFR"
        assert f.longitude == 2.55
        assert f.heading_deg == 180
        assert f.estimated_arrival == "14:35"

    def test_malformed_values_become_none(self):
        f = extract_fields({"fr24_id": "x", "alt": "high", "gspeed": True, "lat": "nan", "callsign": "  "})
        assert f.altitude_ft is None
        assert f.speed is None
        assert f.latitude is None
        assert f.callsign is None


class TestExtractPosition:
    def test_valid(self):
        pos = extract_position(LIGHT_RECORD)
        assert pos.latitude == 37.81

    @pytest.mark.parametrize("raw", [
        {"fr24_id": "x"},
        {"fr24_id": "x", "lat": 95.0, "lon": 10.0},
        {"latitude": "abc", "longitude": 1},
        None,
        [],
    ])
    def test_unusable(self, raw):
        assert extract_position(raw) is None


class TestValueReaders:
    def test_as_number(self):
        assert as_number("12.5") == 12.5
        assert as_number(7) == 7.0
        assert as_number(False) is None
        assert as_number(math.inf) is None
        assert as_number([1]) is None

    def test_as_text(self):
        assert as_text("  BAW283 ") == "BAW283"
        assert as_text(123) == "123"
        assert as_text("") is None
        assert as_text({"a": 1}) is None
