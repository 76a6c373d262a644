"""Tests for raw record normalization."""

import pytest

from flightabove.contracts.enums import FlightStatus
from flightabove.services.flights.normalizer import derive_status, knots_to_mph, normalize


class TestNormalizeTotal:
    @pytest.mark.parametrize("raw", [{}, None, [], "garbage", 12, {"lat": "x", "alt": -5}])
    def test_any_input_yields_flight(self, raw):
        flight = normalize(raw)
        assert flight.callsign
        assert flight.flight_number
        assert flight.altitude_ft >= 0
        assert flight.speed_mph >= 0
        assert 0 <= flight.heading_deg <= 359

    def test_empty_record_defaults(self):
        flight = normalize({})
        assert flight.callsign == "UNKNOWN"
        assert flight.flight_number == "UNKNOWN"
        assert flight.airline == "Unknown Airline"
        assert flight.airline_code is None
        assert flight.origin == "Unknown"
        assert flight.destination == "Unknown"
        assert flight.altitude_ft == 0
        assert flight.speed_mph == 0
        assert flight.heading_deg == 0
        assert flight.status == FlightStatus.UNKNOWN
        assert flight.position.latitude == 0.0
        assert flight.position.longitude == 0.0
        assert flight.flight_radar_url is None
        assert flight.estimated_arrival == ""


class TestNormalizeFields:
    def test_knots_converted(self):
        flight = normalize({"fr24_id": "a1", "callsign": "UAL1", "gspeed": 100, "alt": 30000})
        assert flight.speed_mph == 115

    def test_generic_speed_kept_as_mph(self):
        flight = normalize({"callsign": "DAL10", "speed": 450.4})
        assert flight.speed_mph == 450

    def test_heading_wraps(self):
        assert normalize({"callsign": "X", "heading": 359.6}).heading_deg == 0
        assert normalize({"callsign": "X", "heading": 725}).heading_deg == 5

    def test_negative_altitude_clamped(self):
        assert normalize({"callsign": "X", "altitude": -150}).altitude_ft == 0

    def test_placeholder_callsign_from_fr24_id(self):
        flight = normalize({"fr24_id": "3a5b7c1d", "lat": 1.0, "lon": 2.0})
        assert flight.callsign == "FLT-3A5B7C1D"
        assert flight.flight_number == "FLT-3A5B7C1D"
        assert flight.fr24_id == "3a5b7c1d"
        assert flight.flight_radar_url is None

    def test_flight_radar_url(self):
        flight = normalize({"fr24_id": "a", "callsign": "BAW283"})
        assert flight.flight_radar_url == "https://www.flightradar24.com/BAW283"

    def test_distance_passed_through(self):
        assert normalize({"callsign": "X"}, distance_km=12.5).distance_km == 12.5
        assert normalize({"callsign": "X"}).distance_km is None

    def test_out_of_range_position_zeroed(self):
        flight = normalize({"callsign": "X", "latitude": 123.0, "longitude": 10.0})
        assert (flight.position.latitude, flight.position.longitude) == (0.0, 0.0)

    def test_full_record(self):
        flight = normalize({
            "fr24_id": "3a5b7c1d",
            "callsign": "UAL1234",
            "flight": "UA1234",
            "lat": 37.81,
            "lon": -122.36,
            "track": 275,
            "alt": 12000,
            "gspeed": 320,
            "operating_as": "UAL",
            "orig_iata": "SFO",
            "dest_iata": "ORD",
            "type": "B39M",
            "reg": "N37522",
            "eta": "2024-06-01T16:10:00Z",
        }, distance_km=3.2)
        assert flight.flight_number == "UA1234"
        assert flight.airline == "United Airlines"
        assert flight.airline_code == "UAL"
        assert flight.origin == "SFO"
        assert flight.destination == "ORD"
        assert flight.aircraft == "B39M"
        assert flight.registration == "N37522"
        assert flight.speed_mph == 368
        assert flight.status == FlightStatus.ON_TIME


class TestAirlineResolution:
    def test_from_icao_callsign(self):
        flight = normalize({"fr24_id": "a", "callsign": "BAW283"})
        assert flight.airline == "British Airways"
        assert flight.airline_code == "BAW"

    def test_explicit_code_wins_over_callsign(self):
        flight = normalize({"callsign": "UAL123", "airline_code": "dal"})
        assert flight.airline == "Delta Air Lines"
        assert flight.airline_code == "DAL"

    def test_unknown_code_keeps_provided_name(self):
        flight = normalize({"callsign": "ZZZ1", "airline": "Zed Air"})
        assert flight.airline_code == "ZZZ"
        assert flight.airline == "Zed Air"

    def test_unknown_code_without_name(self):
        flight = normalize({"callsign": "ZZZ1"})
        assert flight.airline == "Unknown Airline"

    def test_unknown_operator_falls_back_to_callsign(self):
        flight = normalize({"fr24_id": "a", "callsign": "UAL123", "operating_as": "QXX"})
        assert flight.airline == "United Airlines"
        assert flight.airline_code == "UAL"

    def test_unknown_operator_falls_back_to_livery(self):
        flight = normalize({"callsign": "N123AB", "operating_as": "QXX", "painted_as": "dal"})
        assert flight.airline == "Delta Air Lines"
        assert flight.airline_code == "DAL"

    def test_unknown_generic_code_falls_back_to_callsign(self):
        flight = normalize({"callsign": "UAL123", "airline_code": "QXX", "airline": "Qux"})
        assert flight.airline_code == "UAL"
        assert flight.airline == "United Airlines"

    def test_no_known_code_keeps_operator(self):
        flight = normalize({"callsign": "ZZZ1", "operating_as": "QXX"})
        assert flight.airline_code == "QXX"
        assert flight.airline == "Unknown Airline"

    def test_registration_callsign_has_no_airline(self):
        flight = normalize({"callsign": "N123AB"})
        assert flight.airline_code is None
        assert flight.airline == "Unknown Airline"


class TestDeriveStatus:
    @pytest.mark.parametrize("text,expected", [
        ("Cancelled", FlightStatus.CANCELLED),
        ("Delayed, then cancelled", FlightStatus.CANCELLED),
        ("DELAYED 20 min", FlightStatus.DELAYED),
        ("On Time", FlightStatus.ON_TIME),
        ("ontime", FlightStatus.ON_TIME),
        ("Scheduled", FlightStatus.ON_TIME),
    ])
    def test_keywords(self, text, expected):
        assert derive_status(text, 0) == expected

    def test_altitude_fallback(self):
        assert derive_status(None, 1000) == FlightStatus.ON_TIME
        assert derive_status("Landed", 0) == FlightStatus.UNKNOWN
        assert derive_status("", 0) == FlightStatus.UNKNOWN

    def test_knots_to_mph(self):
        assert knots_to_mph(100) == 115
        assert knots_to_mph(450) == 518
