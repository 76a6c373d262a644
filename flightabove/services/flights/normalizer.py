"""Raw provider record -> canonical :class:`Flight`.

Pure and total: any input, including an empty dict or garbage, yields a
valid ``Flight`` filled with documented defaults.
"""

from __future__ import annotations

from typing import Any

from flightabove.contracts.common import Coordinate
from flightabove.contracts.enums import FlightStatus
from flightabove.contracts.flight import UNKNOWN, UNKNOWN_AIRLINE, Flight
from flightabove.services.flights.airlines import airline_code_from_callsign, lookup_airline
from flightabove.services.flights.extraction import PartialFlightFields, extract_fields

KNOTS_TO_MPH = 1.15078
FLIGHT_PAGE_URL = "https://www.flightradar24.com/{callsign}"

# Precedence order matters: a cancelled flight may also mention a delay
_STATUS_KEYWORDS: list[tuple[tuple[str, ...], FlightStatus]] = [
    (("cancel",), FlightStatus.CANCELLED),
    (("delay",), FlightStatus.DELAYED),
    (("on time", "ontime", "scheduled"), FlightStatus.ON_TIME),
]


def normalize(raw: Any, distance_km: float | None = None) -> Flight:
    """Build a Flight from one raw record of any supported shape."""
    fields = extract_fields(raw)

    callsign = fields.callsign or _placeholder_callsign(fields)
    airline_code, airline = _resolve_airline(fields, callsign)
    altitude = _non_negative_int(fields.altitude_ft)

    return Flight(
        callsign=callsign,
        airline=airline,
        airline_code=airline_code,
        flight_number=fields.flight_number or callsign,
        origin=fields.origin or UNKNOWN,
        destination=fields.destination or UNKNOWN,
        altitude_ft=altitude,
        speed_mph=_speed_mph(fields),
        heading_deg=_heading(fields.heading_deg),
        position=_position(fields),
        status=derive_status(fields.status_text, altitude),
        distance_km=None if distance_km is None else max(0.0, distance_km),
        aircraft=fields.aircraft or UNKNOWN,
        registration=fields.registration or UNKNOWN,
        estimated_arrival=fields.estimated_arrival or "",
        fr24_id=fields.fr24_id,
        flight_radar_url=FLIGHT_PAGE_URL.format(callsign=callsign) if fields.callsign else None,
    )


def derive_status(status_text: str | None, altitude_ft: int) -> FlightStatus:
    """Keyword match on free text, else infer from altitude."""
    if status_text:
        text = status_text.lower()
        for keywords, status in _STATUS_KEYWORDS:
            if any(k in text for k in keywords):
                return status
    return FlightStatus.ON_TIME if altitude_ft > 0 else FlightStatus.UNKNOWN


def knots_to_mph(knots: float) -> int:
    return round(knots * KNOTS_TO_MPH)


def _placeholder_callsign(fields: PartialFlightFields) -> str:
    ident = fields.fr24_id or fields.hex_code or fields.registration
    return f"FLT-{ident.upper()}" if ident else "UNKNOWN"


def _resolve_airline(fields: PartialFlightFields, callsign: str) -> tuple[str | None, str]:
    """First known code among operator, livery and callsign prefix.

    When no candidate is in the airline table the first candidate is kept
    and the name falls back to the record's own airline name, then
    Unknown Airline.
    """
    candidates = [
        code.upper()
        for code in (fields.airline_code, fields.livery_code, airline_code_from_callsign(callsign))
        if code
    ]
    for code in candidates:
        name = lookup_airline(code)
        if name is not None:
            return code, name
    code = candidates[0] if candidates else None
    return code, fields.airline_name or UNKNOWN_AIRLINE


def _non_negative_int(value: float | None) -> int:
    if value is None or value <= 0:
        return 0
    return round(value)


def _speed_mph(fields: PartialFlightFields) -> int:
    if fields.speed is None or fields.speed <= 0:
        return 0
    if fields.speed_in_knots:
        return knots_to_mph(fields.speed)
    return round(fields.speed)


def _heading(value: float | None) -> int:
    if value is None:
        return 0
    return round(value) % 360


def _position(fields: PartialFlightFields) -> Coordinate:
    lat = fields.latitude if fields.latitude is not None else 0.0
    lon = fields.longitude if fields.longitude is not None else 0.0
    if not -90.0 <= lat <= 90.0 or not -180.0 <= lon <= 180.0:
        lat, lon = 0.0, 0.0
    return Coordinate(latitude=lat, longitude=lon)
