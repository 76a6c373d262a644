"""Extraction strategies for raw provider flight records.

Raw records arrive in several incompatible shapes:

- **positional** — feed-style array ``[hex, lat, lon, track, alt, speed_kt, ...]``
- **light** — FR24 ``flight-positions/light`` object (``fr24_id``, ``gspeed``...)
- **full** — FR24 ``flight-positions/full`` object (adds route, type, operator)
- **generic** — older objects with descriptive names (``latitude``, ``speed``...)

``detect_shape()`` probes a record once and the matching strategy turns it
into :class:`PartialFlightFields`. Every accessor is defensive: a missing or
malformed value becomes None, never an exception.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any

from pydantic import ValidationError

from flightabove.contracts.common import Coordinate
from flightabove.contracts.enums import RecordShape

RawFlightRecord = Mapping[str, Any] | Sequence[Any]

# Keys only present in the enriched ("full") object encoding
FULL_ONLY_KEYS = frozenset({
    "painted_as", "operating_as", "orig_iata", "orig_icao",
    "dest_iata", "dest_icao", "type",
})
LIGHT_KEYS = frozenset({"fr24_id", "gspeed"})

LAT_KEYS = ("lat", "latitude")
LON_KEYS = ("lon", "lng", "longitude")

# Feed array layout
POS_HEX = 0
POS_LAT = 1
POS_LON = 2
POS_TRACK = 3
POS_ALT = 4
POS_SPEED_KT = 5
POS_TYPE = 8
POS_REG = 9
POS_ORIGIN = 11
POS_DEST = 12
POS_FLIGHT = 13
POS_CALLSIGN = 16
POS_AIRLINE_ICAO = 18


@dataclass(frozen=True)
class PartialFlightFields:
    """Whatever a strategy could read from one record. Unknown = None."""

    callsign: str | None = None
    flight_number: str | None = None
    airline_code: str | None = None
    livery_code: str | None = None
    airline_name: str | None = None
    origin: str | None = None
    destination: str | None = None
    altitude_ft: float | None = None
    speed: float | None = None
    speed_in_knots: bool = False
    heading_deg: float | None = None
    latitude: float | None = None
    longitude: float | None = None
    status_text: str | None = None
    aircraft: str | None = None
    registration: str | None = None
    estimated_arrival: str | None = None
    fr24_id: str | None = None
    hex_code: str | None = None


# ------------------------------------------------------------------
# Defensive value readers
# ------------------------------------------------------------------


def as_number(value: Any) -> float | None:
    """Finite float from a number or numeric string, else None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def as_text(value: Any) -> str | None:
    """Stripped non-empty string, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return None


def _at(raw: Sequence[Any], index: int) -> Any:
    return raw[index] if index < len(raw) else None


# ------------------------------------------------------------------
# Strategies
# ------------------------------------------------------------------


class ExtractionStrategy:
    shape: RecordShape = RecordShape.EMPTY

    def extract(self, raw: Any) -> PartialFlightFields:
        return PartialFlightFields()


class PositionalStrategy(ExtractionStrategy):
    shape = RecordShape.POSITIONAL

    def extract(self, raw: Sequence[Any]) -> PartialFlightFields:
        return PartialFlightFields(
            callsign=as_text(_at(raw, POS_CALLSIGN)),
            flight_number=as_text(_at(raw, POS_FLIGHT)),
            airline_code=as_text(_at(raw, POS_AIRLINE_ICAO)),
            origin=as_text(_at(raw, POS_ORIGIN)),
            destination=as_text(_at(raw, POS_DEST)),
            altitude_ft=as_number(_at(raw, POS_ALT)),
            speed=as_number(_at(raw, POS_SPEED_KT)),
            speed_in_knots=True,
            heading_deg=as_number(_at(raw, POS_TRACK)),
            latitude=as_number(_at(raw, POS_LAT)),
            longitude=as_number(_at(raw, POS_LON)),
            aircraft=as_text(_at(raw, POS_TYPE)),
            registration=as_text(_at(raw, POS_REG)),
            hex_code=as_text(_at(raw, POS_HEX)),
        )


class LightStrategy(ExtractionStrategy):
    shape = RecordShape.LIGHT

    def extract(self, raw: Mapping[str, Any]) -> PartialFlightFields:
        return PartialFlightFields(
            callsign=as_text(raw.get("callsign")),
            altitude_ft=as_number(_first(raw, "alt", "altitude")),
            speed=as_number(raw.get("gspeed")),
            speed_in_knots=True,
            heading_deg=as_number(_first(raw, "track", "heading")),
            latitude=as_number(_first(raw, *LAT_KEYS)),
            longitude=as_number(_first(raw, *LON_KEYS)),
            status_text=as_text(raw.get("status")),
            fr24_id=as_text(raw.get("fr24_id")),
            hex_code=as_text(raw.get("hex")),
        )


class FullStrategy(LightStrategy):
    shape = RecordShape.FULL

    def extract(self, raw: Mapping[str, Any]) -> PartialFlightFields:
        base = super().extract(raw)
        return replace(
            base,
            flight_number=as_text(raw.get("flight")),
            airline_code=as_text(raw.get("operating_as")),
            livery_code=as_text(raw.get("painted_as")),
            origin=as_text(_first(raw, "orig_iata", "orig_icao")),
            destination=as_text(_first(raw, "dest_iata", "dest_icao")),
            aircraft=as_text(raw.get("type")),
            registration=as_text(raw.get("reg")),
            estimated_arrival=as_text(raw.get("eta")),
        )


class GenericStrategy(ExtractionStrategy):
    """Descriptive field names used by older feeds and hand-written fixtures."""

    shape = RecordShape.GENERIC

    def extract(self, raw: Mapping[str, Any]) -> PartialFlightFields:
        knots = as_number(_first(raw, "speed_kt", "ground_speed_kt"))
        return PartialFlightFields(
            callsign=as_text(raw.get("callsign")),
            flight_number=as_text(_first(raw, "flight_number", "flightNumber", "flight")),
            airline_code=as_text(_first(raw, "airline_code", "airlineCode")),
            airline_name=as_text(raw.get("airline")),
            origin=as_text(raw.get("origin")),
            destination=as_text(raw.get("destination")),
            altitude_ft=as_number(_first(raw, "altitude", "alt")),
            speed=knots if knots is not None else as_number(raw.get("speed")),
            speed_in_knots=knots is not None,
            heading_deg=as_number(_first(raw, "heading", "track", "direction")),
            latitude=as_number(_first(raw, *LAT_KEYS)),
            longitude=as_number(_first(raw, *LON_KEYS)),
            status_text=as_text(raw.get("status")),
            aircraft=as_text(raw.get("aircraft")),
            registration=as_text(_first(raw, "registration", "reg")),
            estimated_arrival=as_text(_first(raw, "eta", "estimatedArrival", "estimated_arrival")),
        )


STRATEGIES: dict[RecordShape, ExtractionStrategy] = {
    s.shape: s
    for s in (
        PositionalStrategy(),
        LightStrategy(),
        FullStrategy(),
        GenericStrategy(),
        ExtractionStrategy(),
    )
}


def detect_shape(raw: Any) -> RecordShape:
    """Cheap shape probe: container type, then marker keys."""
    if isinstance(raw, Mapping):
        keys = set(raw.keys())
        if keys & FULL_ONLY_KEYS:
            return RecordShape.FULL
        if keys & LIGHT_KEYS:
            return RecordShape.LIGHT
        return RecordShape.GENERIC
    if isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        return RecordShape.POSITIONAL
    return RecordShape.EMPTY


def extract_fields(raw: Any) -> PartialFlightFields:
    return STRATEGIES[detect_shape(raw)].extract(raw)


def extract_position(raw: Any) -> Coordinate | None:
    """Position of a raw record, or None if it has no usable lat/lon."""
    fields = extract_fields(raw)
    if fields.latitude is None or fields.longitude is None:
        return None
    try:
        return Coordinate(latitude=fields.latitude, longitude=fields.longitude)
    except ValidationError:
        return None
