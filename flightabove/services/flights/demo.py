"""Synthetic flights for demo mode (no API key, no network)."""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone
from typing import Any

from flightabove.contracts.common import Coordinate
from flightabove.contracts.settings import FlightServiceSettings
from flightabove.services.geo import destination_point

# (IATA, ICAO) of operators used for demo callsigns
_DEMO_AIRLINES = [
    ("UA", "UAL"), ("AA", "AAL"), ("DL", "DAL"), ("WN", "SWA"), ("AS", "ASA"),
    ("BA", "BAW"), ("LH", "DLH"), ("AF", "AFR"), ("KL", "KLM"), ("EK", "UAE"),
    ("AC", "ACA"), ("QF", "QFA"), ("SQ", "SIA"), ("B6", "JBU"),
]
_DEMO_TYPES = ["B738", "A320", "A321", "B739", "B77W", "A359", "B789", "E175", "CRJ9", "A20N"]
_DEMO_AIRPORTS = [
    "LAX", "SFO", "JFK", "ORD", "ATL", "DFW", "SEA", "DEN", "BOS", "MIA",
    "LHR", "CDG", "FRA", "AMS", "DXB", "YYZ", "SYD", "SIN", "LAS", "PHX",
]
# Weighted: most demo flights are on time
_DEMO_STATUSES = ["On Time"] * 6 + ["Scheduled"] * 2 + ["Delayed"] * 2

# Keep synthetic points strictly inside the search circle
_RADIUS_MARGIN = 0.98


def demo_flight_count(settings: FlightServiceSettings, rng: random.Random) -> int:
    """Number of demo flights for one poll, within [floor, max_flights_per_request]."""
    high = settings.max_flights_per_request
    low = min(settings.demo_min_flights, high)
    return rng.randint(low, high)


class DemoFlightGenerator:
    """Builds full-shaped raw records scattered around a reference point.

    Bearings and radial distances are uniform, so the normalizer and ranker
    see exactly the same record shape as a live full-tier poll.
    """

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def generate(self, reference: Coordinate, radius_km: float, count: int) -> list[dict[str, Any]]:
        now = datetime.now(tz=timezone.utc)
        return [self._one(reference, radius_km, now, i) for i in range(count)]

    def _one(self, reference: Coordinate, radius_km: float, now: datetime, index: int) -> dict[str, Any]:
        rng = self.rng
        bearing = rng.uniform(0.0, 360.0)
        dist = rng.uniform(0.0, radius_km * _RADIUS_MARGIN)
        point = destination_point(reference, bearing, dist) if dist > 0 else reference

        iata, icao = rng.choice(_DEMO_AIRLINES)
        number = rng.randint(100, 9999)
        origin, destination = rng.sample(_DEMO_AIRPORTS, 2)
        eta = now + timedelta(minutes=rng.randint(15, 360))

        return {
            "fr24_id": f"demo{index:02d}{rng.randint(0, 0xFFFF):04x}",
            "hex": f"{rng.randint(0, 0xFFFFFF):06X}",
            "callsign": f"{icao}{number}",
            "flight": f"{iata}{number}",
            "lat": point.latitude,
            "lon": point.longitude,
            "track": rng.randint(0, 359),
            "alt": rng.randrange(3000, 41000, 500),
            "gspeed": rng.randint(180, 520),
            "type": rng.choice(_DEMO_TYPES),
            "reg": f"N{rng.randint(100, 999)}{rng.choice('ABCDEFGH')}{rng.choice('KLMNPQRS')}",
            "operating_as": icao,
            "painted_as": icao,
            "orig_iata": origin,
            "dest_iata": destination,
            "eta": eta.strftime("%Y-%m-%dT%H:%M:%SZ"),
            "status": rng.choice(_DEMO_STATUSES),
        }
