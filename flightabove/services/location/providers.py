"""IP geolocation providers.

Every provider answers the same question (where is this machine?) with
its own JSON layout. Each one implements ``resolve()`` and raises
:class:`GeolocationError` for any failure, so the resolver can walk the
list without knowing which provider it is talking to.
"""

from __future__ import annotations

import re
from typing import Any

import httpx
from pydantic import ValidationError

from flightabove.contracts.common import Coordinate
from flightabove.services.errors import GeolocationError

# IP geolocation is city-level at best
IP_ACCURACY_M = 10_000.0

_RATE_LIMIT_RE = re.compile(r"rate[- ]?limit|too many requests|quota exceeded", re.I)


class GeolocationProvider:
    """Base class: fetch JSON, screen obvious failures, delegate parsing."""

    name = "base"
    url = ""

    async def resolve(self, client: httpx.AsyncClient) -> Coordinate:
        try:
            resp = await client.get(self.url, headers={"Accept": "application/json"})
        except httpx.HTTPError as exc:
            raise GeolocationError(self.name, f"transport error: {exc}") from exc

        if resp.status_code != 200:
            raise GeolocationError(self.name, f"HTTP {resp.status_code}")
        if _RATE_LIMIT_RE.search(resp.text):
            raise GeolocationError(self.name, "rate limited")

        try:
            data = resp.json()
        except ValueError as exc:
            raise GeolocationError(self.name, "unparsable JSON") from exc
        if not isinstance(data, dict):
            raise GeolocationError(self.name, "unexpected JSON payload")

        lat, lon = self._parse(data)
        if not lat or not lon:
            raise GeolocationError(self.name, "missing coordinates")
        try:
            return Coordinate(latitude=lat, longitude=lon, accuracy_m=IP_ACCURACY_M)
        except ValidationError as exc:
            raise GeolocationError(self.name, "coordinates out of range") from exc

    def _parse(self, data: dict[str, Any]) -> tuple[float | None, float | None]:
        raise NotImplementedError


def _as_float(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class IpapiCoProvider(GeolocationProvider):
    name = "ipapi.co"
    url = "https://ipapi.co/json/"

    def _parse(self, data):
        if data.get("error"):
            raise GeolocationError(self.name, str(data.get("reason", "error")))
        return _as_float(data.get("latitude")), _as_float(data.get("longitude"))


class IpApiComProvider(GeolocationProvider):
    name = "ip-api.com"
    url = "http://ip-api.com/json/"

    def _parse(self, data):
        if data.get("status") != "success":
            raise GeolocationError(self.name, str(data.get("message", "status not success")))
        return _as_float(data.get("lat")), _as_float(data.get("lon"))


class IpinfoProvider(GeolocationProvider):
    """ipinfo.io packs the position into a ``"lat,lon"`` string."""

    name = "ipinfo.io"
    url = "https://ipinfo.io/json"

    def _parse(self, data):
        loc = data.get("loc")
        if not isinstance(loc, str) or "," not in loc:
            return None, None
        lat_str, lon_str = loc.split(",", 1)
        return _as_float(lat_str), _as_float(lon_str)


class FreeIpApiProvider(GeolocationProvider):
    name = "freeipapi.com"
    url = "https://freeipapi.com/api/json"

    def _parse(self, data):
        return _as_float(data.get("latitude")), _as_float(data.get("longitude"))


def default_providers() -> list[GeolocationProvider]:
    """Providers in priority order."""
    return [
        IpapiCoProvider(),
        IpApiComProvider(),
        IpinfoProvider(),
        FreeIpApiProvider(),
    ]
