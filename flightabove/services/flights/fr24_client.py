"""Flightradar24 API client for live flight positions."""

from __future__ import annotations

import math
from typing import Any

import httpx

from flightabove.contracts.enums import EndpointTier
from flightabove.services.errors import MalformedResponseError

BASE_URL = "https://fr24api.flightradar24.com/api"

POSITIONS_PATHS: dict[EndpointTier, str] = {
    EndpointTier.LIGHT: "/live/flight-positions/light",
    EndpointTier.FULL: "/live/flight-positions/full",
}
SUMMARY_PATH = "/flight-summary/light"

# Credits charged per returned record
CREDITS_PER_ITEM: dict[EndpointTier, int] = {
    EndpointTier.LIGHT: 6,
    EndpointTier.FULL: 8,
}

SUBSCRIPTION_URL = "https://fr24api.flightradar24.com/subscriptions-and-credits"


def format_bounds(bounds: tuple[float, float, float, float]) -> str:
    """``(north, south, west, east)`` -> ``"N,S,W,E"`` query value.

    Values are rounded outwards to 3 decimals so the box never shrinks.
    """
    north, south, west, east = bounds
    widened = (
        min(90.0, _round_up(north)),
        max(-90.0, _round_down(south)),
        max(-180.0, _round_down(west)),
        min(180.0, _round_up(east)),
    )
    return ",".join(f"{v:.3f}" for v in widened)


# Pre-rounding to 6 places drops float noise before ceil/floor
def _round_up(value: float) -> float:
    return math.ceil(round(value * 1000, 6)) / 1000


def _round_down(value: float) -> float:
    return math.floor(round(value * 1000, 6)) / 1000


class FR24Client:
    """Async HTTP client for the Flightradar24 REST API.

    Raises ``httpx.HTTPStatusError`` for non-2xx answers, ``httpx.TransportError``
    when no response arrives, and :class:`MalformedResponseError` for a 2xx
    body that is not the documented ``{"data": [...]}`` envelope.
    """

    def __init__(
        self,
        api_token: str,
        http_client: httpx.AsyncClient | None = None,
        sandbox: bool = False,
    ):
        self._token = api_token
        self._client = http_client or httpx.AsyncClient(timeout=15.0)
        self._sandbox = sandbox

    def _url(self, path: str) -> str:
        if self._sandbox:
            return f"{BASE_URL}/sandbox{path}"
        return f"{BASE_URL}{path}"

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Accept-Version": "v1",
            "Authorization": f"Bearer {self._token}",
        }

    async def _get_data(self, path: str, params: dict[str, Any]) -> list[Any]:
        resp = await self._client.get(self._url(path), params=params, headers=self._headers)
        resp.raise_for_status()
        try:
            payload = resp.json()
        except ValueError as exc:
            raise MalformedResponseError(f"{path}: response is not JSON") from exc
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            raise MalformedResponseError(f"{path}: missing 'data' list")
        return data

    async def get_live_positions(
        self,
        bounds: tuple[float, float, float, float],
        tier: EndpointTier = EndpointTier.LIGHT,
    ) -> list[Any]:
        """Raw position records of all aircraft inside the bounding box."""
        return await self._get_data(POSITIONS_PATHS[tier], {"bounds": format_bounds(bounds)})

    async def get_flight_summary(self, fr24_id: str) -> dict[str, Any] | None:
        """Route/operator summary for one flight, or None if unknown."""
        data = await self._get_data(SUMMARY_PATH, {"flight_ids": fr24_id})
        for item in data:
            if isinstance(item, dict):
                return item
        return None
