"""Current-location resolution with caching and provider fallback."""

from __future__ import annotations

import logging
import time
from typing import Callable

import httpx

from flightabove.contracts.common import Coordinate
from flightabove.services.cache import TTLCache
from flightabove.services.errors import GeolocationError
from flightabove.services.location.providers import GeolocationProvider, default_providers

logger = logging.getLogger(__name__)

DEFAULT_MAX_AGE_SECONDS = 30 * 60

# Last resort when no provider answers and nothing was ever cached
FALLBACK_COORDINATE = Coordinate(latitude=37.7749, longitude=-122.4194, accuracy_m=10_000.0)

_CACHE_KEY = "current"


class LocationResolver:
    """Resolve the user's coordinate from IP geolocation providers.

    1. A cached coordinate younger than ``max_age_seconds`` is returned as-is.
    2. Otherwise providers are tried in order; the first success is cached.
    3. If all fail: the stale cached coordinate, else ``FALLBACK_COORDINATE``.

    ``get_current_location()`` never raises.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        providers: list[GeolocationProvider] | None = None,
        max_age_seconds: float = DEFAULT_MAX_AGE_SECONDS,
        fallback: Coordinate = FALLBACK_COORDINATE,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=10.0)
        self._providers = providers if providers is not None else default_providers()
        self._fallback = fallback
        self._cache: TTLCache[Coordinate] = TTLCache(max_age_seconds, clock=clock)

    async def get_current_location(self) -> Coordinate:
        cached = self._cache.get(_CACHE_KEY)
        if cached is not None:
            return cached

        for provider in self._providers:
            try:
                coord = await provider.resolve(self._client)
            except GeolocationError as exc:
                logger.info("Geolocation provider failed: %s", exc)
                continue
            logger.debug(
                "Location resolved by %s: %.4f, %.4f",
                provider.name, coord.latitude, coord.longitude,
            )
            self._cache.set(_CACHE_KEY, coord)
            return coord

        stale = self._cache.peek(_CACHE_KEY)
        if stale is not None:
            logger.warning(
                "All geolocation providers failed; using stale location (%.0f s old)",
                self._cache.age_seconds(_CACHE_KEY) or 0.0,
            )
            return stale

        logger.warning("All geolocation providers failed; using fallback location")
        return self._fallback

    def last_known_location(self) -> Coordinate | None:
        """Cached coordinate of any age, or None."""
        return self._cache.peek(_CACHE_KEY)

    def invalidate(self) -> None:
        self._cache.invalidate(_CACHE_KEY)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
