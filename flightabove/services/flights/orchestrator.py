"""Flight data service — demo/live polling, ranking, usage and error state."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, Callable, Protocol

import httpx

from flightabove.contracts.common import Coordinate
from flightabove.contracts.enums import EndpointTier
from flightabove.contracts.flight import Flight
from flightabove.contracts.provider_error import ProviderError
from flightabove.contracts.settings import FlightServiceSettings
from flightabove.contracts.usage import UsageRecord
from flightabove.persistence.credentials import CredentialStore
from flightabove.services.cache import TTLCache
from flightabove.services.flights.demo import DemoFlightGenerator, demo_flight_count
from flightabove.services.flights.error_classifier import classify_provider_error
from flightabove.services.flights.fr24_client import POSITIONS_PATHS, FR24Client
from flightabove.services.flights.normalizer import normalize
from flightabove.services.flights.ranking import rank_nearby
from flightabove.services.flights.usage import UsageTracker
from flightabove.services.geo import bounding_box

logger = logging.getLogger(__name__)

SUMMARY_CACHE_TTL_SECONDS = 15 * 60
SUMMARY_CACHE_MAX_ENTRIES = 512

# Flight-summary fields copied onto a light record during enrichment
_SUMMARY_KEYS = (
    "flight", "callsign", "operating_as", "painted_as", "type", "reg",
    "orig_iata", "orig_icao", "dest_iata", "dest_icao",
)

SettingsListener = Callable[[FlightServiceSettings, FlightServiceSettings], None]


class SettingsStore(Protocol):
    def load(self) -> FlightServiceSettings: ...

    def save(self, settings: FlightServiceSettings) -> None: ...


class FlightDataService:
    """Owns the poll pipeline and its in-memory state.

    Pipeline per poll:

    1. Demo mode: synthesize records around the reference point.
    2. No API key: return ``[]`` (not configured, not an error).
    3. Live: query the bounding box, rank by distance, optionally enrich,
       normalize, record usage, clear the last error.
    4. Failure: classify into ``last_error`` and return ``[]``.

    ``fetch_flights()`` never raises and never runs two polls at once:
    a call made while a poll is in flight joins that poll's result.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        settings: FlightServiceSettings | None = None,
        settings_store: SettingsStore | None = None,
        http_client: httpx.AsyncClient | None = None,
        client_factory: Callable[[str], FR24Client] | None = None,
        demo: DemoFlightGenerator | None = None,
        usage: UsageTracker | None = None,
        summary_cache: TTLCache[dict[str, Any] | None] | None = None,
        sandbox: bool = False,
    ):
        self._credentials = credentials
        self._settings_store = settings_store
        if settings is None:
            settings = settings_store.load() if settings_store else FlightServiceSettings()
        self._settings = settings

        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=15.0)
        self._client_factory = client_factory or (
            lambda token: FR24Client(token, http_client=self._http, sandbox=sandbox)
        )
        self._demo = demo or DemoFlightGenerator()
        self._usage = usage or UsageTracker()
        if summary_cache is None:
            # an empty TTLCache is falsy, so no ``or`` here
            summary_cache = TTLCache(
                SUMMARY_CACHE_TTL_SECONDS, max_entries=SUMMARY_CACHE_MAX_ENTRIES
            )
        self._summaries = summary_cache

        self._last_results: list[Flight] = []
        self._last_error: ProviderError | None = None
        self._inflight: asyncio.Task[list[Flight]] | None = None
        self._listeners: list[SettingsListener] = []

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    async def fetch_flights(self, reference: Coordinate) -> list[Flight]:
        """Nearest flights around ``reference``, closest first."""
        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.ensure_future(self._poll(reference))
        else:
            logger.debug("Poll already in flight; joining it")
        return list(await asyncio.shield(self._inflight))

    @property
    def is_polling(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    async def _poll(self, reference: Coordinate) -> list[Flight]:
        settings = self._settings
        if settings.demo_mode:
            return self._poll_demo(reference, settings)

        if not self._credentials.has_credential():
            logger.debug("No flight provider API key configured; skipping live poll")
            return []
        token = self._credentials.get_credential()
        if not token:
            return []

        tier = EndpointTier.FULL if settings.use_full_endpoint else EndpointTier.LIGHT
        client = self._client_factory(token)
        try:
            raws = await client.get_live_positions(
                bounding_box(reference, settings.radius_km), tier
            )
            ranked = rank_nearby(
                raws, reference, settings.radius_km, settings.max_flights_per_request
            )
            if settings.enrich_routes and tier == EndpointTier.LIGHT:
                ranked = await self._enrich(client, ranked, settings.max_flights_per_request)
            flights = [normalize(raw, dist) for raw, dist in ranked]
        except Exception as exc:
            error = classify_provider_error(exc)
            logger.warning(
                "Live flight poll failed (%s, status=%s): %s",
                error.type, error.status_code, error.detail,
            )
            self._last_error = error
            return []

        self._usage.record(len(raws), tier, POSITIONS_PATHS[tier])
        logger.info(
            "Live poll: %d aircraft in box, %d within %.0f km",
            len(raws), len(flights), settings.radius_km,
        )
        return self._complete(flights)

    def _poll_demo(self, reference: Coordinate, settings: FlightServiceSettings) -> list[Flight]:
        count = demo_flight_count(settings, self._demo.rng)
        raws = self._demo.generate(reference, settings.radius_km, count)
        ranked = rank_nearby(
            raws, reference, settings.radius_km, settings.max_flights_per_request
        )
        flights = [normalize(raw, dist) for raw, dist in ranked]

        tier = EndpointTier.FULL if settings.use_full_endpoint else EndpointTier.LIGHT
        self._usage.record(len(flights), tier, POSITIONS_PATHS[tier])
        logger.info("Demo poll: %d synthetic flights", len(flights))
        return self._complete(flights)

    def _complete(self, flights: list[Flight]) -> list[Flight]:
        self._last_error = None
        self._last_results = flights
        return flights

    async def _enrich(
        self,
        client: FR24Client,
        ranked: list[tuple[Any, float]],
        max_concurrent: int,
    ) -> list[tuple[Any, float]]:
        """Merge a flight summary into each ranked record, concurrently.

        A failed summary keeps that record as it was.
        """
        semaphore = asyncio.Semaphore(max_concurrent)

        async def enrich_one(raw: Any, dist: float) -> tuple[Any, float]:
            fr24_id = raw.get("fr24_id") if isinstance(raw, Mapping) else None
            if not fr24_id:
                return raw, dist
            async with semaphore:
                try:
                    summary = await self._summaries.aget_or_compute(
                        fr24_id, lambda: client.get_flight_summary(fr24_id)
                    )
                except Exception as exc:
                    logger.warning("Flight summary for %s failed: %s", fr24_id, exc)
                    return raw, dist
            return merge_summary(raw, summary), dist

        return list(await asyncio.gather(*(enrich_one(r, d) for r, d in ranked)))

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    def get_last_results(self) -> list[Flight]:
        return list(self._last_results)

    def get_last_error(self) -> ProviderError | None:
        return self._last_error

    def clear_error(self) -> None:
        self._last_error = None

    def has_credential(self) -> bool:
        return self._credentials.has_credential()

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def get_settings(self) -> FlightServiceSettings:
        return self._settings

    def update_settings(self, partial: Mapping[str, Any]) -> FlightServiceSettings:
        """Apply a partial update.

        Raises ``pydantic.ValidationError`` on bad input, and whatever the
        settings store raises if the update cannot be persisted. In both cases
        the current settings stay in effect and no listener is called.
        """
        merged = {**self._settings.model_dump(), **partial}
        new = FlightServiceSettings.model_validate(merged)
        if self._settings_store is not None:
            self._settings_store.save(new)
        old, self._settings = self._settings, new
        for listener in list(self._listeners):
            listener(old, new)
        return new

    def add_settings_listener(self, listener: SettingsListener) -> None:
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Usage
    # ------------------------------------------------------------------

    def get_usage_history(self) -> list[UsageRecord]:
        return self._usage.history()

    def get_hourly_usage(self) -> int:
        return self._usage.hourly()

    def get_daily_usage(self) -> int:
        return self._usage.daily()

    def estimate_monthly_usage(self) -> int:
        return self._usage.estimate_monthly(self._settings)

    async def aclose(self) -> None:
        if self._inflight is not None and not self._inflight.done():
            await asyncio.wait([self._inflight])
        if self._owns_client:
            await self._http.aclose()


def merge_summary(raw: Mapping[str, Any], summary: Mapping[str, Any] | None) -> dict[str, Any]:
    """New record: ``raw`` plus the non-empty route/operator fields of ``summary``."""
    merged = dict(raw)
    if summary:
        for key in _SUMMARY_KEYS:
            value = summary.get(key)
            if value not in (None, ""):
                merged[key] = value
    return merged
