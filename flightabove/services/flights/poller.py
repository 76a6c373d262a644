"""Fixed-interval polling loop with on-demand refresh."""

from __future__ import annotations

import asyncio
import logging

from flightabove.contracts.flight import Flight
from flightabove.contracts.settings import FlightServiceSettings
from flightabove.services.flights.orchestrator import FlightDataService
from flightabove.services.location.resolver import LocationResolver

logger = logging.getLogger(__name__)


class FlightPoller:
    """Runs ``resolve location -> fetch flights`` every refresh interval.

    A poll that outlasts the interval delays the next tick; polls never
    overlap. ``refresh_now()`` wakes the loop early, and switching demo mode
    on triggers it automatically.
    """

    def __init__(
        self,
        service: FlightDataService,
        resolver: LocationResolver,
        seconds_per_minute: float = 60.0,
    ):
        self._service = service
        self._resolver = resolver
        self._seconds_per_minute = seconds_per_minute
        self._wake = asyncio.Event()
        self._task: asyncio.Task[None] | None = None
        self._pending: asyncio.Task[list[Flight]] | None = None
        self.poll_count = 0
        service.add_settings_listener(self._on_settings_changed)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def poll_once(self) -> list[Flight]:
        """One poll through the same entry point as scheduled ticks."""
        reference = await self._resolver.get_current_location()
        flights = await self._service.fetch_flights(reference)
        self.poll_count += 1
        return flights

    def refresh_now(self) -> None:
        self._wake.set()

    async def wait_pending(self) -> None:
        """Wait for a refresh triggered while the loop was not running."""
        if self._pending is not None:
            await self._pending

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info("Flight poller started")

    async def stop(self) -> None:
        await self.wait_pending()
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Flight poller stopped")

    async def _run(self) -> None:
        while True:
            self._wake.clear()
            try:
                await self.poll_once()
            except Exception:
                logger.exception("Scheduled flight poll failed")

            interval = (
                self._service.get_settings().refresh_interval_minutes * self._seconds_per_minute
            )
            try:
                await asyncio.wait_for(self._wake.wait(), timeout=interval)
                logger.debug("Poller woken for an immediate refresh")
            except asyncio.TimeoutError:
                pass

    def _on_settings_changed(
        self, old: FlightServiceSettings, new: FlightServiceSettings
    ) -> None:
        if not new.demo_mode or old.demo_mode:
            return
        logger.info("Demo mode enabled; refreshing immediately")
        if self.running:
            self.refresh_now()
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._pending = loop.create_task(self.poll_once())
