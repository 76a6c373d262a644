"""Credit usage history and projections."""

from __future__ import annotations

import time
from collections import deque
from typing import Callable

from flightabove.contracts.enums import EndpointTier
from flightabove.contracts.settings import FlightServiceSettings
from flightabove.contracts.usage import UsageRecord
from flightabove.services.flights.fr24_client import CREDITS_PER_ITEM

HISTORY_SIZE = 100
HOUR_MS = 60 * 60 * 1000
DAY_MS = 24 * HOUR_MS
HOURS_PER_MONTH = 24 * 30


def _now_ms() -> int:
    return int(time.time() * 1000)


class UsageTracker:
    """Bounded ring of the last ``HISTORY_SIZE`` usage records."""

    def __init__(self, clock_ms: Callable[[], int] = _now_ms):
        self._clock_ms = clock_ms
        self._history: deque[UsageRecord] = deque(maxlen=HISTORY_SIZE)

    def record(self, items_returned: int, tier: EndpointTier, endpoint: str) -> UsageRecord:
        entry = UsageRecord(
            items_returned=items_returned,
            credits_used=items_returned * CREDITS_PER_ITEM[tier],
            endpoint=endpoint,
            timestamp_ms=self._clock_ms(),
        )
        self._history.append(entry)
        return entry

    def history(self) -> list[UsageRecord]:
        return list(self._history)

    def credits_since(self, window_ms: int) -> int:
        cutoff = self._clock_ms() - window_ms
        return sum(r.credits_used for r in self._history if r.timestamp_ms >= cutoff)

    def hourly(self) -> int:
        return self.credits_since(HOUR_MS)

    def daily(self) -> int:
        return self.credits_since(DAY_MS)

    def estimate_monthly(self, settings: FlightServiceSettings) -> int:
        """Project a 30-day credit spend.

        From the last hour's spend when there is history, otherwise from the
        settings: polls per hour x max flights x per-item cost.
        """
        if self._history:
            return self.hourly() * HOURS_PER_MONTH

        tier = EndpointTier.FULL if settings.use_full_endpoint else EndpointTier.LIGHT
        polls_per_hour = 60 / settings.refresh_interval_minutes
        per_poll = settings.max_flights_per_request * CREDITS_PER_ITEM[tier]
        return round(polls_per_hour * per_poll * HOURS_PER_MONTH)

    def clear(self) -> None:
        self._history.clear()
