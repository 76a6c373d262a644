"""Proximity filter and ranking of raw flight records."""

from __future__ import annotations

from typing import Any, Iterable

from flightabove.contracts.common import Coordinate
from flightabove.services.flights.extraction import extract_position
from flightabove.services.geo import distance_km


def rank_nearby(
    raws: Iterable[Any],
    reference: Coordinate,
    radius_km: float,
    max_results: int,
) -> list[tuple[Any, float]]:
    """Nearest records within ``radius_km`` of ``reference``.

    Records without a usable position are skipped. The result is sorted by
    ascending distance (stable: ties keep input order) and holds at most
    ``max_results`` ``(raw, distance_km)`` pairs. Input records are returned
    as-is, never copied or modified.
    """
    if max_results <= 0:
        return []

    candidates: list[tuple[Any, float]] = []
    for raw in raws:
        position = extract_position(raw)
        if position is None:
            continue
        dist = distance_km(reference, position)
        if dist <= radius_km:
            candidates.append((raw, dist))

    candidates.sort(key=lambda pair: pair[1])
    return candidates[:max_results]
