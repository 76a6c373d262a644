"""Location and last-error endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from flightabove.api.deps import get_flight_service, get_resolver
from flightabove.services.flights.orchestrator import FlightDataService
from flightabove.services.location.resolver import LocationResolver

router = APIRouter(tags=["status"])


@router.get("/location")
async def current_location(
    resolver: LocationResolver = Depends(get_resolver),
) -> dict:
    coord = await resolver.get_current_location()
    return coord.model_dump()


@router.get("/error")
async def last_error(
    service: FlightDataService = Depends(get_flight_service),
) -> dict | None:
    error = service.get_last_error()
    return error.to_dict() if error else None


@router.delete("/error", status_code=204)
async def dismiss_error(
    service: FlightDataService = Depends(get_flight_service),
) -> None:
    service.clear_error()
