"""Nearby-flight endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from flightabove.api.deps import get_flight_service, get_poller, get_resolver
from flightabove.services.flights.orchestrator import FlightDataService
from flightabove.services.flights.poller import FlightPoller
from flightabove.services.location.resolver import LocationResolver

router = APIRouter(prefix="/flights", tags=["flights"])


@router.get("")
async def fetch_flights(
    service: FlightDataService = Depends(get_flight_service),
    resolver: LocationResolver = Depends(get_resolver),
) -> list[dict]:
    """Resolve the current location and poll for the nearest flights."""
    reference = await resolver.get_current_location()
    flights = await service.fetch_flights(reference)
    return [f.to_dict() for f in flights]


@router.get("/last")
async def last_results(
    service: FlightDataService = Depends(get_flight_service),
) -> list[dict]:
    return [f.to_dict() for f in service.get_last_results()]


@router.post("/refresh")
async def refresh(
    poller: FlightPoller = Depends(get_poller),
) -> list[dict]:
    """Manual refresh; joins an in-flight poll instead of starting a second one."""
    flights = await poller.poll_once()
    return [f.to_dict() for f in flights]
