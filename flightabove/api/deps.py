"""FastAPI dependency injection wiring."""

from __future__ import annotations

from fastapi import Depends, Request

from flightabove.api.context import AppContext
from flightabove.services.flights.orchestrator import FlightDataService
from flightabove.services.flights.poller import FlightPoller
from flightabove.services.location.resolver import LocationResolver

# ------------------------------------------------------------------
# Application context (singleton from app.state)
# ------------------------------------------------------------------


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_flight_service(ctx: AppContext = Depends(get_context)) -> FlightDataService:
    return ctx.service


def get_resolver(ctx: AppContext = Depends(get_context)) -> LocationResolver:
    return ctx.resolver


def get_poller(ctx: AppContext = Depends(get_context)) -> FlightPoller:
    return ctx.poller
