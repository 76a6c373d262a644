"""Credit usage endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from flightabove.api.deps import get_flight_service
from flightabove.contracts.usage import UsageSummary
from flightabove.services.flights.orchestrator import FlightDataService

router = APIRouter(prefix="/usage", tags=["usage"])


@router.get("")
async def usage_history(
    service: FlightDataService = Depends(get_flight_service),
) -> list[dict]:
    return [r.to_dict() for r in service.get_usage_history()]


@router.get("/summary")
async def usage_summary(
    service: FlightDataService = Depends(get_flight_service),
) -> dict:
    summary = UsageSummary(
        hourly=service.get_hourly_usage(),
        daily=service.get_daily_usage(),
        monthly_estimate=service.estimate_monthly_usage(),
        history_size=len(service.get_usage_history()),
    )
    return summary.to_dict()
