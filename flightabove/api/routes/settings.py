"""Flight service settings endpoints."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError

from flightabove.api.deps import get_flight_service
from flightabove.services.flights.orchestrator import FlightDataService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("")
async def get_settings(
    service: FlightDataService = Depends(get_flight_service),
) -> dict:
    return service.get_settings().to_dict()


@router.patch("")
async def update_settings(
    partial: dict[str, Any] = Body(...),
    service: FlightDataService = Depends(get_flight_service),
) -> dict:
    try:
        settings = service.update_settings(partial)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=json.loads(exc.json()))
    except OSError as exc:
        logger.error("Could not save settings: %s", exc)
        raise HTTPException(status_code=500, detail="Settings could not be saved")
    return settings.to_dict()
