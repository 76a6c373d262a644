"""FastAPI application factory.

Local API consumed by the tray UI process in place of IPC channels.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

# Load .env file from project root (must be before other imports)
load_dotenv()
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from flightabove.api.context import build_context  # noqa: E402
from flightabove.api.routes import flights, settings, status, usage  # noqa: E402

logger = logging.getLogger(__name__)

POLLING_ENV = "FLIGHTABOVE_POLLING"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the component context and start background polling."""
    ctx = build_context()
    app.state.context = ctx

    if not ctx.credentials.has_credential():
        logger.info("No FR24 API key configured; live polling disabled until one is set")

    if os.environ.get(POLLING_ENV, "1").strip().lower() not in ("0", "false", "no", "off"):
        ctx.poller.start()
    try:
        yield
    finally:
        await ctx.aclose()


app = FastAPI(
    title="FlightAbove API",
    description="Nearest flights above the user's location",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.environ.get("CORS_ORIGINS", "http://localhost:5173").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(flights.router, prefix="/api")
app.include_router(settings.router, prefix="/api")
app.include_router(usage.router, prefix="/api")
app.include_router(status.router, prefix="/api")


@app.get("/api/health")
async def health():
    ctx = app.state.context
    last_location = ctx.resolver.last_known_location()
    return {
        "status": "ok",
        "has_credential": ctx.service.has_credential(),
        "demo_mode": ctx.service.get_settings().demo_mode,
        "polling": ctx.poller.running,
        "last_result_count": len(ctx.service.get_last_results()),
        "last_location": last_location.model_dump() if last_location else None,
    }
