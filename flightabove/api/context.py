"""Explicit application context: every component, built once, passed around."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import httpx

from flightabove.persistence.credentials import CredentialStore, EnvCredentialStore
from flightabove.persistence.settings_store import JsonSettingsStore
from flightabove.services.flights.orchestrator import FlightDataService
from flightabove.services.flights.poller import FlightPoller
from flightabove.services.location.resolver import LocationResolver

SANDBOX_ENV = "FR24_SANDBOX"


@dataclass
class AppContext:
    http_client: httpx.AsyncClient
    credentials: CredentialStore
    settings_store: JsonSettingsStore
    resolver: LocationResolver
    service: FlightDataService
    poller: FlightPoller

    async def aclose(self) -> None:
        await self.poller.stop()
        await self.service.aclose()
        await self.resolver.aclose()
        await self.http_client.aclose()


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def build_context(
    settings_path: Path | None = None,
    credentials: CredentialStore | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> AppContext:
    """Wire the production components around one shared HTTP client."""
    http = http_client or httpx.AsyncClient(timeout=15.0)
    creds = credentials or EnvCredentialStore()
    store = JsonSettingsStore(settings_path)
    resolver = LocationResolver(http_client=http)
    service = FlightDataService(
        credentials=creds,
        settings_store=store,
        http_client=http,
        sandbox=_env_flag(SANDBOX_ENV),
    )
    poller = FlightPoller(service, resolver)
    return AppContext(
        http_client=http,
        credentials=creds,
        settings_store=store,
        resolver=resolver,
        service=service,
        poller=poller,
    )
