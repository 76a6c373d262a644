"""CLI entry point: print the flights currently above you.

Usage:
    python -m flightabove.cli --demo
    python -m flightabove.cli --lat 51.47 --lon -0.45 --radius 30 --watch
"""

from __future__ import annotations

import argparse
import asyncio
import logging

import httpx
from dotenv import load_dotenv
from pydantic import ValidationError

from flightabove.contracts.common import Coordinate
from flightabove.contracts.flight import Flight
from flightabove.contracts.settings import FlightServiceSettings
from flightabove.persistence.credentials import EnvCredentialStore
from flightabove.persistence.settings_store import JsonSettingsStore
from flightabove.services.flights.orchestrator import FlightDataService
from flightabove.services.location.resolver import LocationResolver

logger = logging.getLogger(__name__)

_OPTION_NAMES = {
    "radius_km": "--radius",
    "max_flights_per_request": "--max",
    "latitude": "--lat",
    "longitude": "--lon",
}


def format_summary(flight: Flight) -> str:
    """One line per flight for the list view."""
    distance = f"{flight.distance_km:6.1f} km" if flight.distance_km is not None else "      ?"
    return (
        f"{flight.callsign:<9} {flight.airline:<24.24} "
        f"{flight.origin:>4} -> {flight.destination:<4} "
        f"{flight.altitude_ft:>6} ft {flight.speed_mph:>4} mph  {distance}"
    )


def format_detail(flight: Flight) -> str:
    """Multi-line detail view of a single flight."""
    lines = [
        f"{flight.flight_number} ({flight.callsign}) - {flight.airline}",
        f"  Route:     {flight.origin} -> {flight.destination}",
        f"  Aircraft:  {flight.aircraft} [{flight.registration}]",
        f"  Altitude:  {flight.altitude_ft} ft   Speed: {flight.speed_mph} mph   Heading: {flight.heading_deg} deg",
        f"  Position:  {flight.position.latitude:.4f}, {flight.position.longitude:.4f}",
        f"  Status:    {flight.status}",
    ]
    if flight.estimated_arrival:
        lines.append(f"  ETA:       {flight.estimated_arrival}")
    if flight.flight_radar_url:
        lines.append(f"  Track:     {flight.flight_radar_url}")
    return "\n".join(lines)


def _print_results(service: FlightDataService, flights: list[Flight]) -> None:
    error = service.get_last_error()
    if error is not None:
        print(f"! {error.message}" + (f" ({error.action_url})" if error.action_url else ""))
    if not flights:
        if error is None and not service.has_credential() and not service.get_settings().demo_mode:
            print("No FR24 API key configured (set FR24_API_TOKEN or use --demo).")
        else:
            print("No flights nearby.")
        return
    for flight in flights:
        print(format_summary(flight))
    print()
    print(format_detail(flights[0]))


def _overrides(args: argparse.Namespace) -> dict[str, object]:
    return {
        key: value
        for key, value in (
            ("demo_mode", True if args.demo else None),
            ("radius_km", args.radius),
            ("max_flights_per_request", args.max),
            ("use_full_endpoint", True if args.full else None),
        )
        if value is not None
    }


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else ""
        parts.append(f"{_OPTION_NAMES.get(field, field)}: {err['msg']}")
    return "; ".join(parts)


async def _run(args: argparse.Namespace) -> None:
    async with httpx.AsyncClient(timeout=15.0) as http:
        store = JsonSettingsStore()
        service = FlightDataService(
            credentials=EnvCredentialStore(),
            settings=store.load(),
            http_client=http,
        )
        if args.overrides:
            service.update_settings(args.overrides)
        resolver = LocationResolver(http_client=http)

        while True:
            if args.reference is not None:
                reference = args.reference
            else:
                reference = await resolver.get_current_location()
            logger.info("Reference point: %.4f, %.4f", reference.latitude, reference.longitude)

            flights = await service.fetch_flights(reference)
            _print_results(service, flights)

            if not args.watch:
                break
            await asyncio.sleep(service.get_settings().refresh_interval_minutes * 60)
            print()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse and validate the command line.

    Adds ``overrides`` (settings to apply) and ``reference`` (fixed
    Coordinate or None) to the namespace. Exits with a usage error when a
    value is out of range.
    """
    parser = argparse.ArgumentParser(description="FlightAbove - flights near you")
    parser.add_argument("--lat", type=float, help="Reference latitude (skip IP geolocation)")
    parser.add_argument("--lon", type=float, help="Reference longitude")
    parser.add_argument("--radius", type=float, help="Search radius in km")
    parser.add_argument("--max", type=int, help="Maximum flights to show")
    parser.add_argument("--full", action="store_true", help="Use the full (richer) endpoint")
    parser.add_argument("--demo", action="store_true", help="Synthetic flights, no API key")
    parser.add_argument("--watch", action="store_true", help="Keep polling at the refresh interval")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    if (args.lat is None) != (args.lon is None):
        parser.error("--lat and --lon must be given together")

    args.overrides = _overrides(args)
    args.reference = None
    try:
        FlightServiceSettings.model_validate(args.overrides)
        if args.lat is not None:
            args.reference = Coordinate(latitude=args.lat, longitude=args.lon)
    except ValidationError as exc:
        parser.error(_describe(exc))
    return args


def main() -> None:
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    load_dotenv()

    try:
        asyncio.run(_run(args))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
