"""Flight service settings, persisted by the settings store."""

from pydantic import ConfigDict, Field

from flightabove.contracts.common import ContractModel


class FlightServiceSettings(ContractModel):
    """User-tunable options of the flight service.

    Stored as plain key/value JSON. Unknown keys are rejected so that a typo
    in a partial update does not silently do nothing.
    """

    model_config = ConfigDict(extra="forbid")

    refresh_interval_minutes: int = Field(default=5, ge=1, le=1440)
    max_flights_per_request: int = Field(default=10, ge=1, le=100)
    radius_km: float = Field(default=50.0, ge=0, le=1000)
    use_full_endpoint: bool = Field(
        default=False, description="Full payload tier (richer, more credits)"
    )
    demo_mode: bool = False

    demo_min_flights: int = Field(default=3, ge=1, le=100)
    enrich_routes: bool = Field(
        default=False,
        description="Fetch a flight summary per ranked light record to fill the route",
    )
