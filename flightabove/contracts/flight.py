"""Flight — one aircraft near the user, normalized from a provider record.

Built fresh on every poll and never mutated afterwards. The next poll's
list replaces it wholesale.
"""

from pydantic import ConfigDict, Field

from flightabove.contracts.common import ContractModel, Coordinate
from flightabove.contracts.enums import FlightStatus

UNKNOWN = "Unknown"
UNKNOWN_AIRLINE = "Unknown Airline"


class Flight(ContractModel):
    """Canonical flight record consumed by the presentation layer.

    **Identity**: callsign, airline, airline_code, flight_number
    **Route**: origin, destination (airport codes)
    **Kinematics**: altitude_ft, speed_mph, heading_deg, position
    **Ranking**: distance_km (``None`` until ranked against a reference)
    """

    model_config = ConfigDict(frozen=True)

    callsign: str = Field(..., min_length=1)
    airline: str = UNKNOWN_AIRLINE
    airline_code: str | None = None
    flight_number: str = Field(..., min_length=1)

    origin: str = UNKNOWN
    destination: str = UNKNOWN

    altitude_ft: int = Field(default=0, ge=0)
    speed_mph: int = Field(default=0, ge=0)
    heading_deg: int = Field(default=0, ge=0, le=359)
    position: Coordinate

    status: FlightStatus = FlightStatus.UNKNOWN
    distance_km: float | None = Field(default=None, ge=0)

    aircraft: str = UNKNOWN
    registration: str = UNKNOWN
    estimated_arrival: str = ""

    fr24_id: str | None = None
    flight_radar_url: str | None = None
