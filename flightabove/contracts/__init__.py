"""FlightAbove data contracts — Pydantic v2 models for the nearby-flights core.

Data authority
--------------

**In memory** (owned by the flight service, rebuilt on every poll):
- ``Flight`` — last successful result list
- ``ProviderError`` — last classified live-provider failure
- ``UsageRecord`` — bounded ring of the last 100 polls

**Settings file** (owned by the settings store):
- ``FlightServiceSettings`` — JSON key/value document

**Location cache** (owned by the location resolver, TTL-bound):
- ``Coordinate`` — last resolved IP geolocation

Raw provider records are never modelled: they stay plain dicts or
sequences until the normalizer turns them into a ``Flight``.
"""

from flightabove.contracts.enums import (
    EndpointTier,
    FlightStatus,
    ProviderErrorType,
    RecordShape,
)
from flightabove.contracts.common import ContractModel, Coordinate
from flightabove.contracts.flight import UNKNOWN, UNKNOWN_AIRLINE, Flight
from flightabove.contracts.provider_error import ProviderError
from flightabove.contracts.settings import FlightServiceSettings
from flightabove.contracts.usage import UsageRecord, UsageSummary

__all__ = [
    # Enums
    "EndpointTier",
    "FlightStatus",
    "ProviderErrorType",
    "RecordShape",
    # Common
    "ContractModel",
    "Coordinate",
    # Domain models
    "UNKNOWN",
    "UNKNOWN_AIRLINE",
    "Flight",
    "ProviderError",
    "FlightServiceSettings",
    "UsageRecord",
    "UsageSummary",
]
