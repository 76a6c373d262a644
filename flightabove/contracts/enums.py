"""Enumerations shared across all FlightAbove contracts."""

from enum import Enum


class FlightStatus(str, Enum):
    """Operational status shown on a flight card."""
    ON_TIME = "On Time"
    DELAYED = "Delayed"
    CANCELLED = "Cancelled"
    UNKNOWN = "Unknown"


class ProviderErrorType(str, Enum):
    """Classification of a failed live-provider request."""
    INVALID_CREDENTIAL = "InvalidCredential"
    PAYMENT_REQUIRED = "PaymentRequired"
    RATE_LIMITED = "RateLimited"
    NETWORK_FAILURE = "NetworkFailure"
    NOT_FOUND = "NotFound"
    OTHER = "Other"


class EndpointTier(str, Enum):
    """Payload richness of the live flight-positions endpoint."""
    LIGHT = "light"
    FULL = "full"


class RecordShape(str, Enum):
    """Known shapes of raw flight records."""
    POSITIONAL = "positional"  # feed-style array: [hex, lat, lon, track, ...]
    LIGHT = "light"
    FULL = "full"
    GENERIC = "generic"  # legacy object with descriptive field names
    EMPTY = "empty"
