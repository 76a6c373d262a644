"""Service-level exceptions."""


class FlightAboveError(Exception):
    """Base exception for all FlightAbove service errors."""


class GeolocationError(FlightAboveError):
    """Raised when one geolocation provider cannot produce a coordinate."""

    def __init__(self, provider: str, reason: str):
        self.provider = provider
        self.reason = reason
        super().__init__(f"{provider}: {reason}")


class MalformedResponseError(FlightAboveError):
    """Raised when a provider answers 2xx with a body we cannot use."""
