"""Last live-provider failure, kept for the dismissible error banner."""

from datetime import datetime, timezone

from pydantic import Field

from flightabove.contracts.common import ContractModel
from flightabove.contracts.enums import ProviderErrorType


class ProviderError(ContractModel):
    """Classified failure of a live flight-provider request.

    At most one is retained by the flight service. It is cleared on the next
    successful poll or when the user dismisses it.
    """

    type: ProviderErrorType
    message: str = Field(..., description="Human-readable error message")
    status_code: int | None = Field(default=None, ge=100, le=599)
    detail: str | None = None
    action_url: str | None = Field(
        default=None, description="Call-to-action link (e.g. buy credits)"
    )
    timestamp: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))
