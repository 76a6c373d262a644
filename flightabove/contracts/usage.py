"""Usage accounting — credits consumed by live-provider polls."""

from pydantic import Field

from flightabove.contracts.common import ContractModel


class UsageRecord(ContractModel):
    """One successful (or demo) poll and the credits it cost."""

    items_returned: int = Field(..., ge=0)
    credits_used: int = Field(..., ge=0, description="items_returned x per-item cost")
    endpoint: str
    timestamp_ms: int = Field(..., ge=0, description="Unix epoch milliseconds")


class UsageSummary(ContractModel):
    """Aggregated usage figures for the settings panel."""

    hourly: int = Field(..., ge=0)
    daily: int = Field(..., ge=0)
    monthly_estimate: int = Field(..., ge=0)
    history_size: int = Field(..., ge=0)
