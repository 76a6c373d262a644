"""Base classes and shared types for FlightAbove contracts.

Unit conventions (all contracts and API responses):
- **Distances**: kilometers — suffix ``_km``
- **Speeds**: miles per hour (mph) — suffix ``_mph``
- **Altitudes**: feet — suffix ``_ft``
- **Headings/angles**: degrees — suffix ``_deg``
- **Accuracy**: meters — suffix ``_m``
- **Coordinates**: WGS84 decimal degrees

Provider payloads may use knots or other units; extraction code must
convert to the above before building a contract.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ContractModel(BaseModel):
    """Base model with JSON-friendly serialization.

    - Enums serialize as string values.
    - ``to_dict()`` produces a JSON-safe dict (datetimes as ISO 8601).
    - ``from_dict()`` hydrates from a plain dict (settings file, API body).
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Dump to a JSON-compatible dict."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContractModel":
        """Create model instance from a plain dict."""
        return cls.model_validate(data)


class Coordinate(BaseModel):
    """WGS84 geographic coordinate with an accuracy radius."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    accuracy_m: float = Field(default=0.0, ge=0)

    model_config = ConfigDict(frozen=True)
