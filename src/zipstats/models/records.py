"""Dataset record models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import AliasChoices, Field, field_validator

from zipstats.models._base import StatsBaseModel


class PopulationEntry(StatsBaseModel):
    """Population count of a single area code."""

    area_code: str = Field(validation_alias=AliasChoices("area_code", "zip_code"))
    count: Decimal

    @field_validator("area_code")
    @classmethod
    def _strip_area_code(cls, value: str) -> str:
        code = value.strip()
        if not code:
            raise ValueError("area_code must be non-empty")
        return code


class ParkingRecord(StatsBaseModel):
    """A single parking violation.

    Field aliases follow the keys of the JSON parking export.
    """

    timestamp: datetime | None = Field(default=None, validation_alias=AliasChoices("timestamp", "date"))
    """Time of the violation, when the source provided a parsable one."""
    amount: int = Field(default=0, ge=0, validation_alias=AliasChoices("amount", "fine"))
    """Fine amount in whole dollars."""
    reason: str = Field(default="", validation_alias=AliasChoices("reason", "violation"))
    vehicle_id: int = Field(default=0, validation_alias=AliasChoices("vehicle_id", "plate_id"))
    """Anonymized plate identifier."""
    jurisdiction: str = Field(default="", validation_alias=AliasChoices("jurisdiction", "state"))
    """Licence plate state (e.g. ``"PA"``)."""
    violation_id: int = Field(default=0, validation_alias=AliasChoices("violation_id", "ticket_number"))
    area_code: str | None = Field(default=None, validation_alias=AliasChoices("area_code", "zip_code"))
    """Area code of the violation, if known."""


class PropertyRecord(StatsBaseModel):
    """A real-estate property.

    Either numeric field may be absent; absent values are excluded from
    every aggregate rather than counted as zero.
    """

    market_value: Decimal | None = Field(
        default=None,
        validation_alias=AliasChoices("market_value"),
    )
    livable_area: Decimal | None = Field(
        default=None,
        validation_alias=AliasChoices("livable_area", "total_livable_area"),
    )
    area_code: str | None = Field(default=None, validation_alias=AliasChoices("area_code", "zip_code"))
