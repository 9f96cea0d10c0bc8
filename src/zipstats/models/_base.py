"""Base model for zipstats records and answers.

Every dataset record inherits from :class:`StatsBaseModel`, which provides:

* frozen (immutable, structurally comparable) instances;
* ``populate_by_name`` so records can be built from snake_case kwargs or
  from the raw column names of the source files via aliases;
* a ``model_validator(mode="before")`` that drops blank cells so the field
  default (``None``) is used instead of an empty string.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

# Cell values the source files use for "not available".
_SENTINELS = frozenset({"", "NaN", "nan", "null"})


class StatsBaseModel(BaseModel):
    """Base for immutable dataset records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_blank_cells(cls, values: Any) -> Any:
        """Strip sentinel cells so optional fields fall back to ``None``."""
        if not isinstance(values, dict):
            return values
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and value.strip() in _SENTINELS:
                continue
            cleaned[key] = value
        return cleaned
