"""Answer shapes and their canonical text renderings.

An answer is one of three tagged variants, discriminated by ``kind``:

* :class:`ScalarAnswer` - a single decimal;
* :class:`AreaScalarMap` - area code -> decimal, kept in ascending key order;
* :class:`AreaStatisticsMap` - area code -> :class:`Statistics`.

Rendering is done by :func:`render_answer`, which dispatches on the tag to
one plain function per variant.  Both front ends print exactly this text.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from zipstats._constants import NO_DATA_LINE, format_decimal


class _AnswerModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class Statistics(_AnswerModel):
    """Per-area figures of the composite report."""

    avg_market_value: Decimal | None = None
    avg_fine_rate: Decimal


class ScalarAnswer(_AnswerModel):
    kind: Literal["scalar"] = "scalar"
    value: Decimal


class AreaScalarMap(_AnswerModel):
    kind: Literal["area_scalar_map"] = "area_scalar_map"
    values: dict[str, Decimal] = Field(default_factory=dict)

    @field_validator("values")
    @classmethod
    def _order_by_area(cls, value: dict[str, Decimal]) -> dict[str, Decimal]:
        return dict(sorted(value.items()))

    def get(self, area_code: str) -> Decimal | None:
        return self.values.get(area_code)

    def with_entry(self, area_code: str, value: Decimal) -> AreaScalarMap:
        """Return a copy with *area_code* set to *value*."""
        return AreaScalarMap(values={**self.values, area_code: value})


class AreaStatisticsMap(_AnswerModel):
    kind: Literal["area_statistics_map"] = "area_statistics_map"
    values: dict[str, Statistics] = Field(default_factory=dict)

    def ordered(self) -> list[tuple[str, Statistics]]:
        """Entries ascending by average market value, absent values last.

        Equal averages are ordered by area code.
        """

        def _key(item: tuple[str, Statistics]) -> tuple[bool, Decimal, str]:
            area_code, stats = item
            avg = stats.avg_market_value
            return (avg is None, avg if avg is not None else Decimal(0), area_code)

        return sorted(self.values.items(), key=_key)


Answer = Annotated[ScalarAnswer | AreaScalarMap | AreaStatisticsMap, Field(discriminator="kind")]


def _render_scalar(answer: ScalarAnswer) -> str:
    return format_decimal(answer.value)


def _render_area_scalar_map(answer: AreaScalarMap) -> str:
    if not answer.values:
        return NO_DATA_LINE
    return "\n".join(f"{area_code} {format_decimal(value)}" for area_code, value in answer.values.items())


def _render_optional(value: Decimal | None) -> str:
    return "null" if value is None else format_decimal(value)


def _render_area_statistics_map(answer: AreaStatisticsMap) -> str:
    return "\n".join(
        f"{_render_optional(stats.avg_market_value)} {format_decimal(stats.avg_fine_rate)} {area_code}"
        for area_code, stats in answer.ordered()
    )


_RENDERERS: dict[str, Callable[..., str]] = {
    "scalar": _render_scalar,
    "area_scalar_map": _render_area_scalar_map,
    "area_statistics_map": _render_area_statistics_map,
}


def render_answer(answer: Answer) -> str:
    """Canonical text rendering of *answer* (no trailing newline)."""
    return _RENDERERS[answer.kind](answer)
