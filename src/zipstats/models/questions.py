"""The six supported questions and the property-field descriptor table."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from decimal import Decimal
from enum import IntEnum

from zipstats.exceptions import InvalidQuestionError
from zipstats.models.records import PropertyRecord


class Question(IntEnum):
    TOTAL_POPULATION = 1
    FINES_PER_CAPITA = 2
    AVERAGE_MARKET_VALUE = 3
    AVERAGE_LIVABLE_AREA = 4
    MARKET_VALUE_PER_CAPITA = 5
    COMPOSITE_REPORT = 6

    @property
    def is_area_scoped(self) -> bool:
        """Whether answering needs an area code."""
        return self in _AREA_SCOPED

    @property
    def title(self) -> str:
        return QUESTION_TITLES[self]

    @classmethod
    def parse(cls, value: object) -> Question:
        """Coerce ``3``, ``"3"`` or ``Question.AVERAGE_MARKET_VALUE`` to a member.

        Raises :class:`InvalidQuestionError` for anything else.
        """
        if isinstance(value, bool) or not isinstance(value, int | str):
            raise InvalidQuestionError(f"Unknown question: {value!r}", question=value)
        try:
            return cls(int(value.strip()) if isinstance(value, str) else value)
        except ValueError:
            raise InvalidQuestionError(f"Unknown question: {value!r}", question=value) from None


_AREA_SCOPED = frozenset(
    {
        Question.AVERAGE_MARKET_VALUE,
        Question.AVERAGE_LIVABLE_AREA,
        Question.MARKET_VALUE_PER_CAPITA,
    }
)

QUESTION_TITLES: dict[Question, str] = {
    Question.TOTAL_POPULATION: "Print Total Population",
    Question.FINES_PER_CAPITA: "Print Total Parking Fines per Capita",
    Question.AVERAGE_MARKET_VALUE: "Print Average Market Value",
    Question.AVERAGE_LIVABLE_AREA: "Print Average Total Livable Area",
    Question.MARKET_VALUE_PER_CAPITA: "Print Total Market Value per Capita",
    Question.COMPOSITE_REPORT: "Surprise action",
}


@dataclasses.dataclass(frozen=True)
class PropertyField:
    """A numeric property column that can be averaged per area."""

    field_id: str
    question: Question
    extract: Callable[[PropertyRecord], Decimal | None]


MARKET_VALUE = PropertyField(
    field_id="market_value",
    question=Question.AVERAGE_MARKET_VALUE,
    extract=lambda record: record.market_value,
)
LIVABLE_AREA = PropertyField(
    field_id="livable_area",
    question=Question.AVERAGE_LIVABLE_AREA,
    extract=lambda record: record.livable_area,
)

PROPERTY_FIELDS: tuple[PropertyField, ...] = (MARKET_VALUE, LIVABLE_AREA)


def property_field_for(question: Question) -> PropertyField:
    for descriptor in PROPERTY_FIELDS:
        if descriptor.question == question:
            return descriptor
    raise InvalidQuestionError(f"Question {int(question)} does not average a property field", question=question)
