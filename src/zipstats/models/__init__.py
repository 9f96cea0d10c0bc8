"""Data models for datasets, questions and answers."""

from zipstats.models._base import StatsBaseModel
from zipstats.models.answers import (
    Answer,
    AreaScalarMap,
    AreaStatisticsMap,
    ScalarAnswer,
    Statistics,
    render_answer,
)
from zipstats.models.questions import (
    LIVABLE_AREA,
    MARKET_VALUE,
    PROPERTY_FIELDS,
    QUESTION_TITLES,
    PropertyField,
    Question,
    property_field_for,
)
from zipstats.models.records import ParkingRecord, PopulationEntry, PropertyRecord

__all__ = [
    "Answer",
    "AreaScalarMap",
    "AreaStatisticsMap",
    "LIVABLE_AREA",
    "MARKET_VALUE",
    "PROPERTY_FIELDS",
    "ParkingRecord",
    "PopulationEntry",
    "PropertyField",
    "PropertyRecord",
    "QUESTION_TITLES",
    "Question",
    "ScalarAnswer",
    "StatsBaseModel",
    "Statistics",
    "property_field_for",
    "render_answer",
]
