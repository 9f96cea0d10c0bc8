"""Tests for record models, questions and answer rendering."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from zipstats.exceptions import InvalidQuestionError
from zipstats.models.answers import (
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
    Question,
    property_field_for,
)
from zipstats.models.records import ParkingRecord, PopulationEntry, PropertyRecord

# ------------------------------------------------------------------
# Records
# ------------------------------------------------------------------


class TestRecords:
    def test_parking_record_from_json_keys(self) -> None:
        record = ParkingRecord.model_validate(
            {
                "date": "2013-04-03T15:15:00Z",
                "fine": 36,
                "violation": "METER EXPIRED CC",
                "plate_id": 1322731,
                "state": "PA",
                "ticket_number": 2905938,
                "zip_code": "19104",
            }
        )
        assert record.amount == 36
        assert record.jurisdiction == "PA"
        assert record.vehicle_id == 1322731
        assert record.area_code == "19104"

    def test_parking_record_blank_area_code_is_absent(self) -> None:
        record = ParkingRecord(amount=10, jurisdiction="PA", area_code="  ")
        assert record.area_code is None

    def test_parking_record_rejects_negative_amount(self) -> None:
        with pytest.raises(ValidationError):
            ParkingRecord(amount=-1)

    def test_property_record_blank_values_are_absent(self) -> None:
        record = PropertyRecord.model_validate({"market_value": "", "total_livable_area": "1200", "zip_code": "19103"})
        assert record.market_value is None
        assert record.livable_area == Decimal("1200")

    def test_records_are_frozen(self) -> None:
        record = PropertyRecord(market_value=Decimal(1), area_code="19103")
        with pytest.raises(ValidationError):
            record.market_value = Decimal(2)  # type: ignore[misc]

    def test_population_entry_requires_area_code(self) -> None:
        with pytest.raises(ValidationError):
            PopulationEntry(area_code=" ", count=Decimal(5))


# ------------------------------------------------------------------
# Questions
# ------------------------------------------------------------------


class TestQuestion:
    @pytest.mark.parametrize("raw", [3, "3", " 3 ", Question.AVERAGE_MARKET_VALUE])
    def test_parse_accepts_numbers_and_strings(self, raw: object) -> None:
        assert Question.parse(raw) is Question.AVERAGE_MARKET_VALUE

    @pytest.mark.parametrize("raw", [0, 7, "seven", "", "3.7", None, True, 3.7, 3.0, Decimal("3.5")])
    def test_parse_rejects_unknown(self, raw: object) -> None:
        with pytest.raises(InvalidQuestionError):
            Question.parse(raw)

    def test_area_scoped_questions(self) -> None:
        scoped = {q for q in Question if q.is_area_scoped}
        assert scoped == {
            Question.AVERAGE_MARKET_VALUE,
            Question.AVERAGE_LIVABLE_AREA,
            Question.MARKET_VALUE_PER_CAPITA,
        }

    def test_property_field_table(self) -> None:
        assert PROPERTY_FIELDS == (MARKET_VALUE, LIVABLE_AREA)
        assert property_field_for(Question.AVERAGE_LIVABLE_AREA) is LIVABLE_AREA
        record = PropertyRecord(market_value=Decimal(10), livable_area=Decimal(20))
        assert MARKET_VALUE.extract(record) == Decimal(10)
        assert LIVABLE_AREA.extract(record) == Decimal(20)

    def test_property_field_for_unrelated_question(self) -> None:
        with pytest.raises(InvalidQuestionError):
            property_field_for(Question.TOTAL_POPULATION)


# ------------------------------------------------------------------
# Answers
# ------------------------------------------------------------------


class TestRendering:
    def test_scalar(self) -> None:
        assert render_answer(ScalarAnswer(value=Decimal(14))) == "14"

    def test_area_scalar_map_in_key_order(self) -> None:
        answer = AreaScalarMap(values={"19103": Decimal("0.0400"), "19102": Decimal("0.3000")})
        assert render_answer(answer) == "19102 0.3000\n19103 0.0400"

    def test_empty_area_scalar_map(self) -> None:
        assert render_answer(AreaScalarMap()) == "No data."

    def test_statistics_sorted_by_market_value(self) -> None:
        answer = AreaStatisticsMap(
            values={
                "19101": Statistics(avg_market_value=Decimal(30000), avg_fine_rate=Decimal("0.0010")),
                "19102": Statistics(avg_market_value=Decimal(40000), avg_fine_rate=Decimal("0.0020")),
                "19103": Statistics(avg_market_value=Decimal(0), avg_fine_rate=Decimal(0)),
                "19104": Statistics(avg_market_value=Decimal(20000), avg_fine_rate=Decimal("0.0030")),
            }
        )
        assert render_answer(answer).splitlines() == [
            "0 0 19103",
            "20000 0.0030 19104",
            "30000 0.0010 19101",
            "40000 0.0020 19102",
        ]

    def test_absent_market_value_sorts_last(self) -> None:
        answer = AreaStatisticsMap(
            values={
                "19101": Statistics(avg_market_value=None, avg_fine_rate=Decimal("0.0010")),
                "19102": Statistics(avg_market_value=Decimal(40000), avg_fine_rate=Decimal("0.0020")),
            }
        )
        assert render_answer(answer).splitlines() == ["40000 0.0020 19102", "null 0.0010 19101"]

    def test_equal_market_values_ordered_by_area_code(self) -> None:
        answer = AreaStatisticsMap(
            values={
                "19105": Statistics(avg_market_value=Decimal(100), avg_fine_rate=Decimal(0)),
                "19101": Statistics(avg_market_value=Decimal(100), avg_fine_rate=Decimal(0)),
            }
        )
        assert [area for area, _ in answer.ordered()] == ["19101", "19105"]

    def test_structural_equality(self) -> None:
        assert AreaScalarMap(values={"19102": Decimal(1)}) == AreaScalarMap(values={"19102": Decimal(1)})
        assert ScalarAnswer(value=Decimal(1)) != ScalarAnswer(value=Decimal(2))

    def test_with_entry_returns_copy(self) -> None:
        original = AreaScalarMap(values={"19103": Decimal(1)})
        updated = original.with_entry("19102", Decimal(2))
        assert list(updated.values) == ["19102", "19103"]
        assert "19102" not in original.values
