from __future__ import annotations

from decimal import Decimal

import pytest

from zipstats._cache import ResultCache
from zipstats.models.answers import AreaScalarMap, ScalarAnswer
from zipstats.models.questions import Question


def test_get_missing_is_none() -> None:
    cache = ResultCache()
    assert cache.get(Question.TOTAL_POPULATION) is None
    assert Question.TOTAL_POPULATION not in cache


def test_put_then_get() -> None:
    cache = ResultCache()
    cache.put(Question.TOTAL_POPULATION, ScalarAnswer(value=Decimal(14)))

    assert cache.get(Question.TOTAL_POPULATION) == ScalarAnswer(value=Decimal(14))
    assert len(cache) == 1


def test_put_rejects_absent_answer() -> None:
    cache = ResultCache()
    with pytest.raises(ValueError):
        cache.put(Question.TOTAL_POPULATION, None)  # type: ignore[arg-type]
    assert len(cache) == 0


def test_area_entries_accumulate_under_one_question() -> None:
    cache = ResultCache()
    cache.put_area(Question.AVERAGE_MARKET_VALUE, "19103", Decimal(30000))
    cache.put_area(Question.AVERAGE_MARKET_VALUE, "19102", Decimal(0))

    stored = cache.get(Question.AVERAGE_MARKET_VALUE)
    assert stored == AreaScalarMap(values={"19102": Decimal(0), "19103": Decimal(30000)})
    assert cache.get_area(Question.AVERAGE_MARKET_VALUE, "19102") == Decimal(0)
    assert cache.get_area(Question.AVERAGE_MARKET_VALUE, "19104") is None
    assert cache.get_area(Question.AVERAGE_LIVABLE_AREA, "19103") is None


def test_clear() -> None:
    cache = ResultCache()
    cache.put_area(Question.MARKET_VALUE_PER_CAPITA, "19103", Decimal(7))
    cache.clear()
    assert cache.get(Question.MARKET_VALUE_PER_CAPITA) is None
