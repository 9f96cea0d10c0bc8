"""Aggregation and memoization engine.

:class:`StatsAggregator` answers the six questions from the datasets held by
a :class:`~zipstats.state.store.DatasetStore` and memoizes every answer in a
:class:`~zipstats._cache.ResultCache`.

Usage::

    aggregator = StatsAggregator.from_config(config)
    answer = aggregator.compute(3, "19103")
    print(render_answer(answer))

Concurrent callers asking the same question (and, for area-scoped questions,
the same area) are serialized: the second caller waits for the first and
reuses its cached answer.  Unrelated questions compute in parallel.
"""

from __future__ import annotations

import contextlib
import logging
import threading
from collections import Counter, defaultdict
from collections.abc import Callable, Hashable, Iterator
from decimal import Decimal

from zipstats._cache import ResultCache
from zipstats._constants import (
    FINE_RATE_SCALE,
    FINES_PER_CAPITA_SCALE,
    MARKET_VALUE_PER_CAPITA_SCALE,
    PROPERTY_AVERAGE_SCALE,
    REFERENCE_JURISDICTION,
    divide_truncated,
)
from zipstats.audit import AuditLog
from zipstats.config import StatsConfig
from zipstats.exceptions import MissingAreaCodeError
from zipstats.ingestion.loaders import file_loaders
from zipstats.models.answers import Answer, AreaScalarMap, AreaStatisticsMap, ScalarAnswer, Statistics
from zipstats.models.questions import MARKET_VALUE, PropertyField, Question, property_field_for
from zipstats.state.store import DatasetStore

_logger = logging.getLogger(__name__)

_ZERO = Decimal(0)


class _KeyedLocks:
    """One lock per memoization key, created on demand."""

    def __init__(self) -> None:
        self._locks: dict[Hashable, threading.Lock] = {}
        self._guard = threading.Lock()

    @contextlib.contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
        with lock:
            yield


class StatsAggregator:
    """Computes and memoizes the answers to the six questions."""

    def __init__(self, store: DatasetStore, cache: ResultCache | None = None) -> None:
        self._store = store
        self._cache = cache if cache is not None else ResultCache()
        self._locks = _KeyedLocks()

    @classmethod
    def from_config(cls, config: StatsConfig, *, audit: AuditLog | None = None) -> StatsAggregator:
        """Build an aggregator reading the dataset files named in *config*."""
        loaders = file_loaders(config, audit=audit)
        store = DatasetStore(
            load_population=loaders.load_population,
            load_parking=loaders.load_parking,
            load_properties=loaders.load_properties,
        )
        return cls(store)

    @property
    def store(self) -> DatasetStore:
        return self._store

    @property
    def cache(self) -> ResultCache:
        return self._cache

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def compute(self, question: int | str | Question, area_code: str | None = None) -> Answer:
        """Answer *question*, computing it only if not already cached.

        Area-scoped questions (3, 4, 5) return the value for *area_code* as a
        :class:`ScalarAnswer`.

        Raises
        ------
        InvalidQuestionError
            *question* is not one of 1-6.  No dataset is touched.
        MissingAreaCodeError
            An area-scoped question was asked without an area code.
        DatasetLoadError
            A dataset needed for the answer could not be read.
        """
        q = Question.parse(question)
        if q.is_area_scoped:
            code = (area_code or "").strip()
            if not code:
                raise MissingAreaCodeError(
                    f"You should enter ZIP-code for question {int(q)}",
                    question=int(q),
                )
            if q is Question.MARKET_VALUE_PER_CAPITA:
                return self.market_value_per_capita(code)
            return self.average_property_field(code, property_field_for(q))
        if q is Question.TOTAL_POPULATION:
            return self.total_population()
        if q is Question.FINES_PER_CAPITA:
            return self.fines_per_capita()
        return self.composite_report()

    # ------------------------------------------------------------------
    # Questions
    # ------------------------------------------------------------------

    def total_population(self) -> ScalarAnswer:
        """Question 1: sum of all population counts (``0`` when empty)."""

        def _compute() -> ScalarAnswer:
            population = self._store.ensure_population_loaded()
            return ScalarAnswer(value=sum(population.values(), _ZERO))

        answer = self._memoized(Question.TOTAL_POPULATION, _compute)
        assert isinstance(answer, ScalarAnswer)  # noqa: S101
        return answer

    def fines_per_capita(self) -> AreaScalarMap:
        """Question 2: reference-jurisdiction fines divided by population.

        Areas with zero population, no matching violation or a zero total are
        left out of the map.
        """

        def _compute() -> AreaScalarMap:
            population = self._store.ensure_population_loaded()
            parking = self._store.ensure_parking_loaded()

            totals: defaultdict[str, int] = defaultdict(int)
            for record in parking:
                if record.area_code is not None and record.jurisdiction == REFERENCE_JURISDICTION:
                    totals[record.area_code] += record.amount

            result: dict[str, Decimal] = {}
            for area_code, count in population.items():
                if count == 0:
                    continue
                total = totals.get(area_code, 0)
                if total == 0:
                    continue
                result[area_code] = divide_truncated(Decimal(total), count, FINES_PER_CAPITA_SCALE)
            return AreaScalarMap(values=result)

        answer = self._memoized(Question.FINES_PER_CAPITA, _compute)
        assert isinstance(answer, AreaScalarMap)  # noqa: S101
        return answer

    def average_property_field(self, area_code: str, field: PropertyField) -> ScalarAnswer:
        """Questions 3 and 4: mean of *field* over the area's properties.

        Records missing the field are ignored; an area without any value
        averages to ``0``.
        """

        def _compute() -> Decimal:
            properties = self._store.ensure_properties_loaded()
            values = [
                value
                for record in properties
                if record.area_code == area_code and (value := field.extract(record)) is not None
            ]
            if not values:
                return _ZERO
            return divide_truncated(sum(values, _ZERO), Decimal(len(values)), PROPERTY_AVERAGE_SCALE)

        return ScalarAnswer(value=self._memoized_area(field.question, area_code, _compute))

    def market_value_per_capita(self, area_code: str) -> ScalarAnswer:
        """Question 5: total market value of the area divided by its population.

        Unknown or zero-population areas answer ``0`` without reading the
        properties dataset.
        """

        def _compute() -> Decimal:
            population = self._store.ensure_population_loaded()
            count = population.get(area_code)
            if count is None or count == 0:
                return _ZERO
            properties = self._store.ensure_properties_loaded()
            total = sum(
                (
                    record.market_value
                    for record in properties
                    if record.area_code == area_code and record.market_value is not None
                ),
                _ZERO,
            )
            return divide_truncated(total, count, MARKET_VALUE_PER_CAPITA_SCALE)

        return ScalarAnswer(value=self._memoized_area(Question.MARKET_VALUE_PER_CAPITA, area_code, _compute))

    def composite_report(self) -> AreaStatisticsMap:
        """Question 6: average market value and violation rate of every area.

        The violation rate counts violations of any jurisdiction whose area
        code matches case-insensitively.  Average market values come from
        (and fill) the question 3 cache.
        """

        def _compute() -> AreaStatisticsMap:
            population = self._store.ensure_population_loaded()
            parking = self._store.ensure_parking_loaded()
            self._store.ensure_properties_loaded()

            violations = Counter(
                record.area_code.casefold() for record in parking if record.area_code is not None
            )

            result: dict[str, Statistics] = {}
            for area_code, count in population.items():
                matches = violations.get(area_code.casefold(), 0)
                fine_rate = _ZERO
                if matches and count != 0:
                    fine_rate = divide_truncated(Decimal(matches), count, FINE_RATE_SCALE)
                avg_market_value = self.average_property_field(area_code, MARKET_VALUE).value
                result[area_code] = Statistics(avg_market_value=avg_market_value, avg_fine_rate=fine_rate)
            return AreaStatisticsMap(values=result)

        answer = self._memoized(Question.COMPOSITE_REPORT, _compute)
        assert isinstance(answer, AreaStatisticsMap)  # noqa: S101
        return answer

    # ------------------------------------------------------------------
    # Memoization
    # ------------------------------------------------------------------

    def _memoized(self, question: Question, compute: Callable[[], Answer]) -> Answer:
        cached = self._cache.get(question)
        if cached is not None:
            _logger.debug("Cache hit question=%d", question)
            return cached

        with self._locks.hold(question):
            cached = self._cache.get(question)
            if cached is not None:
                _logger.debug("Cache hit after wait question=%d", question)
                return cached
            _logger.debug("Cache miss question=%d", question)
            answer = compute()
            self._cache.put(question, answer)
            return answer

    def _memoized_area(self, question: Question, area_code: str, compute: Callable[[], Decimal]) -> Decimal:
        cached = self._cache.get_area(question, area_code)
        if cached is not None:
            _logger.debug("Cache hit question=%d area=%s", question, area_code)
            return cached

        with self._locks.hold((question, area_code)):
            cached = self._cache.get_area(question, area_code)
            if cached is not None:
                _logger.debug("Cache hit after wait question=%d area=%s", question, area_code)
                return cached
            _logger.debug("Cache miss question=%d area=%s", question, area_code)
            value = compute()
            self._cache.put_area(question, area_code, value)
            return value
