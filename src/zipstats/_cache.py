"""In-memory cache of computed answers.

Answers are keyed by question.  Area-scoped questions store an
:class:`~zipstats.models.answers.AreaScalarMap` under their question key and
grow it one area at a time, giving a per-question outer level and a per-area
inner level.  Entries are never evicted.
"""

from __future__ import annotations

import threading
from decimal import Decimal

from zipstats.models.answers import Answer, AreaScalarMap
from zipstats.models.questions import Question


class ResultCache:
    """Thread-safe question -> answer map."""

    def __init__(self) -> None:
        self._answers: dict[Question, Answer] = {}
        self._lock = threading.Lock()

    def get(self, question: Question) -> Answer | None:
        with self._lock:
            return self._answers.get(question)

    def put(self, question: Question, answer: Answer) -> None:
        if answer is None:
            raise ValueError("cannot cache an absent answer")
        with self._lock:
            self._answers[question] = answer

    def get_area(self, question: Question, area_code: str) -> Decimal | None:
        """Return the cached value of *area_code* for a scoped question."""
        answer = self.get(question)
        if not isinstance(answer, AreaScalarMap):
            return None
        return answer.get(area_code)

    def put_area(self, question: Question, area_code: str, value: Decimal) -> AreaScalarMap:
        """Add one area to the question's map and store the updated map."""
        if value is None:
            raise ValueError("cannot cache an absent answer")
        with self._lock:
            existing = self._answers.get(question)
            if not isinstance(existing, AreaScalarMap):
                existing = AreaScalarMap()
            updated = existing.with_entry(area_code, value)
            self._answers[question] = updated
            return updated

    def clear(self) -> None:
        with self._lock:
            self._answers.clear()

    def __contains__(self, question: object) -> bool:
        with self._lock:
            return question in self._answers

    def __len__(self) -> int:
        with self._lock:
            return len(self._answers)
