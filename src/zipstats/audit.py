"""Append-only audit log of user actions and dataset reads.

Each line is ``"<epoch millis> <text>"``.  Failing to write an audit line
never interrupts the action being audited; the failure is logged instead.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Sequence
from pathlib import Path

_logger = logging.getLogger(__name__)


def _now_ms() -> int:
    """Current epoch timestamp in milliseconds."""
    return int(time.time() * 1000)


class AuditLog:
    def __init__(self, path: str | Path, *, clock: Callable[[], int] = _now_ms) -> None:
        self._path = Path(path)
        self._clock = clock
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def log_arguments(self, args: Sequence[str]) -> None:
        """Record the launch arguments."""
        self._append(" ".join(args))

    def log_choice(self, choice: str) -> None:
        """Record a menu choice, question number or entered area code."""
        self._append(choice)

    def log_file_read(self, file_name: str) -> None:
        """Record that a dataset file is being read."""
        self._append(file_name)

    def _append(self, text: str) -> None:
        line = f"{self._clock()} {text}\n"
        with self._lock:
            try:
                with self._path.open("a", encoding="utf-8") as fh:
                    fh.write(line)
            except OSError:
                _logger.warning("Failed to write audit entry to %s", self._path, exc_info=True)
