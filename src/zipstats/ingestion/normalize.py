"""Normalization helpers.

Centralizes lenient field parsing for the dataset readers.  Blank cells are
absent values; malformed integers fall back to ``0`` and malformed
timestamps to ``None``, matching how the source files are known to be dirty.
"""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from zipstats._constants import AREA_CODE_LENGTH


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def safe_int(value: Any) -> int:
    text = safe_str(value)
    if text is None:
        return 0
    try:
        return int(text)
    except ValueError:
        return 0


def safe_decimal(value: Any) -> Decimal | None:
    """Parse a decimal cell; blank means absent.

    A non-blank cell that is not a number raises :class:`ValueError` so the
    reader can report the offending row instead of silently dropping data.
    """
    text = safe_str(value)
    if text is None:
        return None
    try:
        parsed = Decimal(text)
    except InvalidOperation as exc:
        raise ValueError(f"not a decimal number: {text!r}") from exc
    if not parsed.is_finite():
        raise ValueError(f"not a finite decimal number: {text!r}")
    return parsed


def safe_instant(value: Any) -> datetime | None:
    """Parse an ISO-8601 instant (``2013-04-03T15:15:00Z``) to an aware UTC datetime."""
    text = safe_str(value)
    if text is None:
        return None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def truncate_area_code(value: Any, length: int = AREA_CODE_LENGTH) -> str | None:
    """Cut ZIP+4 style codes (``19103-1234``) down to the 5-character area code."""
    text = safe_str(value)
    if text is None:
        return None
    return text[:length]
