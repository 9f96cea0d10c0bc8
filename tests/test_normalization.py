from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from zipstats._constants import divide_truncated, format_decimal
from zipstats.ingestion.normalize import (
    safe_decimal,
    safe_instant,
    safe_int,
    safe_str,
    truncate_area_code,
)


def test_safe_str_blank_is_none() -> None:
    assert safe_str("   ") is None
    assert safe_str(None) is None
    assert safe_str(" PA ") == "PA"


def test_safe_int_falls_back_to_zero() -> None:
    assert safe_int("36") == 36
    assert safe_int("") == 0
    assert safe_int("abc") == 0


def test_safe_decimal_blank_is_absent_not_zero() -> None:
    assert safe_decimal("") is None
    assert safe_decimal("25000.50") == Decimal("25000.50")


def test_safe_decimal_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        safe_decimal("twelve")
    with pytest.raises(ValueError):
        safe_decimal("NaN")


def test_safe_instant_parses_utc_suffix() -> None:
    assert safe_instant("2013-04-03T15:15:00Z") == datetime(2013, 4, 3, 15, 15, tzinfo=UTC)
    assert safe_instant("yesterday") is None
    assert safe_instant("") is None


def test_truncate_area_code_keeps_five_characters() -> None:
    assert truncate_area_code("191034321") == "19103"
    assert truncate_area_code("1910") == "1910"
    assert truncate_area_code(None) is None


def test_divide_truncated_never_rounds_up() -> None:
    assert divide_truncated(Decimal(300), Decimal(1000), 4) == Decimal("0.3000")
    assert format_decimal(divide_truncated(Decimal(300), Decimal(1000), 4)) == "0.3000"
    assert divide_truncated(Decimal(2), Decimal(3), 4) == Decimal("0.6666")
    assert divide_truncated(Decimal(99999), Decimal(100000), 0) == Decimal(0)


def test_divide_truncated_large_quotient_keeps_every_digit() -> None:
    dividend = Decimal("1" + "0" * 40)
    assert divide_truncated(dividend, Decimal(3), 0) == Decimal("3" * 40)


def test_format_decimal_uses_plain_notation() -> None:
    assert format_decimal(Decimal("1E+3")) == "1000"
    assert format_decimal(Decimal("14")) == "14"
