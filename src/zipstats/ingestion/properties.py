"""Properties CSV reader.

The export has dozens of columns; only ``market_value``,
``total_livable_area`` and ``zip_code`` are read.  Header names are matched
case-insensitively.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
from pydantic import ValidationError

from zipstats.audit import AuditLog
from zipstats.exceptions import DatasetLoadError
from zipstats.ingestion.normalize import safe_decimal, truncate_area_code
from zipstats.models.records import PropertyRecord

_logger = logging.getLogger(__name__)

MARKET_VALUE_COLUMN = "market_value"
LIVABLE_AREA_COLUMN = "total_livable_area"
ZIP_CODE_COLUMN = "zip_code"

_REQUIRED_COLUMNS: tuple[str, ...] = (MARKET_VALUE_COLUMN, LIVABLE_AREA_COLUMN, ZIP_CODE_COLUMN)


def find_columns(header: list[str]) -> dict[str, str]:
    """Map each required column to its actual header name (first match wins)."""
    found: dict[str, str] = {}
    for name in header:
        key = str(name).strip().lower()
        if key in _REQUIRED_COLUMNS and key not in found:
            found[key] = name
    return found


def read_properties(path: str | Path, *, audit: AuditLog | None = None) -> list[PropertyRecord]:
    path = Path(path)
    if audit is not None:
        audit.log_file_read(str(path))

    wrong_fields = DatasetLoadError(
        f"Wrong fields in file {path.name}",
        dataset="properties",
        path=str(path),
    )
    try:
        df = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            usecols=lambda name: str(name).strip().lower() in _REQUIRED_COLUMNS,
            low_memory=False,
        )
    except pd.errors.EmptyDataError as exc:
        raise wrong_fields from exc
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as exc:
        raise DatasetLoadError(
            f"Couldn't read properties file: {exc}",
            dataset="properties",
            path=str(path),
        ) from exc

    columns = find_columns(list(df.columns))
    if len(columns) != len(_REQUIRED_COLUMNS):
        raise wrong_fields

    records: list[PropertyRecord] = []
    subset = df[[columns[MARKET_VALUE_COLUMN], columns[LIVABLE_AREA_COLUMN], columns[ZIP_CODE_COLUMN]]]
    for row_no, (market_value, livable_area, zip_code) in enumerate(
        subset.itertuples(index=False, name=None), start=2
    ):
        try:
            records.append(
                PropertyRecord(
                    market_value=safe_decimal(_cell(market_value)),
                    livable_area=safe_decimal(_cell(livable_area)),
                    area_code=truncate_area_code(_cell(zip_code)),
                )
            )
        except (ValueError, ValidationError) as exc:
            raise DatasetLoadError(
                f"Invalid properties row {row_no}: {exc}",
                dataset="properties",
                path=str(path),
            ) from exc

    _logger.debug("Read properties file %s records=%d", path, len(records))
    return records


def _cell(value: object) -> object:
    if isinstance(value, float) and pd.isna(value):
        return None
    return value
