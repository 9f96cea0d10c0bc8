"""Parking violation readers (headerless CSV and JSON array)."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pandas as pd
from pydantic import ValidationError

from zipstats.audit import AuditLog
from zipstats.exceptions import DatasetLoadError
from zipstats.ingestion.normalize import safe_instant, safe_int, safe_str
from zipstats.models.records import ParkingRecord

_logger = logging.getLogger(__name__)

#: Column order of the CSV export; also the key order of the JSON export.
PARKING_JSON_KEYS: tuple[str, ...] = (
    "date",
    "fine",
    "violation",
    "plate_id",
    "state",
    "ticket_number",
    "zip_code",
)


def parse_parking_row(row: Sequence[Any]) -> ParkingRecord:
    """Build a record from the seven raw cells of one violation."""
    if row is None or len(row) != len(PARKING_JSON_KEYS):
        raise ValueError(f"Couldn't create new parking from line {list(row) if row is not None else None}")
    cells = [None if _is_missing(cell) else cell for cell in row]
    return ParkingRecord(
        timestamp=safe_instant(cells[0]),
        amount=safe_int(cells[1]),
        reason=safe_str(cells[2]) or "",
        vehicle_id=safe_int(cells[3]),
        jurisdiction=safe_str(cells[4]) or "",
        violation_id=safe_int(cells[5]),
        area_code=safe_str(cells[6]),
    )


def _is_missing(cell: Any) -> bool:
    return cell is None or (isinstance(cell, float) and pd.isna(cell))


def read_parking_csv(path: str | Path, *, audit: AuditLog | None = None) -> list[ParkingRecord]:
    path = Path(path)
    if audit is not None:
        audit.log_file_read(str(path))

    try:
        df = pd.read_csv(path, header=None, dtype=str, keep_default_na=False, skip_blank_lines=True)
    except pd.errors.EmptyDataError:
        _logger.debug("Parking file %s is empty", path)
        return []
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as exc:
        raise DatasetLoadError(
            f"Couldn't finish work with file: {exc}",
            dataset="parking",
            path=str(path),
        ) from exc

    if len(df.columns) != len(PARKING_JSON_KEYS):
        raise DatasetLoadError(
            f"Expected {len(PARKING_JSON_KEYS)} columns in parking file, found {len(df.columns)}",
            dataset="parking",
            path=str(path),
        )

    # Short rows are padded with NaN; blank cells read as "" with keep_default_na=False.
    short_rows = df.index[df.isna().any(axis=1)]
    if len(short_rows):
        raise DatasetLoadError(
            f"Invalid parking row {short_rows[0] + 1}: expected {len(PARKING_JSON_KEYS)} cells",
            dataset="parking",
            path=str(path),
        )

    records = _parse_rows(df.itertuples(index=False, name=None), path)
    _logger.debug("Read parking CSV %s records=%d", path, len(records))
    return records


def read_parking_json(path: str | Path, *, audit: AuditLog | None = None) -> list[ParkingRecord]:
    path = Path(path)
    if audit is not None:
        audit.log_file_read(str(path))

    try:
        with path.open(encoding="utf-8") as fh:
            payload = json.load(fh)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DatasetLoadError(f"Couldn't read file: {exc}", dataset="parking", path=str(path)) from exc

    if not isinstance(payload, list):
        raise DatasetLoadError(
            f"Expected a JSON array of violations, got {type(payload).__name__}",
            dataset="parking",
            path=str(path),
        )

    rows: list[list[Any]] = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise DatasetLoadError(
                f"Violation #{index} is not an object",
                dataset="parking",
                path=str(path),
            )
        missing = [key for key in PARKING_JSON_KEYS if key not in item]
        if missing:
            raise DatasetLoadError(
                f"Violation #{index} is missing keys: {', '.join(missing)}",
                dataset="parking",
                path=str(path),
            )
        rows.append([item[key] for key in PARKING_JSON_KEYS])

    records = _parse_rows(rows, path)
    _logger.debug("Read parking JSON %s records=%d", path, len(records))
    return records


def _parse_rows(rows: Any, path: Path) -> list[ParkingRecord]:
    records: list[ParkingRecord] = []
    for row_no, row in enumerate(rows, start=1):
        try:
            records.append(parse_parking_row(row))
        except (ValueError, ValidationError) as exc:
            raise DatasetLoadError(
                f"Invalid parking row {row_no}: {exc}",
                dataset="parking",
                path=str(path),
            ) from exc
    return records
