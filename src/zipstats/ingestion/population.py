"""Population file reader."""

from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path

from zipstats.audit import AuditLog
from zipstats.exceptions import DatasetLoadError
from zipstats.ingestion.normalize import safe_decimal
from zipstats.models.records import PopulationEntry

_logger = logging.getLogger(__name__)


def parse_population_line(line: str) -> PopulationEntry:
    """Parse ``"<area code> <count>"``."""
    parts = line.strip().split(" ")
    if len(parts) < 2:
        raise ValueError(f"expected '<area code> <count>', got {line.strip()!r}")
    count = safe_decimal(parts[1])
    if count is None:
        raise ValueError(f"missing population count in {line.strip()!r}")
    return PopulationEntry(area_code=parts[0], count=count)


def read_population(path: str | Path, *, audit: AuditLog | None = None) -> dict[str, Decimal]:
    """Read the population file into ``area code -> count``.

    Blank lines are skipped.  A repeated area code keeps the last count.
    """
    path = Path(path)
    if audit is not None:
        audit.log_file_read(str(path))

    result: dict[str, Decimal] = {}
    try:
        with path.open(encoding="utf-8") as fh:
            for line_no, line in enumerate(fh, start=1):
                if not line.strip():
                    continue
                try:
                    entry = parse_population_line(line)
                except ValueError as exc:
                    raise DatasetLoadError(
                        f"Couldn't parse population line {line_no}: {exc}",
                        dataset="population",
                        path=str(path),
                    ) from exc
                result[entry.area_code] = entry.count
    except (OSError, UnicodeDecodeError) as exc:
        raise DatasetLoadError(
            f"Couldn't read from population file: {exc}",
            dataset="population",
            path=str(path),
        ) from exc

    _logger.debug("Read population file %s areas=%d", path, len(result))
    return dict(sorted(result.items()))
