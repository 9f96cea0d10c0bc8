"""Launch argument validation."""

from __future__ import annotations

import os
from pathlib import Path

from zipstats.config import ParkingFormat, StatsConfig
from zipstats.exceptions import ZipStatsConfigError

# Parking file extensions that contradict the declared format.
_CONFLICTING_EXTENSIONS: dict[ParkingFormat, frozenset[str]] = {
    ParkingFormat.JSON: frozenset({"txt", "csv"}),
    ParkingFormat.CSV: frozenset({"json"}),
}


def validate_readable(file_name: str) -> None:
    path = Path(file_name)
    if not path.is_file() or not os.access(path, os.R_OK):
        raise ZipStatsConfigError(f"Cannot open file {path}")


def ensure_log_file(file_name: str) -> None:
    """Create the audit log file if it does not exist yet."""
    path = Path(file_name)
    if path.exists():
        return
    try:
        path.touch()
    except OSError as exc:
        raise ZipStatsConfigError(f"Couldn't create log file {file_name}") from exc


def validate_config(config: StatsConfig) -> None:
    """Check that the configured files can be used.

    Raises :class:`ZipStatsConfigError` with a user-facing message on the
    first problem found.
    """
    extension = Path(config.parking_file).suffix.lstrip(".").lower()
    if extension in _CONFLICTING_EXTENSIONS[config.parking_format]:
        raise ZipStatsConfigError(
            f"Wrong file extension. Expected {config.parking_format} but received {extension}"
        )
    validate_readable(config.parking_file)
    validate_readable(config.properties_file)
    validate_readable(config.population_file)
    ensure_log_file(config.log_file)
