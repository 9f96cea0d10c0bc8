"""Runtime configuration for zipstats."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Sequence
from enum import StrEnum
from typing import Any

from zipstats.exceptions import ZipStatsConfigError


class ParkingFormat(StrEnum):
    CSV = "csv"
    JSON = "json"

    @classmethod
    def parse(cls, value: str | ParkingFormat) -> ParkingFormat:
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ZipStatsConfigError(
                f'Wrong file format. Expected "csv" or "json", but received {value}'
            ) from None


@dataclasses.dataclass(frozen=True)
class StatsConfig:
    """Dataset locations and front-end settings.

    Parameters
    ----------
    parking_format : ParkingFormat
        Format of the parking file (``csv`` or ``json``).
    parking_file : str
        Path to the parking violations file.
    properties_file : str
        Path to the properties CSV (with a header row).
    population_file : str
        Path to the population text file (``"<zip> <count>"`` per line).
    log_file : str
        Path to the append-only audit log.
    host : str
        Interface the HTTP front end binds to.
    port : int
        Port the HTTP front end listens on.
    """

    parking_format: ParkingFormat
    parking_file: str
    properties_file: str
    population_file: str
    log_file: str
    host: str = "127.0.0.1"
    port: int = 8080

    def __post_init__(self) -> None:
        object.__setattr__(self, "parking_format", ParkingFormat.parse(self.parking_format))

    @property
    def arguments(self) -> list[str]:
        """The five launch arguments, in command-line order."""
        return [
            str(self.parking_format),
            self.parking_file,
            self.properties_file,
            self.population_file,
            self.log_file,
        ]

    @classmethod
    def from_args(cls, args: Sequence[str], **overrides: Any) -> StatsConfig:
        """Build a configuration from ``format parking properties population log``."""
        if not args:
            raise ZipStatsConfigError(
                "No arguments provided. Expected: format parking-file properties-file population-file log-file"
            )
        if len(args) != 5:
            raise ZipStatsConfigError(f"Wrong number of args. Expected 5, received {len(args)}")
        fmt, parking_file, properties_file, population_file, log_file = args
        return cls(
            parking_format=ParkingFormat.parse(fmt),
            parking_file=parking_file,
            properties_file=properties_file,
            population_file=population_file,
            log_file=log_file,
            **overrides,
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> StatsConfig:
        """Create configuration from ``ZIPSTATS_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "ZIPSTATS_PARKING_FORMAT": "parking_format",
            "ZIPSTATS_PARKING_FILE": "parking_file",
            "ZIPSTATS_PROPERTIES_FILE": "properties_file",
            "ZIPSTATS_POPULATION_FILE": "population_file",
            "ZIPSTATS_LOG_FILE": "log_file",
            "ZIPSTATS_HOST": "host",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # port is numeric, handle separately
        port_env = env.get("ZIPSTATS_PORT")
        if port_env is not None and "port" not in overrides:
            try:
                config_kwargs["port"] = int(port_env)
            except ValueError:
                raise ZipStatsConfigError(f"ZIPSTATS_PORT must be an integer, got {port_env!r}") from None

        config_kwargs.update(overrides)

        missing = [
            f.name
            for f in dataclasses.fields(cls)
            if f.default is dataclasses.MISSING and f.name not in config_kwargs
        ]
        if missing:
            raise ZipStatsConfigError(f"Missing configuration: {', '.join(missing)}")

        return cls(**config_kwargs)
