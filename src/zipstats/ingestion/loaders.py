"""File-backed loader callables for :class:`~zipstats.state.store.DatasetStore`."""

from __future__ import annotations

import dataclasses
import functools

from zipstats.audit import AuditLog
from zipstats.config import ParkingFormat, StatsConfig
from zipstats.ingestion.parking import read_parking_csv, read_parking_json
from zipstats.ingestion.population import read_population
from zipstats.ingestion.properties import read_properties
from zipstats.state.store import ParkingLoader, PopulationLoader, PropertiesLoader


@dataclasses.dataclass(frozen=True)
class DatasetLoaders:
    load_population: PopulationLoader
    load_parking: ParkingLoader
    load_properties: PropertiesLoader


def file_loaders(config: StatsConfig, *, audit: AuditLog | None = None) -> DatasetLoaders:
    """Bind the readers to the files named in *config*."""
    parking_reader = read_parking_json if config.parking_format is ParkingFormat.JSON else read_parking_csv
    return DatasetLoaders(
        load_population=functools.partial(read_population, config.population_file, audit=audit),
        load_parking=functools.partial(parking_reader, config.parking_file, audit=audit),
        load_properties=functools.partial(read_properties, config.properties_file, audit=audit),
    )
