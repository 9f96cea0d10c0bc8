"""Lazily populated in-memory dataset store.

Each dataset is read at most once per process through an injected loader.
A loader that raises leaves the dataset without data, so the next access
retries; successfully loaded data is never reloaded, even when empty.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Any

from zipstats.models.records import ParkingRecord, PropertyRecord
from zipstats.state.status import Dataset, LoadState, needs_load

_logger = logging.getLogger(__name__)

PopulationLoader = Callable[[], Mapping[str, Decimal]]
ParkingLoader = Callable[[], Sequence[ParkingRecord]]
PropertiesLoader = Callable[[], Sequence[PropertyRecord]]


def _freeze_population(raw: Mapping[str, Decimal]) -> Mapping[str, Decimal]:
    # Iteration order is ascending by area code regardless of the loader's order.
    return MappingProxyType(dict(sorted(raw.items())))


def _freeze_records(raw: Sequence[Any]) -> tuple[Any, ...]:
    return tuple(raw)


@dataclass
class _DatasetSlot:
    loader: Callable[[], Any]
    freeze: Callable[[Any], Any]
    state: LoadState = LoadState.NOT_LOADED
    data: Any = None
    load_count: int = 0
    lock: threading.Lock = field(default_factory=threading.Lock)


class DatasetStore:
    """Holds the population, parking and properties datasets.

    Loads are serialized per dataset: concurrent first accesses invoke the
    loader once and share its result.
    """

    def __init__(
        self,
        *,
        load_population: PopulationLoader,
        load_parking: ParkingLoader,
        load_properties: PropertiesLoader,
    ) -> None:
        self._slots: dict[Dataset, _DatasetSlot] = {
            Dataset.POPULATION: _DatasetSlot(load_population, _freeze_population),
            Dataset.PARKING: _DatasetSlot(load_parking, _freeze_records),
            Dataset.PROPERTIES: _DatasetSlot(load_properties, _freeze_records),
        }

    def ensure_population_loaded(self) -> Mapping[str, Decimal]:
        """Return area code -> population, loading it on first use."""
        population: Mapping[str, Decimal] = self._ensure(Dataset.POPULATION)
        return population

    def ensure_parking_loaded(self) -> tuple[ParkingRecord, ...]:
        parking: tuple[ParkingRecord, ...] = self._ensure(Dataset.PARKING)
        return parking

    def ensure_properties_loaded(self) -> tuple[PropertyRecord, ...]:
        properties: tuple[PropertyRecord, ...] = self._ensure(Dataset.PROPERTIES)
        return properties

    def status(self, dataset: Dataset) -> LoadState:
        return self._slots[dataset].state

    def load_count(self, dataset: Dataset) -> int:
        """Number of times the loader for *dataset* has been invoked."""
        return self._slots[dataset].load_count

    def _ensure(self, dataset: Dataset) -> Any:
        slot = self._slots[dataset]
        if not needs_load(slot.state):
            return slot.data

        with slot.lock:
            if not needs_load(slot.state):
                return slot.data

            slot.load_count += 1
            _logger.debug("Loading %s dataset attempt=%d", dataset, slot.load_count)
            try:
                data = slot.freeze(slot.loader())
            except Exception:
                slot.state = LoadState.LOAD_FAILED
                slot.data = None
                _logger.debug("Loading %s dataset failed", dataset, exc_info=True)
                raise

            slot.data = data
            slot.state = LoadState.LOADED
            _logger.debug("Loaded %s dataset entries=%d", dataset, len(data))
            return data
