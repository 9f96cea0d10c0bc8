"""Dataset identifiers and load status."""

from __future__ import annotations

from enum import StrEnum


class Dataset(StrEnum):
    POPULATION = "population"
    PARKING = "parking"
    PROPERTIES = "properties"


class LoadState(StrEnum):
    """Lifecycle of a dataset inside :class:`~zipstats.state.store.DatasetStore`.

    ``LOADED`` is terminal.  ``LOAD_FAILED`` behaves like ``NOT_LOADED`` for
    the next access (the load is retried) but records that an attempt was made.
    """

    NOT_LOADED = "not_loaded"
    LOADED = "loaded"
    LOAD_FAILED = "load_failed"


def needs_load(state: LoadState) -> bool:
    return state is not LoadState.LOADED
