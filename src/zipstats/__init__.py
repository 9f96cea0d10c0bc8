"""zipstats - Memoized population, parking fine and property statistics by ZIP code."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("zipstats")
except PackageNotFoundError:
    __version__ = "0+local"

from zipstats._cache import ResultCache
from zipstats.aggregator import StatsAggregator
from zipstats.audit import AuditLog
from zipstats.config import ParkingFormat, StatsConfig
from zipstats.exceptions import (
    DatasetLoadError,
    InvalidQuestionError,
    MissingAreaCodeError,
    ZipStatsConfigError,
    ZipStatsError,
)
from zipstats.models import (
    Answer,
    AreaScalarMap,
    AreaStatisticsMap,
    ParkingRecord,
    PopulationEntry,
    PropertyRecord,
    Question,
    ScalarAnswer,
    Statistics,
    render_answer,
)
from zipstats.state.status import Dataset, LoadState
from zipstats.state.store import DatasetStore

__all__ = [
    "__version__",
    "Answer",
    "AreaScalarMap",
    "AreaStatisticsMap",
    "AuditLog",
    "Dataset",
    "DatasetLoadError",
    "DatasetStore",
    "InvalidQuestionError",
    "LoadState",
    "MissingAreaCodeError",
    "ParkingFormat",
    "ParkingRecord",
    "PopulationEntry",
    "PropertyRecord",
    "Question",
    "ResultCache",
    "ScalarAnswer",
    "StatsAggregator",
    "StatsConfig",
    "Statistics",
    "ZipStatsConfigError",
    "ZipStatsError",
    "render_answer",
]
