"""Custom exception hierarchy for zipstats."""

from __future__ import annotations


class ZipStatsError(Exception):
    """Base exception for all zipstats errors."""


class ZipStatsConfigError(ZipStatsError):
    """Invalid or missing configuration (launch arguments, file paths)."""


class DatasetLoadError(ZipStatsError):
    """A dataset could not be read or parsed.

    Raised by the file loaders and propagated unchanged through the
    dataset store.  The store keeps the dataset unloaded, so the next
    call that needs it retries the read.
    """

    def __init__(
        self,
        message: str,
        *,
        dataset: str = "",
        path: str = "",
    ) -> None:
        self.dataset = dataset
        self.path = path
        super().__init__(message)


class InvalidQuestionError(ZipStatsError):
    """Question id outside the supported range."""

    def __init__(self, message: str, *, question: object = None) -> None:
        self.question = question
        super().__init__(message)


class MissingAreaCodeError(ZipStatsError):
    """An area-scoped question was asked without an area code."""

    def __init__(self, message: str, *, question: int = 0) -> None:
        self.question = question
        super().__init__(message)
