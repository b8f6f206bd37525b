"""
src/data/store.py
─────────────────
In-memory holder for the dashboard's current dataset.

Provides:
  - begin_load()  : Start a load attempt and get its token
  - commit()      : Publish a dataset if the attempt is still the latest
  - fail()        : Record an error if the attempt is still the latest
  - close()       : Tear down; every outstanding attempt becomes stale
  - current / error / version / generation accessors

Relevance is decided by token comparison only: a newer begin_load() or
close() makes older attempts stale, and their results are dropped.
"""
from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from datetime import datetime

from src.analytics.series import ChartSeries
from src.data.models import AnalysisResult, SensorReading

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dataset:
    source: str
    readings: list[SensorReading]
    analysis: AnalysisResult
    chart: ChartSeries
    loaded_at: datetime

    @property
    def time_range(self) -> tuple[datetime, datetime] | None:
        if not self.readings:
            return None
        return self.readings[0].timestamp, self.readings[-1].timestamp

    def __len__(self) -> int:
        return len(self.readings)


@dataclass
class DataStore:
    _tokens: itertools.count = field(default_factory=lambda: itertools.count(1))
    _latest: int = 0
    _closed: bool = False
    current: Dataset | None = None
    error: str | None = None
    version: int = 0  # bumped on every committed dataset or recorded error
    generation: int = 0  # bumped on committed datasets only

    def begin_load(self) -> int:
        self._closed = False
        self._latest = next(self._tokens)
        return self._latest

    def is_current(self, token: int) -> bool:
        return not self._closed and token == self._latest

    def commit(self, token: int, dataset: Dataset) -> bool:
        if not self.is_current(token):
            logger.warning("Discarding stale load #%d (latest is #%d)", token, self._latest)
            return False
        self.current = dataset
        self.error = None
        self.version += 1
        self.generation += 1
        logger.info("Committed load #%d: %d readings from %s", token, len(dataset), dataset.source)
        return True

    def fail(self, token: int, message: str) -> bool:
        """Record a load error; the previously committed dataset is kept."""
        if not self.is_current(token):
            logger.warning("Ignoring error from stale load #%d: %s", token, message)
            return False
        self.error = message
        self.version += 1
        return True

    def close(self) -> None:
        self._closed = True


store = DataStore()
