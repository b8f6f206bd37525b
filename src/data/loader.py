"""
src/data/loader.py
──────────────────
Load orchestration: fetch → parse → statistics → chart series.

`reload()` wraps one attempt in a DataStore token so that a slow, older load
can never overwrite the result of a newer one.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from config.analysis import DEFAULT_ANALYSIS, DEFAULT_INGESTION, AnalysisConfig, IngestionConfig
from config.settings import settings
from src.analytics.series import build_chart_series
from src.analytics.statistics import compute_statistics
from src.data.ingestion import IngestionError, parse_csv
from src.data.source import fetch_csv_text
from src.data.store import Dataset, DataStore

logger = logging.getLogger(__name__)


class LoadStatus(str, Enum):
    COMMITTED = "committed"
    STALE = "stale"
    ERROR = "error"


@dataclass(frozen=True)
class LoadOutcome:
    status: LoadStatus
    token: int
    message: str | None = None


def build_dataset(
    text: str,
    source: str = "",
    ingestion: IngestionConfig = DEFAULT_INGESTION,
    analysis: AnalysisConfig = DEFAULT_ANALYSIS,
) -> Dataset:
    """Turn raw CSV text into a complete Dataset (raises IngestionError)."""
    readings = parse_csv(text, ingestion)
    result = compute_statistics(readings, analysis)
    chart = build_chart_series(readings, result, analysis)
    return Dataset(
        source=source,
        readings=readings,
        analysis=result,
        chart=chart,
        loaded_at=datetime.now(tz=UTC),
    )


def load_dataset(
    source: str,
    ingestion: IngestionConfig = DEFAULT_INGESTION,
    analysis: AnalysisConfig = DEFAULT_ANALYSIS,
    timeout: float = settings.FETCH_TIMEOUT_S,
) -> Dataset:
    text = fetch_csv_text(source, timeout=timeout)
    return build_dataset(text, source, ingestion, analysis)


def reload(
    store: DataStore,
    source: str = settings.CSV_SOURCE,
    ingestion: IngestionConfig = DEFAULT_INGESTION,
    analysis: AnalysisConfig = DEFAULT_ANALYSIS,
) -> LoadOutcome:
    """
    Run one token-guarded load attempt against `store`.

    Ingestion failures are recorded on the store (if still relevant) and
    reported in the outcome; they never propagate.
    """
    token = store.begin_load()
    logger.info("Load #%d started for %s", token, source)
    try:
        dataset = load_dataset(source, ingestion, analysis)
    except IngestionError as exc:
        logger.warning("Load #%d failed: %s", token, exc.cause)
        if store.fail(token, exc.cause):
            return LoadOutcome(LoadStatus.ERROR, token, exc.cause)
        return LoadOutcome(LoadStatus.STALE, token, exc.cause)

    if store.commit(token, dataset):
        return LoadOutcome(LoadStatus.COMMITTED, token)
    return LoadOutcome(LoadStatus.STALE, token)
