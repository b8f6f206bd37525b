"""
src/data/ingestion.py
─────────────────────
CSV ingestion and normalization for pump pressure exports.

Pipeline:
  1. Parse the whole document with pandas (all cells as text, delimiter sniffed)
  2. Pick the first `sensor_*` column (header order) as the pressure source
  3. Coerce timestamp / pressure, default missing status to NORMAL
  4. Drop invalid rows silently, sort by timestamp (stable)

Whole-document problems raise IngestionError; single bad rows never do.
"""
from __future__ import annotations

import csv
import io
import logging
import warnings
from collections.abc import Iterable

import numpy as np
import pandas as pd

from config.analysis import DEFAULT_INGESTION, IngestionConfig
from src.data.models import SensorReading

logger = logging.getLogger(__name__)

NO_VALID_POINTS = "no valid data points"


class IngestionError(Exception):
    """The data source could not be turned into a usable series."""

    def __init__(self, cause: str) -> None:
        super().__init__(cause)
        self.cause = cause


def find_sensor_column(columns: Iterable[str], prefix: str = DEFAULT_INGESTION.sensor_prefix) -> str | None:
    """First column (in header order) whose name starts with `prefix`."""
    for column in columns:
        if isinstance(column, str) and column.startswith(prefix):
            return column
    return None


def _parse_timestamps(values: pd.Series) -> pd.Series:
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        try:
            parsed = pd.to_datetime(values, errors="coerce", format="mixed")
        except (ValueError, TypeError):
            parsed = None
    if parsed is None or not pd.api.types.is_datetime64_any_dtype(parsed):
        # Mixed tz-aware / naive values: compare everything in UTC
        parsed = pd.to_datetime(values, errors="coerce", format="mixed", utc=True)
    return parsed


def read_table(text: str) -> pd.DataFrame:
    """
    Parse delimited text into an all-string DataFrame.

    The delimiter (`,` `;` tab ...) is sniffed from the header line.
    """
    if text is None or not text.strip():
        raise IngestionError("empty document")
    try:
        return pd.read_csv(
            io.StringIO(text),
            sep=None,
            engine="python",
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except (csv.Error, pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError, ValueError) as exc:
        raise IngestionError(f"unreadable CSV: {exc}") from exc


def normalize_frame(raw: pd.DataFrame, config: IngestionConfig = DEFAULT_INGESTION) -> pd.DataFrame:
    """
    Reduce a raw table to valid (timestamp, pressure, status) rows.

    Returns an empty frame when the table has no sensor or timestamp column.
    """
    columns = ["timestamp", "pressure", "status"]
    sensor_col = find_sensor_column(raw.columns, config.sensor_prefix)
    if sensor_col is None or config.timestamp_column not in raw.columns:
        logger.debug("No %r column or no %r column in header %s",
                     config.sensor_prefix, config.timestamp_column, list(raw.columns))
        return pd.DataFrame(columns=columns)

    timestamps = _parse_timestamps(raw[config.timestamp_column].str.strip())
    pressure = pd.to_numeric(raw[sensor_col].str.strip(), errors="coerce")

    if config.status_column in raw.columns:
        status = raw[config.status_column].fillna("").replace("", config.default_status)
    else:
        status = pd.Series(config.default_status, index=raw.index)

    frame = pd.DataFrame({"timestamp": timestamps, "pressure": pressure, "status": status})
    valid = frame["timestamp"].notna() & np.isfinite(frame["pressure"].to_numpy(dtype=float, na_value=np.nan))
    dropped = int((~valid).sum())
    if dropped:
        logger.debug("Dropped %d of %d rows with invalid timestamp or %s value",
                     dropped, len(frame), sensor_col)

    frame = frame[valid].sort_values("timestamp", kind="stable").reset_index(drop=True)
    return frame


def parse_csv(text: str, config: IngestionConfig = DEFAULT_INGESTION) -> list[SensorReading]:
    """
    Parse a CSV document into SensorReadings sorted by timestamp.

    Raises:
        IngestionError: empty / unreadable text, or no row survived validation.
    """
    frame = normalize_frame(read_table(text), config)
    if frame.empty:
        raise IngestionError(NO_VALID_POINTS)

    readings = [
        SensorReading(timestamp=ts.to_pydatetime(), pressure=float(p), status=str(s))
        for ts, p, s in zip(frame["timestamp"], frame["pressure"], frame["status"], strict=True)
    ]
    logger.debug("Parsed %d readings", len(readings))
    return readings


def to_dataframe(readings: list[SensorReading]) -> pd.DataFrame:
    """Convert a list of SensorReadings to a pandas DataFrame."""
    if not readings:
        return pd.DataFrame(columns=["timestamp", "pressure", "status"])
    return pd.DataFrame([r.model_dump() for r in readings])
