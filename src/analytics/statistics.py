"""
src/analytics/statistics.py
───────────────────────────
Statistics engine for a loaded pressure series.

Computes, in one call and without side effects:
  - global mean / population std / min / max
  - trailing rolling mean and std over [max(0, i - w), i], w = max(20, N // 50)
  - global Z-score anomaly indices and BROKEN status indices
  - the display Metrics summary (2-decimal rounding, ties away from zero)
"""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

import numpy as np
import pandas as pd

from config.analysis import DEFAULT_ANALYSIS, AnalysisConfig
from src.analytics.anomaly import detect_anomalies, mask_to_indices
from src.data.models import AnalysisResult, Metrics, RollingPoint, SensorReading, SeriesStatistics

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")


def round_half_up(value: float) -> float:
    """Round to 2 decimals with exact ties going away from zero (0.125 -> 0.13)."""
    if not np.isfinite(value):
        return float(value)
    return float(Decimal(float(value)).quantize(_CENTS, rounding=ROUND_HALF_UP))


def _round_array(values: np.ndarray) -> np.ndarray:
    return np.array([round_half_up(v) for v in values], dtype=float)


def summarize(values: np.ndarray) -> SeriesStatistics:
    """Global statistics; population std (divide by N)."""
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        return SeriesStatistics()

    lo = float(values.min())
    hi = float(values.max())
    if lo == hi:
        # Constant series: exact mean, no floating-point residue in σ
        return SeriesStatistics(mean=lo, max=hi, min=lo, std_dev=0.0)

    mean = float(np.clip(values.mean(), lo, hi))
    std_dev = float(values.std(ddof=0))
    return SeriesStatistics(mean=mean, max=hi, min=lo, std_dev=std_dev)


def rolling_statistics(values: np.ndarray, window_size: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Trailing rolling mean / population std, each rounded to 2 decimals.

    The window at index i spans [max(0, i - window_size), i]: it grows from a
    single point until it holds window_size + 1 points, then slides.
    """
    series = pd.Series(np.asarray(values, dtype=float))
    roll = series.rolling(window=window_size + 1, min_periods=1)
    mean = _round_array(roll.mean().to_numpy())
    std = _round_array(roll.std(ddof=0).fillna(0.0).clip(lower=0.0).to_numpy())
    return mean, std


def compute_metrics(
    stats: SeriesStatistics,
    n_points: int,
    anomaly_count: int,
    broken_count: int,
) -> Metrics:
    if n_points == 0:
        return Metrics()
    return Metrics(
        average_pressure=round_half_up(stats.mean),
        max_pressure=round_half_up(stats.max),
        min_pressure=round_half_up(stats.min),
        anomaly_count=anomaly_count,
        broken_state_duration=broken_count,
        anomaly_frequency=round_half_up(anomaly_count / n_points * 100.0),
    )


def compute_statistics(
    series: list[SensorReading],
    config: AnalysisConfig = DEFAULT_ANALYSIS,
) -> AnalysisResult:
    """
    Run the full statistics pass over an ordered series.

    Empty input returns zero Metrics and empty collections; it never raises.
    """
    if not series:
        return AnalysisResult()

    values = np.fromiter((r.pressure for r in series), dtype=float, count=len(series))
    stats = summarize(values)

    window_size = config.window_size(len(series))
    roll_mean, roll_std = rolling_statistics(values, window_size)
    rolling_mean = [
        RollingPoint(timestamp=r.timestamp, value=float(v)) for r, v in zip(series, roll_mean, strict=True)
    ]
    rolling_std = [
        RollingPoint(timestamp=r.timestamp, value=float(v)) for r, v in zip(series, roll_std, strict=True)
    ]

    _, mask = detect_anomalies(values, stats.mean, stats.std_dev, config.zscore_threshold)
    anomalies = mask_to_indices(mask)
    broken = [idx for idx, r in enumerate(series) if r.status == config.broken_status]

    logger.debug(
        "Statistics over %d points: window=%d anomalies=%d broken=%d",
        len(series), window_size, len(anomalies), len(broken),
    )

    return AnalysisResult(
        statistics=stats,
        rolling_mean=rolling_mean,
        rolling_std=rolling_std,
        anomalies=anomalies,
        broken=broken,
        metrics=compute_metrics(stats, len(series), len(anomalies), len(broken)),
        window_size=window_size,
    )
