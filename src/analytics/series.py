"""
src/analytics/series.py
───────────────────────
Derived-series builder: turns (readings, AnalysisResult) into chart-ready,
index-aligned series.

Absent points (non-anomalous / non-broken positions) are None so that plotly
draws a gap rather than a zero.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, tzinfo

import numpy as np
import pandas as pd

from config.analysis import DEFAULT_ANALYSIS, AnalysisConfig
from src.analytics.anomaly import AnomalyRegion, find_anomaly_regions, indices_to_mask
from src.analytics.statistics import round_half_up
from src.analytics.thresholds import sigma_bands
from src.data.models import AnalysisResult, SensorReading


@dataclass(frozen=True)
class DayTick:
    index: int          # position within the series the tick was computed over
    day: date
    label: str          # M/D/YY
    timestamp: datetime


@dataclass(frozen=True)
class DistributionBucket:
    range: str
    count: int
    percentage: float


def _local_day(ts: datetime, tz: tzinfo | None) -> date:
    # Aware timestamps are shown in the viewer's zone; naive ones already are
    if ts.tzinfo is not None:
        ts = ts.astimezone(tz)
    return ts.date()


def day_label(day: date) -> str:
    return f"{day.month}/{day.day}/{day:%y}"


def day_ticks(timestamps: list[datetime], tz: tzinfo | None = None) -> list[DayTick]:
    """One tick per calendar day, placed on the first point seen for that day."""
    seen: dict[date, DayTick] = {}
    for idx, ts in enumerate(timestamps):
        day = _local_day(ts, tz)
        if day not in seen:
            seen[day] = DayTick(index=idx, day=day, label=day_label(day), timestamp=ts)
    return sorted(seen.values(), key=lambda t: t.day)


@dataclass(frozen=True)
class ChartSeries:
    timestamps: list[datetime]
    pressure: list[float]
    rolling_mean: list[float | None]
    rolling_std: list[float | None]
    upper_band: list[float | None]
    lower_band: list[float | None]
    anomaly_values: list[float | None]
    broken_values: list[float | None]
    anomaly_flags: list[bool]
    broken_flags: list[bool]
    offset: int = 0  # index of timestamps[0] within the full series
    regions: list[AnomalyRegion] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "regions", find_anomaly_regions(self.anomaly_flags))

    def __len__(self) -> int:
        return len(self.timestamps)

    def ticks(self, tz: tzinfo | None = None) -> list[DayTick]:
        return day_ticks(self.timestamps, tz)

    def window(self, start: int, end: int) -> ChartSeries:
        """
        Visible sub-series for the inclusive index range [start, end].

        Regions and ticks of the result are relative to the window.
        """
        lo = max(0, start)
        hi = min(len(self) - 1, end) + 1
        return replace(
            self,
            timestamps=self.timestamps[lo:hi],
            pressure=self.pressure[lo:hi],
            rolling_mean=self.rolling_mean[lo:hi],
            rolling_std=self.rolling_std[lo:hi],
            upper_band=self.upper_band[lo:hi],
            lower_band=self.lower_band[lo:hi],
            anomaly_values=self.anomaly_values[lo:hi],
            broken_values=self.broken_values[lo:hi],
            anomaly_flags=self.anomaly_flags[lo:hi],
            broken_flags=self.broken_flags[lo:hi],
            offset=self.offset + lo,
        )

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "timestamp": self.timestamps,
                "pressure": self.pressure,
                "rolling_mean": self.rolling_mean,
                "upper_band": self.upper_band,
                "lower_band": self.lower_band,
                "anomaly": self.anomaly_values,
                "broken": self.broken_values,
            }
        )


def _highlight(values: list[float], flags: list[bool]) -> list[float | None]:
    return [v if flag else None for v, flag in zip(values, flags, strict=True)]


def build_chart_series(
    series: list[SensorReading],
    analysis: AnalysisResult,
    config: AnalysisConfig = DEFAULT_ANALYSIS,
) -> ChartSeries:
    """
    Build every chart series from the raw readings and their statistics.

    Raises:
        ValueError: the rolling series are not aligned with `series`.
    """
    n = len(series)
    if analysis.rolling_mean and (len(analysis.rolling_mean) != n or len(analysis.rolling_std) != n):
        raise ValueError("analysis does not belong to this series (rolling length mismatch)")

    pressure = [r.pressure for r in series]
    if analysis.rolling_mean:
        mean = [p.value for p in analysis.rolling_mean]
        std = [p.value for p in analysis.rolling_std]
        upper, lower = sigma_bands(mean, std, config.band_sigma)
    else:
        mean = std = upper = lower = [None] * n

    anomaly_flags = indices_to_mask(analysis.anomalies, n)
    broken_flags = indices_to_mask(analysis.broken, n)

    return ChartSeries(
        timestamps=[r.timestamp for r in series],
        pressure=pressure,
        rolling_mean=list(mean),
        rolling_std=list(std),
        upper_band=list(upper),
        lower_band=list(lower),
        anomaly_values=_highlight(pressure, anomaly_flags),
        broken_values=_highlight(pressure, broken_flags),
        anomaly_flags=anomaly_flags,
        broken_flags=broken_flags,
    )


def pressure_distribution(series: list[SensorReading], bins: int = 10) -> list[DistributionBucket]:
    """Histogram of pressure values as labelled buckets with percentages."""
    if not series:
        return []
    values = np.fromiter((r.pressure for r in series), dtype=float, count=len(series))
    counts, edges = np.histogram(values, bins=bins)
    total = len(values)
    return [
        DistributionBucket(
            range=f"{edges[i]:.1f}-{edges[i + 1]:.1f}",
            count=int(count),
            percentage=round_half_up(100.0 * int(count) / total),
        )
        for i, count in enumerate(counts)
    ]
