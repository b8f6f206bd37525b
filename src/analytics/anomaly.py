"""
src/analytics/anomaly.py
────────────────────────
Anomaly detection for pump pressure series.

Algorithm: global Z-score against the whole-series mean / population std.
  z = |x - μ| / σ
  z > threshold → anomaly   (strictly greater)
  σ == 0        → z = 0 everywhere (constant series has no anomalies)

Contiguous runs of anomalous points are grouped into regions for
range highlighting on the trend chart.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from config.analysis import DEFAULT_ANALYSIS

DEFAULT_THRESHOLD = DEFAULT_ANALYSIS.zscore_threshold


def global_zscore(values: np.ndarray, mean: float, std_dev: float) -> np.ndarray:
    """Absolute Z-score of every value; all zeros when std_dev is 0."""
    values = np.asarray(values, dtype=float)
    if std_dev == 0.0 or values.size == 0:
        return np.zeros(values.shape, dtype=float)
    return np.abs(values - mean) / std_dev


def detect_anomalies(
    values: np.ndarray,
    mean: float,
    std_dev: float,
    threshold: float = DEFAULT_THRESHOLD,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Flag anomalous points of a series.

    Returns:
        (zscores, anomaly_mask)
        where anomaly_mask is a boolean array (True = anomaly)
    """
    zscores = global_zscore(values, mean, std_dev)
    return zscores, zscores > threshold


def mask_to_indices(mask: np.ndarray) -> list[int]:
    return [int(i) for i in np.flatnonzero(mask)]


def indices_to_mask(indices: Sequence[int], length: int) -> list[bool]:
    flags = [False] * length
    for idx in indices:
        if 0 <= idx < length:
            flags[idx] = True
    return flags


@dataclass(frozen=True)
class AnomalyRegion:
    start: int  # first anomalous index
    end: int    # last anomalous index (inclusive)

    @property
    def length(self) -> int:
        return self.end - self.start + 1


def find_anomaly_regions(flags: Sequence[bool]) -> list[AnomalyRegion]:
    """
    Group maximal runs of True flags into regions.

    A region opens on a False→True transition and closes on the last True
    before a True→False transition (or at the end of the series).
    """
    regions: list[AnomalyRegion] = []
    start: int | None = None

    for idx, is_anomaly in enumerate(flags):
        if is_anomaly and start is None:
            start = idx
        elif not is_anomaly and start is not None:
            regions.append(AnomalyRegion(start=start, end=idx - 1))
            start = None

    if start is not None:
        regions.append(AnomalyRegion(start=start, end=len(flags) - 1))

    return regions
