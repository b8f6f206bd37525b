"""
src/analytics/thresholds.py
────────────────────────────
Statistical band helpers for chart overlays.

Provides:
  - μ ± k×σ bands from the rolling mean / rolling std series
  - Y-axis range padding around the global min / max
"""
from __future__ import annotations

from collections.abc import Sequence

from config.analysis import DEFAULT_ANALYSIS


def sigma_bands(
    mean_values: Sequence[float],
    std_values: Sequence[float],
    sigma: float = DEFAULT_ANALYSIS.band_sigma,
) -> tuple[list[float], list[float]]:
    """
    Upper and lower bands, index-aligned with the inputs.

    Returns:
        (upper, lower) where upper[i] = mean[i] + sigma·std[i]
    """
    if len(mean_values) != len(std_values):
        raise ValueError(f"mean/std length mismatch: {len(mean_values)} != {len(std_values)}")
    upper = [m + sigma * s for m, s in zip(mean_values, std_values, strict=True)]
    lower = [m - sigma * s for m, s in zip(mean_values, std_values, strict=True)]
    return upper, lower


def chart_y_range(min_value: float, max_value: float, pad: float = 0.1) -> tuple[float, float]:
    """Pad the data range by `pad` on each side (at least 1 unit for flat series)."""
    span = max_value - min_value
    margin = span * pad if span > 0 else max(abs(max_value) * pad, 1.0)
    return min_value - margin, max_value + margin
