"""
config/display.py
─────────────────
Colors and labels for chart series and KPI cards.
"""

from enum import Enum


class SeriesKind(str, Enum):
    PRESSURE = "pressure"
    ROLLING_MEAN = "rolling_mean"
    UPPER_BAND = "upper_band"
    LOWER_BAND = "lower_band"
    ANOMALY = "anomaly"
    BROKEN = "broken"


SERIES_COLORS: dict[str, str] = {
    SeriesKind.PRESSURE: "#8884d8",
    SeriesKind.ROLLING_MEAN: "#4caf50",
    SeriesKind.UPPER_BAND: "rgba(54,162,235,0.45)",
    SeriesKind.LOWER_BAND: "rgba(54,162,235,0.45)",
    SeriesKind.ANOMALY: "#ff9800",
    SeriesKind.BROKEN: "#da3633",
}

SERIES_LABELS: dict[str, str] = {
    SeriesKind.PRESSURE: "Pressure",
    SeriesKind.ROLLING_MEAN: "Rolling Mean",
    SeriesKind.UPPER_BAND: "Upper Band",
    SeriesKind.LOWER_BAND: "Lower Band",
    SeriesKind.ANOMALY: "Anomalies",
    SeriesKind.BROKEN: "Broken States",
}

ANOMALY_REGION_FILL = "rgba(255,200,200,0.35)"
ANOMALY_REGION_LINE = "rgba(255,150,150,0.9)"

# KPI card accents, keyed by Metrics field
METRIC_COLORS: dict[str, str] = {
    "average_pressure": "#58a6ff",
    "max_pressure": "#2ea44f",
    "min_pressure": "#a371f7",
    "anomaly_count": "#da3633",
    "broken_state_duration": "#f0883e",
    "anomaly_frequency": "#e8a020",
}

PRESSURE_UNIT = "PSI"
