"""
config/analysis.py
──────────────────
Ingestion and statistics parameters.

Defaults reproduce the dashboard's reference behaviour:
  z-score threshold   2.5  (global mean / population std)
  rolling window      max(20, N // 50) trailing points + current point
  band width          ±2σ of the rolling window
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class IngestionConfig:
    sensor_prefix: str = "sensor_"
    timestamp_column: str = "timestamp"
    status_column: str = "machine_status"
    default_status: str = "NORMAL"


@dataclass(frozen=True)
class AnalysisConfig:
    zscore_threshold: float = 2.5
    min_window: int = 20
    window_divisor: int = 50
    band_sigma: float = 2.0
    broken_status: str = "BROKEN"

    def window_size(self, n_points: int) -> int:
        """Static look-back derived from the total series length."""
        return max(self.min_window, n_points // self.window_divisor)


DEFAULT_INGESTION = IngestionConfig()
DEFAULT_ANALYSIS = AnalysisConfig()
