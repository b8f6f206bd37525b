"""
src/data/models.py
──────────────────
Pydantic v2 data models for pump readings, statistics and metrics.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MachineStatus(str, Enum):
    NORMAL = "NORMAL"
    BROKEN = "BROKEN"
    RECOVERING = "RECOVERING"


class SensorReading(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    pressure: float
    # Free-form: unknown status strings are kept verbatim
    status: str = MachineStatus.NORMAL.value


class SeriesStatistics(BaseModel):
    mean: float = 0.0
    max: float = 0.0
    min: float = 0.0
    std_dev: float = Field(default=0.0, ge=0.0)


class RollingPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    value: float


class Metrics(BaseModel):
    """Display summary; serialized with camelCase keys for the assistant."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    average_pressure: float = 0.0
    max_pressure: float = 0.0
    min_pressure: float = 0.0
    anomaly_count: int = Field(default=0, ge=0)
    broken_state_duration: int = Field(default=0, ge=0)
    anomaly_frequency: float = Field(default=0.0, ge=0.0, le=100.0)


class AnalysisResult(BaseModel):
    statistics: SeriesStatistics = Field(default_factory=SeriesStatistics)
    rolling_mean: list[RollingPoint] = Field(default_factory=list)
    rolling_std: list[RollingPoint] = Field(default_factory=list)
    anomalies: list[int] = Field(default_factory=list)
    broken: list[int] = Field(default_factory=list)
    metrics: Metrics = Field(default_factory=Metrics)
    window_size: int = 0
