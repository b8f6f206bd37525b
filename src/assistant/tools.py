"""
src/assistant/tools.py
──────────────────────
Read-only tools exposed to the chat assistant.

  getPumpData(count)   → first `count` readings
  getPumpMetrics()     → current Metrics (camelCase keys)
  getAnomalies()       → readings at anomalous indices

Every tool is a pure accessor over the committed Dataset; none mutate it.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from config.display import PRESSURE_UNIT
from config.settings import settings
from src.data.models import Metrics, SensorReading
from src.data.store import Dataset


@dataclass(frozen=True)
class ToolParameter:
    name: str
    type: str
    description: str
    default: Any = None


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    parameters: tuple[ToolParameter, ...] = field(default_factory=tuple)

    def describe(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": [
                {"name": p.name, "type": p.type, "description": p.description, "default": p.default}
                for p in self.parameters
            ],
        }


def reading_payload(reading: SensorReading) -> dict:
    return {
        "timestamp": reading.timestamp.isoformat(),
        "pressure": reading.pressure,
        "machine_status": reading.status,
    }


def get_pump_data(dataset: Dataset | None, count: int = settings.DEFAULT_POINT_COUNT) -> list[dict]:
    if dataset is None or count <= 0:
        return []
    limit = min(int(count), len(dataset.readings))
    return [reading_payload(r) for r in dataset.readings[:limit]]


def get_pump_metrics(dataset: Dataset | None) -> dict:
    metrics = dataset.analysis.metrics if dataset is not None else Metrics()
    return metrics.model_dump(by_alias=True)


def get_anomalies(dataset: Dataset | None) -> list[dict]:
    if dataset is None:
        return []
    return [reading_payload(dataset.readings[idx]) for idx in dataset.analysis.anomalies]


TOOL_SPECS: tuple[ToolSpec, ...] = (
    ToolSpec(
        name="getPumpData",
        description="Get the pump pressure data points",
        parameters=(
            ToolParameter(
                name="count",
                type="number",
                description=f"Number of data points to retrieve. Default is {settings.DEFAULT_POINT_COUNT}.",
                default=settings.DEFAULT_POINT_COUNT,
            ),
        ),
    ),
    ToolSpec(name="getPumpMetrics", description="Get the calculated metrics about the pump pressure data"),
    ToolSpec(name="getAnomalies", description="Get the detected anomalies in the data"),
)

_HANDLERS: dict[str, Callable[..., Any]] = {
    "getPumpData": get_pump_data,
    "getPumpMetrics": get_pump_metrics,
    "getAnomalies": get_anomalies,
}


def call_tool(name: str, dataset: Dataset | None, **params: Any) -> Any:
    """Dispatch a tool call by name; unknown names raise KeyError."""
    if name not in _HANDLERS:
        raise KeyError(f"unknown tool: {name}")
    return _HANDLERS[name](dataset, **params)


def build_context(dataset: Dataset | None) -> str:
    """Assistant system context summarizing the currently loaded data."""
    metrics = dataset.analysis.metrics if dataset is not None else Metrics()
    n_points = len(dataset) if dataset is not None else 0
    time_range = dataset.time_range if dataset is not None else None
    start, end = (t.strftime("%Y-%m-%d %H:%M") for t in time_range) if time_range else ("N/A", "N/A")

    return (
        "You are a knowledgeable assistant helping with a pump pressure monitoring system. "
        "The system monitors pressure readings from industrial pumps and detects anomalies.\n\n"
        "This dashboard visualizes pressure readings over time, with anomaly detection and "
        "statistical analysis. Currently showing data from 1 sensor.\n\n"
        "Key metrics displayed:\n"
        f"- Average pressure: {metrics.average_pressure} {PRESSURE_UNIT}\n"
        f"- Maximum pressure: {metrics.max_pressure} {PRESSURE_UNIT}\n"
        f"- Minimum pressure: {metrics.min_pressure} {PRESSURE_UNIT}\n"
        f"- Number of anomalies detected: {metrics.anomaly_count}\n"
        f"- Anomaly frequency: {metrics.anomaly_frequency}%\n"
        f"- Total broken state duration: {metrics.broken_state_duration} time units\n\n"
        f"The dashboard shows {n_points} data points from {start} to {end}.\n\n"
        "You can help the user interpret this data, suggest maintenance actions, or explain "
        "the anomaly detection methodology."
    )
