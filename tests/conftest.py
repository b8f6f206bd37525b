"""
tests/conftest.py
─────────────────
Shared pytest fixtures for the Pump Monitor test suite.
"""
import os
from datetime import datetime, timedelta

import pytest

os.environ.setdefault("CSV_SOURCE", "data/test_pump_pressure_data.csv")
os.environ.setdefault("HISTORY_DAYS", "2")
os.environ.setdefault("SIMULATION_SEED", "42")
os.environ.setdefault("LOG_LEVEL", "DEBUG")


@pytest.fixture
def t0() -> datetime:
    return datetime(2024, 1, 1, 0, 0, 0)


@pytest.fixture
def make_readings(t0):
    """Factory: pressures (and optional statuses) → SensorReadings one minute apart."""
    from src.data.models import SensorReading

    def _make(pressures, statuses=None):
        statuses = statuses or ["NORMAL"] * len(pressures)
        return [
            SensorReading(timestamp=t0 + timedelta(minutes=i), pressure=float(p), status=s)
            for i, (p, s) in enumerate(zip(pressures, statuses, strict=True))
        ]

    return _make


@pytest.fixture
def sample_csv_text() -> str:
    """Small export: unsorted rows, a blank status, one bad number, one bad date."""
    return (
        "timestamp,sensor_00,sensor_01,machine_status\n"
        "2024-01-01 00:02:00,101.5,5.0,NORMAL\n"
        "2024-01-01 00:00:00,100.0,5.1,\n"
        "2024-01-01 00:01:00,abc,5.2,NORMAL\n"
        "not-a-date,99.0,5.3,BROKEN\n"
        "2024-01-01 00:03:00,98.0,5.4,BROKEN\n"
    )


@pytest.fixture
def spiky_csv_text(t0) -> str:
    """Two days of flat-ish readings with one large spike and one BROKEN reading."""
    lines = ["timestamp,sensor_00,machine_status"]
    for i in range(96):
        ts = t0 + timedelta(minutes=30 * i)
        pressure = 150.0 if i == 40 else (49.0 if i % 2 else 51.0)
        status = "BROKEN" if i == 70 else "NORMAL"
        lines.append(f"{ts:%Y-%m-%d %H:%M:%S},{pressure},{status}")
    return "\n".join(lines) + "\n"


@pytest.fixture
def dataset(spiky_csv_text):
    from src.data.loader import build_dataset
    return build_dataset(spiky_csv_text, source="memory://spiky")
