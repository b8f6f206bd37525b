"""
src/data/simulator.py
─────────────────────
Synthetic pump sensor export generator.

Generates:
  - `days` of readings at `interval_min` spacing with two sensor columns
  - 1–3 failure events: degradation → BROKEN → RECOVERING
  - Isolated pressure spikes and a few blank sensor cells

Design:
  - Reproducible with SIMULATION_SEED for consistent demos
  - Output mirrors the real export layout: timestamp, sensor_00, sensor_01,
    machine_status
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path

import numpy as np
import pandas as pd

from config.settings import settings
from src.data.degradation import (
    FailurePhase,
    broken_pressure,
    degradation_pressure,
    recovering_pressure,
)
from src.data.models import MachineStatus
from src.data.source import is_remote

logger = logging.getLogger(__name__)

BASE_PRESSURE = 50.0
NOISE = 1.2
SECONDARY_BASE = 45.0
SECONDARY_NOISE = 0.8
SPIKE_PROBABILITY = 0.002
SPIKE_SIGMA = 8.0
MISSING_PROBABILITY = 0.001


@dataclass
class FailureEvent:
    start: int            # index of the first degraded sample
    degradation: int      # samples of pressure drop before the failure
    broken: int           # samples in BROKEN state
    recovering: int       # samples in RECOVERING state

    @property
    def end(self) -> int:
        return self.start + self.degradation + self.broken + self.recovering


def _plan_events(total: int, samples_per_hour: int, rng: np.random.Generator) -> list[FailureEvent]:
    """Randomly plan 1–3 non-overlapping failure events."""
    n_events = int(rng.integers(1, 4))
    events: list[FailureEvent] = []
    cursor = total // 10

    for _ in range(n_events):
        degradation = int(rng.integers(12, 48)) * samples_per_hour
        broken = int(rng.integers(1, 7))
        recovering = int(rng.integers(6, 24)) * samples_per_hour
        length = degradation + broken + recovering
        latest_start = total - length - 1
        if cursor >= latest_start:
            break
        start = int(rng.integers(cursor, max(cursor + 1, (cursor + latest_start) // 2)))
        events.append(FailureEvent(start, degradation, broken, recovering))
        cursor = start + length + samples_per_hour

    return events


def _phase_at(idx: int, event: FailureEvent) -> tuple[FailurePhase, float] | None:
    """(phase, normalized progress) for a sample inside the event, else None."""
    offset = idx - event.start
    if offset < 0 or idx >= event.end:
        return None
    if offset < event.degradation:
        return FailurePhase.DEGRADATION, offset / event.degradation
    offset -= event.degradation
    if offset < event.broken:
        return FailurePhase.BROKEN, offset / event.broken
    offset -= event.broken
    return FailurePhase.RECOVERING, offset / event.recovering


# ── Public API ────────────────────────────────────────────────────────────────

def generate_pump_history(
    seed: int = settings.SIMULATION_SEED,
    days: int = settings.HISTORY_DAYS,
    interval_min: int = settings.SAMPLE_INTERVAL_MIN,
    end: datetime | None = None,
) -> pd.DataFrame:
    """
    Generate a pump sensor export as a DataFrame.

    Sensor columns may contain NaN (blank cells in the written CSV).
    """
    rng = np.random.default_rng(seed)
    samples_per_hour = max(1, 60 // interval_min)
    total = days * 24 * samples_per_hour
    end_ts = end or datetime.now().replace(minute=0, second=0, microsecond=0)
    start_ts = end_ts - timedelta(minutes=interval_min * (total - 1))

    events = _plan_events(total, samples_per_hour, rng)
    rows: list[dict] = []

    for idx in range(total):
        pressure = BASE_PRESSURE + rng.normal(0.0, NOISE)
        secondary = SECONDARY_BASE + rng.normal(0.0, SECONDARY_NOISE)
        status = MachineStatus.NORMAL

        for event in events:
            phase = _phase_at(idx, event)
            if phase is None:
                continue
            kind, t = phase
            if kind is FailurePhase.DEGRADATION:
                pressure = degradation_pressure(t, BASE_PRESSURE, NOISE, rng)
            elif kind is FailurePhase.BROKEN:
                pressure = broken_pressure(BASE_PRESSURE, rng)
                status = MachineStatus.BROKEN
            else:
                pressure = recovering_pressure(t, BASE_PRESSURE, NOISE, rng)
                status = MachineStatus.RECOVERING
            break  # events never overlap

        if status is MachineStatus.NORMAL and rng.random() < SPIKE_PROBABILITY:
            pressure += rng.choice([-1.0, 1.0]) * SPIKE_SIGMA * NOISE * 3.0
        if rng.random() < MISSING_PROBABILITY:
            pressure = np.nan

        rows.append(
            {
                "timestamp": start_ts + timedelta(minutes=interval_min * idx),
                "sensor_00": round(float(pressure), 3),
                "sensor_01": round(float(secondary), 3),
                "machine_status": status.value,
            }
        )

    return pd.DataFrame(rows)


def write_sample_csv(path: str | Path, **kwargs) -> Path:
    """Write a generated export to `path` (parent directories are created)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df = generate_pump_history(**kwargs)
    df.to_csv(path, index=False, date_format="%Y-%m-%d %H:%M:%S")
    logger.info("Wrote %d simulated readings to %s", len(df), path)
    return path


def ensure_sample_csv(source: str) -> bool:
    """
    Seed a local CSV source with simulated data if it does not exist yet.

    Returns True when a file was written. Remote sources are left alone.
    """
    if is_remote(source) or Path(source).exists():
        return False
    write_sample_csv(source)
    return True
