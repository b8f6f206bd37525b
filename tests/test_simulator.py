"""
tests/test_simulator.py
────────────────────────
Tests for the synthetic pump export simulator.
"""
from datetime import datetime

import numpy as np
import pandas as pd

from src.data.degradation import broken_pressure, degradation_pressure, recovering_pressure
from src.data.ingestion import parse_csv
from src.data.simulator import (
    BASE_PRESSURE,
    FailureEvent,
    _phase_at,
    ensure_sample_csv,
    generate_pump_history,
    write_sample_csv,
)

END = datetime(2024, 6, 1, 12, 0, 0)


class TestGeneratePumpHistory:
    def test_row_count(self):
        df = generate_pump_history(seed=42, days=3, interval_min=10, end=END)
        assert len(df) == 3 * 24 * 6

    def test_columns(self):
        df = generate_pump_history(seed=42, days=1, interval_min=60, end=END)
        assert list(df.columns) == ["timestamp", "sensor_00", "sensor_01", "machine_status"]

    def test_chronological_and_ends_at_end(self):
        df = generate_pump_history(seed=42, days=2, interval_min=30, end=END)
        assert df["timestamp"].is_monotonic_increasing
        assert df["timestamp"].iloc[-1] == END

    def test_status_values(self):
        df = generate_pump_history(seed=7, days=7, interval_min=10, end=END)
        assert set(df["machine_status"]) <= {"NORMAL", "BROKEN", "RECOVERING"}

    def test_contains_failure_event(self):
        df = generate_pump_history(seed=7, days=7, interval_min=10, end=END)
        assert (df["machine_status"] == "BROKEN").any()

    def test_reproducibility(self):
        a = generate_pump_history(seed=99, days=2, end=END)
        b = generate_pump_history(seed=99, days=2, end=END)
        pd.testing.assert_frame_equal(a, b)

    def test_different_seeds_differ(self):
        a = generate_pump_history(seed=1, days=1, end=END)
        b = generate_pump_history(seed=2, days=1, end=END)
        assert not a["sensor_00"].equals(b["sensor_00"])


class TestFailurePhases:
    def test_phase_boundaries(self):
        event = FailureEvent(start=10, degradation=4, broken=2, recovering=4)
        assert _phase_at(9, event) is None
        assert _phase_at(10, event)[0].value == "degradation"
        assert _phase_at(14, event)[0].value == "broken"
        assert _phase_at(16, event)[0].value == "recovering"
        assert _phase_at(20, event) is None

    def test_pressure_drops_when_broken(self):
        rng = np.random.default_rng(0)
        samples = [broken_pressure(BASE_PRESSURE, rng) for _ in range(50)]
        assert max(samples) < BASE_PRESSURE * 0.5
        assert min(samples) >= 0.0

    def test_degradation_trend(self):
        rng = np.random.default_rng(0)
        early = np.mean([degradation_pressure(0.0, BASE_PRESSURE, 0.1, rng) for _ in range(50)])
        late = np.mean([degradation_pressure(1.0, BASE_PRESSURE, 0.1, rng) for _ in range(50)])
        assert late < early

    def test_recovery_reaches_baseline(self):
        rng = np.random.default_rng(0)
        done = np.mean([recovering_pressure(1.0, BASE_PRESSURE, 0.1, rng) for _ in range(50)])
        assert abs(done - BASE_PRESSURE) < 1.0


class TestSampleCsv:
    def test_written_file_parses(self, tmp_path):
        path = write_sample_csv(tmp_path / "nested" / "pump.csv", seed=3, days=1, end=END)
        readings = parse_csv(path.read_text(encoding="utf-8"))
        assert 0 < len(readings) <= 24 * 6
        assert {r.status for r in readings} <= {"NORMAL", "BROKEN", "RECOVERING"}

    def test_ensure_only_seeds_once(self, tmp_path):
        target = str(tmp_path / "pump.csv")
        assert ensure_sample_csv(target) is True
        assert ensure_sample_csv(target) is False

    def test_remote_source_untouched(self):
        assert ensure_sample_csv("https://example.com/pump.csv") is False
