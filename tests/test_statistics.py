"""
tests/test_statistics.py
─────────────────────────
Tests for the statistics engine and Z-score anomaly detection.
"""
import numpy as np
import pytest

from config.analysis import AnalysisConfig
from src.analytics.anomaly import detect_anomalies, find_anomaly_regions, global_zscore
from src.analytics.statistics import compute_statistics, rolling_statistics, round_half_up, summarize


class TestScenarios:
    def test_constant_series(self, make_readings):
        result = compute_statistics(make_readings([100, 100, 100]))
        assert result.statistics.mean == 100.0
        assert result.statistics.std_dev == 0.0
        assert result.anomalies == []

    def test_spike_below_threshold(self, make_readings):
        result = compute_statistics(make_readings([100, 100, 1000], ["NORMAL", "BROKEN", "NORMAL"]))
        assert result.statistics.mean == pytest.approx(400.0)
        assert result.statistics.std_dev == pytest.approx(424.26, abs=0.01)
        assert result.metrics.broken_state_duration == 1
        assert result.metrics.anomaly_count == 0
        assert result.broken == [1]

    def test_single_outlier_is_only_anomaly(self, make_readings):
        others = [99.0 if i % 2 else 101.0 for i in range(99)]
        outlier = float(np.mean(others) + 10 * np.std(others))
        values = others[:50] + [outlier] + others[50:]
        result = compute_statistics(make_readings(values))
        assert result.anomalies == [50]
        assert result.metrics.anomaly_count == 1
        assert result.metrics.anomaly_frequency == 1.0


class TestSummaryBounds:
    @pytest.mark.parametrize(
        "values",
        [[5.0], [1.0, 2.0], [0.1] * 7, [0.1, 0.2, 0.3], [-3.5, 0.0, 12.25, 7.0], [1e9, 1e9 + 1, 1e9 + 2]],
    )
    def test_mean_within_range(self, values):
        stats = summarize(np.array(values))
        assert stats.min <= stats.mean <= stats.max
        assert stats.std_dev >= 0.0

    def test_population_std(self):
        stats = summarize(np.array([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]))
        assert stats.std_dev == pytest.approx(2.0)

    def test_constant_series_std_exactly_zero(self):
        stats = summarize(np.array([0.1] * 10))
        assert stats.std_dev == 0.0
        assert stats.mean == 0.1

    def test_empty(self):
        stats = summarize(np.array([]))
        assert (stats.mean, stats.max, stats.min, stats.std_dev) == (0.0, 0.0, 0.0, 0.0)


class TestComputeStatistics:
    def test_empty_input(self):
        result = compute_statistics([])
        assert result.metrics.anomaly_count == 0
        assert result.metrics.average_pressure == 0.0
        assert result.rolling_mean == []
        assert result.anomalies == []
        assert result.broken == []

    def test_constant_series_never_anomalous(self, make_readings):
        result = compute_statistics(make_readings([7.0] * 500))
        assert result.anomalies == []

    @pytest.mark.parametrize("n", [1, 2, 25, 1000])
    def test_rolling_aligned_with_series(self, make_readings, n):
        readings = make_readings([float(i % 7) for i in range(n)])
        result = compute_statistics(readings)
        assert len(result.rolling_mean) == n
        assert len(result.rolling_std) == n
        assert [p.timestamp for p in result.rolling_mean] == [r.timestamp for r in readings]

    def test_idempotent(self, make_readings):
        readings = make_readings([float((i * 37) % 11) for i in range(300)])
        assert compute_statistics(readings) == compute_statistics(readings)

    def test_metrics_rounded(self, make_readings):
        result = compute_statistics(make_readings([1.004, 2.0, 3.111]))
        assert result.metrics.average_pressure == round(result.statistics.mean, 2)
        assert result.metrics.max_pressure == 3.11
        assert result.metrics.min_pressure == 1.0

    def test_metrics_tie_rounds_up(self, make_readings):
        result = compute_statistics(make_readings([0.0, 0.25]))
        assert result.statistics.mean == 0.125
        assert result.metrics.average_pressure == 0.13

    def test_frequency_percent(self, make_readings):
        # 1 anomaly in 8 points
        values = [100.0] * 7 + [1000.0]
        result = compute_statistics(make_readings(values), AnalysisConfig(zscore_threshold=2.0))
        assert result.metrics.anomaly_frequency == 12.5

    def test_window_size_recorded(self, make_readings):
        assert compute_statistics(make_readings([1.0] * 10)).window_size == 20
        assert compute_statistics(make_readings([1.0] * 5000)).window_size == 100

    def test_custom_threshold(self, make_readings):
        readings = make_readings([100, 100, 1000])
        result = compute_statistics(readings, AnalysisConfig(zscore_threshold=1.0))
        assert result.anomalies == [2]


class TestWindowSize:
    @pytest.mark.parametrize("n,expected", [(0, 20), (10, 20), (1000, 20), (1049, 20), (1050, 21), (5000, 100)])
    def test_formula(self, n, expected):
        assert AnalysisConfig().window_size(n) == expected


class TestRollingStatistics:
    def test_growing_window_at_start(self):
        mean, std = rolling_statistics(np.array([100.0, 100.0, 1000.0]), window_size=20)
        assert list(mean) == [100.0, 100.0, 400.0]
        assert std[0] == 0.0
        assert std[2] == pytest.approx(424.26, abs=0.01)

    def test_trailing_window_slides(self):
        values = np.arange(10, dtype=float)
        mean, _ = rolling_statistics(values, window_size=2)
        # window at i covers [i - 2, i]
        assert list(mean) == [0.0, 0.5, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0]

    def test_rounded_to_two_decimals(self):
        mean, std = rolling_statistics(np.array([1.0, 2.0, 2.0]), window_size=20)
        assert mean[2] == 1.67
        assert std[2] == 0.47

    def test_exact_tie_rounds_up(self):
        mean, _ = rolling_statistics(np.array([0.0, 0.25]), window_size=20)
        assert mean[1] == 0.13


class TestAnomalyDetection:
    def test_zero_std_gives_zero_scores(self):
        z = global_zscore(np.array([3.0, 3.0]), 3.0, 0.0)
        assert list(z) == [0.0, 0.0]

    def test_strictly_greater_than_threshold(self):
        values = np.array([0.0, 2.5, -2.6])
        z, mask = detect_anomalies(values, 0.0, 1.0, threshold=2.5)
        assert list(mask) == [False, False, True]
        assert z[2] == pytest.approx(2.6)


class TestAnomalyRegions:
    def test_contiguous_runs(self):
        regions = find_anomaly_regions([False, True, True, False, True, False])
        assert [(r.start, r.end) for r in regions] == [(1, 2), (4, 4)]

    def test_run_reaching_end(self):
        regions = find_anomaly_regions([False, False, True, True])
        assert [(r.start, r.end, r.length) for r in regions] == [(2, 3, 2)]

    def test_no_anomalies(self):
        assert find_anomaly_regions([False] * 5) == []


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value,expected",
        [(0.125, 0.13), (0.375, 0.38), (-0.125, -0.13), (2.5, 2.5), (1.004, 1.0), (3.14159, 3.14)],
    )
    def test_ties_away_from_zero(self, value, expected):
        assert round_half_up(value) == expected

    def test_binary_representation_respected(self):
        # 1.005 is stored just below the tie
        assert round_half_up(1.005) == 1.0

    def test_non_finite_passthrough(self):
        assert np.isnan(round_half_up(float("nan")))
        assert round_half_up(float("inf")) == float("inf")
