"""
tests/test_store_loader.py
───────────────────────────
Tests for the dataset store token guard and the load orchestration.
"""
import pytest

from src.data import loader
from src.data.ingestion import IngestionError
from src.data.loader import LoadStatus, build_dataset, load_dataset, reload
from src.data.store import DataStore


@pytest.fixture
def csv_file(tmp_path, spiky_csv_text):
    path = tmp_path / "pump.csv"
    path.write_text(spiky_csv_text, encoding="utf-8")
    return path


class TestDataStore:
    def test_commit_latest(self, dataset):
        store = DataStore()
        token = store.begin_load()
        assert store.commit(token, dataset)
        assert store.current is dataset
        assert store.version == 1

    def test_stale_commit_discarded(self, dataset):
        store = DataStore()
        old = store.begin_load()
        new = store.begin_load()
        assert not store.commit(old, dataset)
        assert store.current is None
        assert store.commit(new, dataset)

    def test_fail_keeps_previous_data(self, dataset):
        store = DataStore()
        store.commit(store.begin_load(), dataset)
        assert store.fail(store.begin_load(), "Failed to fetch: 500 Server Error")
        assert store.current is dataset
        assert store.error == "Failed to fetch: 500 Server Error"

    def test_commit_clears_error(self, dataset):
        store = DataStore()
        store.fail(store.begin_load(), "boom")
        store.commit(store.begin_load(), dataset)
        assert store.error is None

    def test_close_discards_in_flight(self, dataset):
        store = DataStore()
        token = store.begin_load()
        store.close()
        assert not store.commit(token, dataset)
        assert not store.fail(token, "late error")
        assert store.error is None

    def test_begin_load_after_close_reopens(self, dataset):
        store = DataStore()
        store.close()
        assert store.commit(store.begin_load(), dataset)

    def test_tokens_increase(self):
        store = DataStore()
        assert store.begin_load() < store.begin_load() < store.begin_load()


class TestBuildDataset:
    def test_pipeline(self, spiky_csv_text):
        ds = build_dataset(spiky_csv_text, source="inline")
        assert len(ds) == 96
        assert ds.source == "inline"
        assert ds.analysis.metrics.anomaly_count == 1
        assert len(ds.chart) == 96

    def test_time_range(self, dataset):
        start, end = dataset.time_range
        assert start < end
        assert start == dataset.readings[0].timestamp

    def test_invalid_text(self):
        with pytest.raises(IngestionError):
            build_dataset("timestamp,value\n2024-01-01,1\n")


class TestLoadDataset:
    def test_local_file(self, csv_file):
        ds = load_dataset(str(csv_file))
        assert len(ds) == 96
        assert ds.source == str(csv_file)

    def test_missing_file(self, tmp_path):
        with pytest.raises(IngestionError, match="Failed to read"):
            load_dataset(str(tmp_path / "missing.csv"))


class TestReload:
    def test_committed(self, csv_file):
        store = DataStore()
        outcome = reload(store, str(csv_file))
        assert outcome.status is LoadStatus.COMMITTED
        assert len(store.current) == 96
        assert store.error is None

    def test_error_recorded(self, tmp_path):
        store = DataStore()
        outcome = reload(store, str(tmp_path / "missing.csv"))
        assert outcome.status is LoadStatus.ERROR
        assert outcome.message.startswith("Failed to read")
        assert store.error == outcome.message
        assert store.current is None

    def test_retry_after_error(self, tmp_path, spiky_csv_text):
        store = DataStore()
        path = tmp_path / "late.csv"
        assert reload(store, str(path)).status is LoadStatus.ERROR
        path.write_text(spiky_csv_text, encoding="utf-8")
        assert reload(store, str(path)).status is LoadStatus.COMMITTED
        assert store.error is None

    def test_error_keeps_committed_data(self, csv_file, tmp_path):
        store = DataStore()
        reload(store, str(csv_file))
        committed = store.current
        reload(store, str(tmp_path / "missing.csv"))
        assert store.current is committed
        assert store.error is not None

    def test_superseded_load_is_stale(self, monkeypatch, dataset):
        store = DataStore()

        def slow_load(source, *args, **kwargs):
            store.begin_load()  # a newer load starts while this one is in flight
            return dataset

        monkeypatch.setattr(loader, "load_dataset", slow_load)
        outcome = reload(store, "anything.csv")
        assert outcome.status is LoadStatus.STALE
        assert store.current is None
