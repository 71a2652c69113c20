"""Tests for the shared ROI snapshot log."""

import json
from datetime import datetime

import pytest

from quallaa.config.settings import Settings
from quallaa.errors import ConfigurationError, StorageError
from quallaa.storage import SNAPSHOTS_KEY, InMemoryStorage
from quallaa.tracking.snapshots import SnapshotStore, new_snapshot_id
from tests.conftest import make_metrics


@pytest.fixture
def snapshots(storage):
    return SnapshotStore(storage)


class TestCreateSnapshot:
    @pytest.mark.asyncio
    async def test_records_snapshot(self, snapshots, reference_baseline, period):
        snapshot = await snapshots.create_snapshot(
            "proj-a", reference_baseline, make_metrics(51.2), period
        )
        assert snapshot.id.startswith("roi_")
        assert snapshot.project_id == "proj-a"
        assert snapshot.baseline == reference_baseline
        assert snapshot.period == period
        assert snapshot.statistical_significance.p_value == 0.001
        assert snapshot.statistical_significance.is_significant is True

    @pytest.mark.asyncio
    async def test_wide_interval_is_not_significant(self, snapshots, reference_baseline, period):
        snapshot = await snapshots.create_snapshot(
            "proj-a", reference_baseline, make_metrics(1.0, half_width=50.0), period
        )
        assert snapshot.statistical_significance.p_value > 0.05
        assert snapshot.statistical_significance.is_significant is False

    @pytest.mark.asyncio
    async def test_baseline_is_copied(self, snapshots, reference_baseline, period):
        snapshot = await snapshots.create_snapshot(
            "proj-a", reference_baseline, make_metrics(10.0), period
        )
        reference_baseline.development_cost = 99_999
        assert snapshot.baseline.development_cost == 25_000

    @pytest.mark.asyncio
    async def test_appends_in_insertion_order(self, snapshots, reference_baseline, period):
        for roi in (10.0, 20.0, 30.0):
            await snapshots.create_snapshot("proj-a", reference_baseline, make_metrics(roi), period)
        loaded = await snapshots.get_snapshots("proj-a")
        assert [s.metrics.financial.current_roi for s in loaded] == [10.0, 20.0, 30.0]

    @pytest.mark.asyncio
    async def test_persists_camel_case_log(self, snapshots, storage, reference_baseline, period):
        await snapshots.create_snapshot("proj-a", reference_baseline, make_metrics(10.0), period)
        stored = json.loads(await storage.read(SNAPSHOTS_KEY))
        assert len(stored) == 1
        assert stored[0]["projectId"] == "proj-a"
        assert stored[0]["metrics"]["financial"]["currentROI"] == 10.0

    def test_snapshot_ids_are_unique(self):
        assert len({new_snapshot_id() for _ in range(100)}) == 100


class TestGetSnapshots:
    @pytest.mark.asyncio
    async def test_empty_without_log(self, snapshots):
        assert await snapshots.get_snapshots() == []
        assert await snapshots.get_snapshots("proj-a") == []

    @pytest.mark.asyncio
    async def test_projects_share_one_log(self, snapshots, reference_baseline, period):
        await snapshots.create_snapshot("proj-a", reference_baseline, make_metrics(10.0), period)
        await snapshots.create_snapshot("proj-b", reference_baseline, make_metrics(20.0), period)
        await snapshots.create_snapshot("proj-a", reference_baseline, make_metrics(30.0), period)

        assert len(await snapshots.get_snapshots()) == 3
        only_a = await snapshots.get_snapshots("proj-a")
        assert [s.metrics.financial.current_roi for s in only_a] == [10.0, 30.0]
        assert await snapshots.get_snapshots("proj-c") == []

    @pytest.mark.asyncio
    async def test_round_trip_restores_typed_values(self, snapshots, reference_baseline, period):
        created = await snapshots.create_snapshot(
            "proj-a", reference_baseline, make_metrics(10.0), period
        )
        [loaded] = await SnapshotStore(snapshots._storage).get_snapshots("proj-a")
        assert loaded == created
        assert isinstance(loaded.timestamp, datetime)
        assert isinstance(loaded.baseline.established_at, datetime)
        assert isinstance(loaded.period.start_date, datetime)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [b"not json", b'{"id": 1}', b'[{"id": "x"}]'])
    async def test_corrupt_log_raises_storage_error(self, payload):
        store = SnapshotStore(InMemoryStorage({SNAPSHOTS_KEY: payload}))
        with pytest.raises(StorageError) as exc_info:
            await store.get_snapshots()
        assert exc_info.value.key == SNAPSHOTS_KEY


class TestTrackingDisabled:
    @pytest.mark.asyncio
    async def test_create_snapshot_refused(self, storage, reference_baseline, period):
        store = SnapshotStore(storage, Settings(tracking_enabled=False))
        with pytest.raises(ConfigurationError, match="ROI tracking disabled in config"):
            await store.create_snapshot("proj-a", reference_baseline, make_metrics(10.0), period)
        assert await storage.read(SNAPSHOTS_KEY) is None

    @pytest.mark.asyncio
    async def test_history_still_readable(self, storage, reference_baseline, period):
        await SnapshotStore(storage).create_snapshot(
            "proj-a", reference_baseline, make_metrics(10.0), period
        )
        store = SnapshotStore(storage, Settings(tracking_enabled=False))
        assert len(await store.get_snapshots("proj-a")) == 1
