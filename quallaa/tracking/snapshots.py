"""Append-only log of ROI snapshots.

All projects of an installation share one log under the ``roi-snapshots``
key; filtering by project happens on read.

Appending is a read-modify-write of the whole log with no locking. Two
writers appending at the same time can lose one of the snapshots.
"""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from quallaa.config.settings import Settings, get_settings
from quallaa.engine.confidence import calculate_p_value, is_significant
from quallaa.errors import ConfigurationError, StorageError
from quallaa.models.baseline import Baseline
from quallaa.models.metrics import ROIMetrics
from quallaa.models.snapshot import ROISnapshot, SnapshotPeriod, StatisticalSignificance
from quallaa.storage.base import SNAPSHOTS_KEY, StorageBackend

logger = logging.getLogger(__name__)

_SNAPSHOT_LOG = TypeAdapter(list[ROISnapshot])


def new_snapshot_id() -> str:
    return f"roi_{int(time.time() * 1000)}_{uuid4().hex[:9]}"


class SnapshotStore:
    """Creates and loads ROI snapshots through the injected storage backend."""

    def __init__(self, storage: StorageBackend, settings: Optional[Settings] = None):
        self._storage = storage
        self._settings = settings or get_settings()

    async def create_snapshot(
        self,
        project_id: str,
        baseline: Baseline,
        metrics: ROIMetrics,
        period: SnapshotPeriod,
    ) -> ROISnapshot:
        """Record metrics for a project with a significance verdict and persist it.

        Fails with ConfigurationError when tracking is disabled in the settings.
        """
        if not self._settings.tracking_enabled:
            raise ConfigurationError("ROI tracking disabled in config")

        p_value = calculate_p_value(
            metrics.financial.current_roi, metrics.confidence_interval
        )
        snapshot = ROISnapshot(
            id=new_snapshot_id(),
            project_id=project_id,
            timestamp=datetime.now(tz=timezone.utc),
            metrics=metrics,
            baseline=baseline.model_copy(deep=True),
            period=period,
            statistical_significance=StatisticalSignificance(
                p_value=p_value,
                is_significant=is_significant(p_value),
            ),
        )

        snapshots = await self.get_snapshots()
        snapshots.append(snapshot)
        await self._save(snapshots)

        logger.info(
            "Snapshot %s recorded for %s: ROI %.1f%% (p=%.3f)",
            snapshot.id,
            project_id,
            metrics.financial.current_roi,
            p_value,
        )
        return snapshot

    async def get_snapshots(self, project_id: Optional[str] = None) -> list[ROISnapshot]:
        """Load snapshots in insertion order, optionally for one project only."""
        raw = await self._storage.read(SNAPSHOTS_KEY)
        if raw is None:
            return []
        try:
            snapshots = _SNAPSHOT_LOG.validate_python(json.loads(raw))
        except (ValueError, PydanticValidationError) as exc:
            raise StorageError(
                f"Snapshot log is unreadable: {exc}", key=SNAPSHOTS_KEY
            ) from exc

        if project_id is None:
            return snapshots
        return [s for s in snapshots if s.project_id == project_id]

    async def _save(self, snapshots: list[ROISnapshot]) -> None:
        await self._storage.ensure_container(SNAPSHOTS_KEY)
        payload = json.dumps([s.to_json_dict() for s in snapshots], indent=2)
        await self._storage.write(SNAPSHOTS_KEY, payload.encode("utf-8"))
