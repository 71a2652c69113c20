from __future__ import annotations

from datetime import datetime

from pydantic import Field, model_validator

from .base import CamelModel
from .baseline import Baseline
from .metrics import ROIMetrics


class SnapshotPeriod(CamelModel):
    """Measurement window a snapshot covers."""

    start_date: datetime
    end_date: datetime

    @model_validator(mode="after")
    def start_before_end(self) -> SnapshotPeriod:
        if self.start_date > self.end_date:
            raise ValueError(
                f"Period start ({self.start_date.isoformat()}) must not be after "
                f"its end ({self.end_date.isoformat()})"
            )
        return self


class StatisticalSignificance(CamelModel):
    p_value: float = Field(ge=0, le=1.0)
    is_significant: bool


class ROISnapshot(CamelModel):
    """Immutable record of the ROI measured for a project over a period.

    ``baseline`` is a full copy of the baseline used at measurement time,
    so later baseline updates never change historical snapshots.
    """

    id: str
    project_id: str
    timestamp: datetime
    metrics: ROIMetrics
    baseline: Baseline
    period: SnapshotPeriod
    statistical_significance: StatisticalSignificance
