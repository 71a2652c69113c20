"""Linear trend analysis across a project's ROI snapshots."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

# Ensure all metric accessors are registered on import
import quallaa.metric_library.accessors  # noqa: F401
from quallaa.config.settings import Settings, get_settings
from quallaa.engine.result import ROITrend, TrendPoint
from quallaa.errors import InsufficientDataError
from quallaa.metric_library.registry import extract_metric_value, get_metric
from quallaa.models.enums import MetricCategory, TrendDirection
from quallaa.tracking.snapshots import SnapshotStore

logger = logging.getLogger(__name__)

MIN_SNAPSHOTS = 2

_FINANCIAL_HINTS = ("cost", "roi", "savings", "financial")
_PRODUCTIVITY_HINTS = ("time", "hours", "adoption", "productivity")


def linear_trend(values: Sequence[float]) -> float:
    """Ordinary least-squares slope of values against x = 0..n-1."""
    n = len(values)
    if n < 2:
        return 0.0
    sum_x = n * (n - 1) / 2
    sum_y = sum(values)
    sum_xy = sum(x * y for x, y in enumerate(values))
    sum_xx = n * (n - 1) * (2 * n - 1) / 6
    return (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)


def trend_confidence(values: Sequence[float]) -> float:
    """R-squared of the linear fit; 0 below 3 points or with no variation."""
    n = len(values)
    if n < 3:
        return 0.0
    mean = sum(values) / n
    total_variation = sum((y - mean) ** 2 for y in values)
    if total_variation == 0:
        return 0.0
    slope = linear_trend(values)
    centre = (n - 1) / 2
    explained_variation = sum((slope * (i - centre)) ** 2 for i in range(n))
    return min(1.0, explained_variation / total_variation)


def metric_category(metric_path: str) -> MetricCategory:
    """Guess a metric's category from substrings of its path."""
    if any(hint in metric_path for hint in _FINANCIAL_HINTS):
        return MetricCategory.FINANCIAL
    if any(hint in metric_path for hint in _PRODUCTIVITY_HINTS):
        return MetricCategory.PRODUCTIVITY
    return MetricCategory.QUALITY


def trend_direction(slope: float, threshold: float) -> TrendDirection:
    """Verdict on the raw slope.

    The threshold is absolute in the metric's own units, so the same slope
    means very different things for a percentage and for a dollar amount.
    """
    if slope > threshold:
        return TrendDirection.IMPROVING
    if slope < -threshold:
        return TrendDirection.DECLINING
    return TrendDirection.STABLE


class TrendAnalyzer:
    """Computes the direction of a metric over a project's snapshot history."""

    def __init__(self, snapshots: SnapshotStore, settings: Optional[Settings] = None):
        self._snapshots = snapshots
        self._settings = settings or get_settings()

    async def calculate_trends(self, project_id: str, metric_path: str) -> ROITrend:
        snapshots = await self._snapshots.get_snapshots(project_id)
        if len(snapshots) < MIN_SNAPSHOTS:
            raise InsufficientDataError("At least 2 snapshots required for trend analysis")

        if get_metric(metric_path) is None:
            logger.warning("Unknown metric path %r; every value reads as 0", metric_path)

        points = [
            TrendPoint(
                timestamp=snapshot.timestamp,
                value=extract_metric_value(snapshot.metrics, metric_path),
                confidence_interval=snapshot.metrics.confidence_interval,
            )
            for snapshot in snapshots
        ]
        values = [p.value for p in points]
        slope = linear_trend(values)

        return ROITrend(
            metric=metric_path,
            category=metric_category(metric_path),
            values=points,
            trend=trend_direction(slope, self._settings.trend_threshold),
            trend_confidence=trend_confidence(values),
        )
