"""Computed, never-persisted result structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from quallaa.models.enums import MetricCategory, TrendDirection
from quallaa.models.metrics import ConfidenceInterval


@dataclass(frozen=True)
class BaselineHealth:
    """Data-quality score for a baseline.

    The score starts at 100 and is not clamped; a negative value means the
    baseline is critically incomplete.
    """

    score: int
    issues: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class TrendPoint:
    timestamp: datetime
    value: float
    confidence_interval: ConfidenceInterval


@dataclass(frozen=True)
class ROITrend:
    """Direction of one metric across a project's snapshots."""

    metric: str
    category: MetricCategory
    values: list[TrendPoint]
    trend: TrendDirection
    trend_confidence: float
