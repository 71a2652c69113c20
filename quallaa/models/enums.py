from enum import Enum


class MetricCategory(str, Enum):
    FINANCIAL = "financial"
    PRODUCTIVITY = "productivity"
    QUALITY = "quality"


class TrendDirection(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class ReportingFrequency(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
