from __future__ import annotations

from datetime import datetime, timezone

from pydantic import Field

from .base import CamelModel

DEFAULT_ERROR_RATE = 0.05
DEFAULT_ACCURACY = 0.85
DEFAULT_COMPLIANCE = 0.7
DEFAULT_CUSTOMER_SATISFACTION = 7.5


class Baseline(CamelModel):
    """Pre-adoption measurements that every ROI figure is computed against.

    The model does not enforce domains so that an incomplete record loaded
    from disk can still be inspected and scored; see
    ``BaselineStore.calculate_baseline_health``.
    """

    established_at: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))
    development_cost: float
    current_saas_spend: float
    team_size: int
    current_processing_hours: float
    error_rate_baseline: float = DEFAULT_ERROR_RATE
    accuracy_baseline: float = DEFAULT_ACCURACY
    compliance_score: float = DEFAULT_COMPLIANCE
    customer_satisfaction_score: float = DEFAULT_CUSTOMER_SATISFACTION

    def age_months(self, now: datetime | None = None) -> float:
        """Age in 30-day months."""
        now = now or datetime.now(tz=timezone.utc)
        established = self.established_at
        if established.tzinfo is None:
            established = established.replace(tzinfo=timezone.utc)
        return (now - established).total_seconds() / (60 * 60 * 24 * 30)
