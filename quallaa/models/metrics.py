"""Inputs and outputs of an ROI calculation."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_serializer, field_validator

from .base import CamelModel


class CurrentMetrics(CamelModel):
    """Fresh measurements taken after adoption. Never persisted on its own.

    Quality measurements left as None are read as unchanged from the
    baseline.
    """

    months_in_operation: float = Field(ge=0)
    current_saas_spend: float = Field(ge=0)
    maintenance_costs: float = Field(default=0.0, ge=0)
    current_processing_hours: float = Field(ge=0)
    tasks_automated: float = Field(default=0.0, ge=0)
    employee_adoption_rate: float = Field(default=0.0, ge=0, le=1.0)
    current_accuracy: Optional[float] = Field(default=None, ge=0, le=1.0)
    current_error_rate: Optional[float] = Field(default=None, ge=0, le=1.0)
    current_compliance_score: Optional[float] = Field(default=None, ge=0, le=1.0)
    current_customer_satisfaction: Optional[float] = Field(default=None, ge=1.0, le=10.0)


class FinancialMetrics(CamelModel):
    development_cost: float
    saas_replacement_savings: float
    operational_cost_reduction: float
    maintenance_costs: float
    cumulative_savings: float
    break_even_months: float
    current_roi: float = Field(alias="currentROI")

    @field_validator("break_even_months", mode="before")
    @classmethod
    def none_means_never(cls, v: Optional[float]) -> float:
        # JSON has no infinity; a project that never breaks even is stored as null
        return math.inf if v is None else v

    @field_serializer("break_even_months")
    def serialize_break_even(self, v: float) -> Optional[float]:
        return None if math.isinf(v) else v


class ProductivityMetrics(CamelModel):
    time_saved_hours: float
    tasks_automated: float
    error_reduction_rate: float
    employee_adoption_rate: float
    processing_time_reduction: float
    throughput_increase: float


class QualityMetrics(CamelModel):
    defect_reduction: float
    customer_satisfaction_delta: float
    compliance_improvement: float
    accuracy_improvement: float
    review_cycle_reduction: float


class ConfidenceInterval(CamelModel):
    lower: float
    upper: float
    confidence_level: float


class ROIMetrics(CamelModel):
    financial: FinancialMetrics
    productivity: ProductivityMetrics
    quality: QualityMetrics
    timestamp: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))
    confidence_interval: ConfidenceInterval
