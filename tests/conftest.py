"""Shared test fixtures for the ROI tracking test suite."""

import random
from datetime import datetime, timedelta, timezone

import pytest

from quallaa.config.settings import Settings
from quallaa.engine.calculator import ROICalculator
from quallaa.models.baseline import Baseline
from quallaa.models.metrics import (
    ConfidenceInterval,
    CurrentMetrics,
    FinancialMetrics,
    ProductivityMetrics,
    QualityMetrics,
    ROIMetrics,
)
from quallaa.models.snapshot import SnapshotPeriod
from quallaa.storage import InMemoryStorage


def make_metrics(roi: float, half_width: float = 10.0) -> ROIMetrics:
    """ROIMetrics with a chosen ROI and everything else held constant."""
    return ROIMetrics(
        financial=FinancialMetrics(
            development_cost=25_000,
            saas_replacement_savings=12_000,
            operational_cost_reduction=27_000,
            maintenance_costs=1_200,
            cumulative_savings=39_000,
            break_even_months=8,
            current_roi=roi,
        ),
        productivity=ProductivityMetrics(
            time_saved_hours=360,
            tasks_automated=4,
            error_reduction_rate=60,
            employee_adoption_rate=70,
            processing_time_reduction=75,
            throughput_increase=300,
        ),
        quality=QualityMetrics(
            defect_reduction=60,
            customer_satisfaction_delta=0.5,
            compliance_improvement=10,
            accuracy_improvement=11.76,
            review_cycle_reduction=48,
        ),
        confidence_interval=ConfidenceInterval(
            lower=roi - half_width, upper=roi + half_width, confidence_level=0.95
        ),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def calculator(settings) -> ROICalculator:
    """Calculator with a seeded random source so intervals are reproducible."""
    return ROICalculator(settings=settings, rng=random.Random(42))


@pytest.fixture
def reference_baseline() -> Baseline:
    """Small team replacing $1.5k/month of SaaS and 40 hours/month of manual work."""
    return Baseline(
        established_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        development_cost=25_000,
        current_saas_spend=1_500,
        team_size=5,
        current_processing_hours=40,
        error_rate_baseline=0.05,
        accuracy_baseline=0.85,
    )


@pytest.fixture
def reference_current() -> CurrentMetrics:
    """A year in: SaaS spend down to $500, manual work down to 10 hours."""
    return CurrentMetrics(
        months_in_operation=12,
        current_saas_spend=500,
        maintenance_costs=100,
        current_processing_hours=10,
        current_accuracy=0.95,
        current_error_rate=0.02,
    )


@pytest.fixture
def period() -> SnapshotPeriod:
    return SnapshotPeriod(
        start_date=datetime(2026, 1, 1, tzinfo=timezone.utc),
        end_date=datetime(2026, 1, 1, tzinfo=timezone.utc) + timedelta(days=30),
    )


@pytest.fixture
def baseline_inputs() -> dict:
    return {
        "development_cost": 25_000,
        "current_saas_spend": 1_500,
        "team_size": 5,
        "current_processing_hours": 40,
    }
