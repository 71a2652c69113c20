from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

from quallaa.models.enums import ReportingFrequency


class Settings(BaseSettings):
    project_path: str = "."
    log_level: str = "INFO"

    # Tracking behaviour
    tracking_enabled: bool = True
    baseline_required: bool = True
    baseline_stale_months: float = Field(default=6.0, gt=0)
    confidence_level: float = Field(default=0.95, gt=0, lt=1)
    # Informational: carried in the tracking config, no operation schedules on it
    reporting_frequency: ReportingFrequency = ReportingFrequency.MONTHLY

    # Benchmark targets (Forrester TEI study figures)
    roi_target: float = 2.48
    payback_months_target: float = 6.0
    adoption_rate_target: float = Field(default=0.66, ge=0, le=1)

    # Business constants -- simplifying assumptions, not empirically derived
    hourly_rate: float = Field(default=75.0, ge=0)
    review_cycle_correlation: float = 0.8

    # Monte Carlo confidence interval
    monte_carlo_iterations: int = Field(default=10_000, gt=0)
    base_uncertainty: float = Field(default=0.15, gt=0)
    comprehensive_data_factor: float = Field(default=0.8, gt=0)
    maturity_factor: float = Field(default=0.9, gt=0)
    min_uncertainty: float = Field(default=0.05, ge=0)
    max_uncertainty: float = Field(default=0.30, gt=0, lt=1)

    # Trend verdict threshold on the raw metric slope
    trend_threshold: float = Field(default=0.05, ge=0)

    class Config:
        env_file = ".env"
        env_prefix = "QUALLAA_"

    @model_validator(mode="after")
    def uncertainty_bounds_ordered(self) -> "Settings":
        if self.min_uncertainty > self.max_uncertainty:
            raise ValueError(
                f"min_uncertainty ({self.min_uncertainty}) must not exceed "
                f"max_uncertainty ({self.max_uncertainty})"
            )
        return self


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
