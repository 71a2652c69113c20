"""Statistical helpers for ROI confidence intervals and significance."""

from __future__ import annotations

import math
import random
from typing import Optional, Sequence

from quallaa.config.settings import Settings
from quallaa.models.metrics import ConfidenceInterval

# Abramowitz & Stegun 7.1.26 coefficients, max absolute error 1.5e-7
_ERF_A1 = 0.254829592
_ERF_A2 = -0.284496736
_ERF_A3 = 1.421413741
_ERF_A4 = -1.453152027
_ERF_A5 = 1.061405429
_ERF_P = 0.3275911

MIN_P_VALUE = 0.001
SIGNIFICANCE_LEVEL = 0.05


def erf(x: float) -> float:
    """Closed-form approximation of the Gauss error function."""
    sign = -1.0 if x < 0 else 1.0
    x = abs(x)
    t = 1.0 / (1.0 + _ERF_P * x)
    y = 1.0 - (
        ((((_ERF_A5 * t + _ERF_A4) * t) + _ERF_A3) * t + _ERF_A2) * t + _ERF_A1
    ) * t * math.exp(-x * x)
    return sign * y


def normal_cdf(x: float) -> float:
    """Standard normal cumulative distribution function."""
    return 0.5 * (1.0 + erf(x / math.sqrt(2.0)))


def calculate_p_value(roi: float, interval: ConfidenceInterval) -> float:
    """Approximate two-sided p-value for "ROI differs from zero".

    The interval half-width is read as 1.96 standard errors. Result is
    floored at 0.001. A zero-width interval carries no spread information:
    it yields 1.0 for a zero ROI and the floor otherwise.
    """
    margin = abs(interval.upper - interval.lower) / 2
    if margin == 0:
        return 1.0 if roi == 0 else MIN_P_VALUE
    z_score = abs(roi) / (margin / 1.96)
    return max(MIN_P_VALUE, 2 * (1 - normal_cdf(abs(z_score))))


def is_significant(p_value: float) -> bool:
    return p_value < SIGNIFICANCE_LEVEL


def uncertainty_factor(metric_groups: Sequence[object], settings: Settings) -> float:
    """Relative measurement uncertainty applied in the Monte Carlo trials.

    Starts at the base uncertainty, shrinks when financial, productivity and
    quality groups are all present, then applies the fixed maturity factor.
    Clamped to [min_uncertainty, max_uncertainty].
    """
    factor = settings.base_uncertainty
    if len(metric_groups) >= 3:
        factor *= settings.comprehensive_data_factor
    factor *= settings.maturity_factor
    return max(settings.min_uncertainty, min(settings.max_uncertainty, factor))


def monte_carlo_interval(
    point_estimate: float,
    factor: float,
    confidence_level: float,
    iterations: int,
    rng: Optional[random.Random] = None,
) -> ConfidenceInterval:
    """Percentile interval around point_estimate from uniform relative noise.

    Each trial scales the estimate by (1 + u), u ~ U[-factor, +factor].
    """
    rng = rng or random.Random()
    samples = sorted(
        point_estimate + point_estimate * rng.uniform(-factor, factor)
        for _ in range(iterations)
    )
    alpha = (1 - confidence_level) / 2
    lower_index = math.floor(len(samples) * alpha)
    upper_index = min(len(samples) - 1, math.floor(len(samples) * (1 - alpha)))
    return ConfidenceInterval(
        lower=samples[lower_index],
        upper=samples[upper_index],
        confidence_level=confidence_level,
    )
