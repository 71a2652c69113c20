"""Tests for the statistical helpers: erf, p-values, uncertainty, Monte Carlo."""

import math
import random

import pytest

from quallaa.config.settings import Settings
from quallaa.engine.confidence import (
    calculate_p_value,
    erf,
    is_significant,
    monte_carlo_interval,
    normal_cdf,
    uncertainty_factor,
)
from quallaa.models.metrics import ConfidenceInterval


class TestErf:
    @pytest.mark.parametrize("x", [-3.0, -1.0, -0.25, 0.0, 0.5, 1.0, 2.0, 4.0])
    def test_close_to_exact(self, x):
        assert erf(x) == pytest.approx(math.erf(x), abs=2e-7)

    def test_odd_function(self):
        assert erf(-0.7) == pytest.approx(-erf(0.7))

    def test_normal_cdf_midpoint_and_tails(self):
        assert normal_cdf(0) == pytest.approx(0.5, abs=1e-7)
        assert normal_cdf(1.96) == pytest.approx(0.975, abs=1e-3)
        assert normal_cdf(-1.96) == pytest.approx(0.025, abs=1e-3)


class TestPValue:
    def test_far_from_zero_hits_floor(self):
        ci = ConfidenceInterval(lower=45.0, upper=56.0, confidence_level=0.95)
        assert calculate_p_value(51.2, ci) == 0.001

    def test_estimate_at_one_standard_error(self):
        # half-width 1.96 -> standard error 1 -> z = 1 -> p ~ 0.317
        ci = ConfidenceInterval(lower=-0.96, upper=2.96, confidence_level=0.95)
        assert calculate_p_value(1.0, ci) == pytest.approx(0.3173, abs=1e-3)

    def test_sign_of_roi_does_not_matter(self):
        ci = ConfidenceInterval(lower=-2.96, upper=0.96, confidence_level=0.95)
        assert calculate_p_value(-1.0, ci) == pytest.approx(0.3173, abs=1e-3)

    def test_zero_width_interval(self):
        ci = ConfidenceInterval(lower=0.0, upper=0.0, confidence_level=0.95)
        assert calculate_p_value(0.0, ci) == 1.0
        point = ConfidenceInterval(lower=10.0, upper=10.0, confidence_level=0.95)
        assert calculate_p_value(10.0, point) == 0.001

    def test_significance_threshold(self):
        assert is_significant(0.049)
        assert not is_significant(0.05)


class TestUncertaintyFactor:
    def test_comprehensive_data(self):
        assert uncertainty_factor([1, 2, 3], Settings()) == pytest.approx(0.108)

    def test_partial_data(self):
        assert uncertainty_factor([1, 2], Settings()) == pytest.approx(0.135)

    def test_clamped_to_upper_bound(self):
        settings = Settings(base_uncertainty=1.0)
        assert uncertainty_factor([1], settings) == pytest.approx(0.30)

    def test_clamped_to_lower_bound(self):
        settings = Settings(base_uncertainty=0.01)
        assert uncertainty_factor([1, 2, 3], settings) == pytest.approx(0.05)


class TestMonteCarloInterval:
    def test_zero_estimate_collapses(self):
        ci = monte_carlo_interval(0.0, 0.1, 0.95, 1_000, rng=random.Random(1))
        assert ci.lower == 0.0
        assert ci.upper == 0.0

    def test_percentile_bounds(self):
        ci = monte_carlo_interval(100.0, 0.2, 0.90, 10_000, rng=random.Random(3))
        # 90% of U[-0.2, 0.2] spans +/- 0.18
        assert ci.lower == pytest.approx(82.0, abs=0.5)
        assert ci.upper == pytest.approx(118.0, abs=0.5)
        assert ci.confidence_level == 0.90

    def test_small_sample_upper_index_in_range(self):
        ci = monte_carlo_interval(50.0, 0.1, 0.999, 10, rng=random.Random(5))
        assert ci.lower <= 50.0 * 1.1
        assert ci.upper <= 50.0 * 1.1
