"""Tests for the binomial CDF and quantile search."""

from __future__ import annotations

import math

import numpy as np
import pytest
from scipy import stats

from vrf_sortition.exceptions import InvalidParametersError
from vrf_sortition.quantile.binomial import (
    LINEAR_SCAN_LIMIT,
    BinomialQuantile,
    binomial_cdf,
)

_BELOW_ONE = math.nextafter(1.0, 0.0)


@pytest.fixture()
def quantile() -> BinomialQuantile:
    return BinomialQuantile()


class TestBinomialCdf:
    """Tests for the incomplete-beta CDF."""

    @pytest.mark.parametrize("trials", [1, 5, 20, 137])
    @pytest.mark.parametrize("probability", [0.01, 0.3, 0.5, 0.97])
    def test_matches_scipy_binom(self, trials: int, probability: float) -> None:
        for k in range(trials):
            expected = stats.binom.cdf(k, trials, probability)
            assert binomial_cdf(k, trials, probability) == pytest.approx(expected, rel=1e-8)

    def test_negative_k_is_zero(self) -> None:
        assert binomial_cdf(-1, 10, 0.5) == 0.0

    def test_k_at_or_above_trials_is_one(self) -> None:
        assert binomial_cdf(10, 10, 0.5) == 1.0
        assert binomial_cdf(11, 10, 0.5) == 1.0

    def test_non_decreasing(self) -> None:
        values = [binomial_cdf(k, 200, 0.4) for k in range(201)]
        assert all(a <= b for a, b in zip(values, values[1:]))

    def test_finite_for_huge_trials(self) -> None:
        value = binomial_cdf(500_000_000_000, 10**12, 0.5)
        assert math.isfinite(value)
        assert 0.0 < value < 1.0


class TestQuantileEdgeCases:
    """Defined behaviours at the boundaries of the domain."""

    def test_zero_trials(self, quantile: BinomialQuantile) -> None:
        for ratio in (0.0, 0.5, _BELOW_ONE):
            assert quantile.quantile(ratio, 0.5, 0) == 0

    def test_zero_probability(self, quantile: BinomialQuantile) -> None:
        for ratio in (0.0, 0.5, _BELOW_ONE):
            assert quantile.quantile(ratio, 0.0, 1000) == 0

    def test_unit_probability(self, quantile: BinomialQuantile) -> None:
        for ratio in (0.0, 0.5, _BELOW_ONE):
            assert quantile.quantile(ratio, 1.0, 1000) == 1000

    @pytest.mark.parametrize("probability", [0.1, 0.5, 0.9])
    @pytest.mark.parametrize("trials", [1, 10, 1000])
    def test_zero_ratio_gives_zero(
        self, quantile: BinomialQuantile, probability: float, trials: int
    ) -> None:
        assert quantile.quantile(0.0, probability, trials) == 0

    @pytest.mark.parametrize(("probability", "trials"), [(0.5, 10), (0.9, 50), (0.3, 3)])
    def test_ratio_approaching_one_gives_trials(
        self, quantile: BinomialQuantile, probability: float, trials: int
    ) -> None:
        assert quantile.quantile(_BELOW_ONE, probability, trials) == trials

    def test_ratio_on_cdf_boundary(self, quantile: BinomialQuantile) -> None:
        """``ratio == F(k)`` selects exactly ``k`` (ratio <= F(i) is inclusive)."""
        for k in range(10):
            boundary = binomial_cdf(k, 10, 0.5)
            assert quantile.quantile(boundary, 0.5, 10) == k

    def test_single_trial_is_bernoulli(self, quantile: BinomialQuantile) -> None:
        # F(0) = 1 - p = 0.75.
        assert quantile.quantile(0.74, 0.25, 1) == 0
        assert quantile.quantile(0.76, 0.25, 1) == 1


class TestQuantileSearch:
    """Binary search behaviour and agreement with the linear oracle."""

    def test_monotonic_in_ratio(self, quantile: BinomialQuantile) -> None:
        ratios = np.linspace(0.0, 0.999999, 400)
        for probability, trials in [(0.5, 100), (0.01, 5000), (0.9, 37)]:
            results = [quantile.quantile(float(r), probability, trials) for r in ratios]
            assert all(a <= b for a, b in zip(results, results[1:]))

    def test_binary_matches_linear_on_samples(self, quantile: BinomialQuantile) -> None:
        rng = np.random.default_rng(2024)
        for _ in range(300):
            trials = int(rng.integers(0, 400))
            probability = float(rng.random())
            ratio = float(rng.random())
            assert quantile.quantile(ratio, probability, trials) == quantile.quantile_linear(
                ratio, probability, trials
            ), (ratio, probability, trials)

    def test_binary_matches_linear_on_boundaries(self, quantile: BinomialQuantile) -> None:
        for trials, probability in [(25, 0.2), (60, 0.75)]:
            for k in range(trials):
                ratio = binomial_cdf(k, trials, probability)
                if ratio >= 1.0:
                    continue
                assert quantile.quantile(ratio, probability, trials) == quantile.quantile_linear(
                    ratio, probability, trials
                )

    def test_binary_matches_linear_on_edge_cases(self, quantile: BinomialQuantile) -> None:
        for probability, trials in [(0.0, 10), (1.0, 10), (0.5, 0)]:
            for ratio in (0.0, 0.5, _BELOW_ONE):
                assert quantile.quantile(ratio, probability, trials) == quantile.quantile_linear(
                    ratio, probability, trials
                )

    def test_median_for_large_stake(self, quantile: BinomialQuantile) -> None:
        trials = 10**12
        result = quantile.quantile(0.5, 0.5, trials)
        sigma = math.sqrt(trials * 0.25)
        assert abs(result - trials / 2) <= 5 * sigma

    def test_u64_stake_stays_in_range(self, quantile: BinomialQuantile) -> None:
        trials = 2**64 - 1
        result = quantile.quantile(0.3, 1e-9, trials)
        assert 0 <= result <= trials

    def test_accepts_numpy_integer_trials(self, quantile: BinomialQuantile) -> None:
        assert quantile.quantile(0.5, 0.5, np.int64(10)) == quantile.quantile(0.5, 0.5, 10)

    def test_linear_rejects_huge_trials(self, quantile: BinomialQuantile) -> None:
        with pytest.raises(ValueError, match="Linear scan"):
            quantile.quantile_linear(0.5, 0.5, LINEAR_SCAN_LIMIT + 1)


class TestQuantileValidation:
    """Invalid arguments raise InvalidParametersError."""

    @pytest.mark.parametrize("ratio", [1.0, -0.1, 1.5, float("nan")])
    def test_bad_ratio(self, quantile: BinomialQuantile, ratio: float) -> None:
        with pytest.raises(InvalidParametersError, match="ratio"):
            quantile.quantile(ratio, 0.5, 10)

    @pytest.mark.parametrize("probability", [-0.1, 1.0000001, float("nan")])
    def test_bad_probability(self, quantile: BinomialQuantile, probability: float) -> None:
        with pytest.raises(InvalidParametersError, match="probability"):
            quantile.quantile(0.5, probability, 10)

    @pytest.mark.parametrize("trials", [-1, 2.5, True])
    def test_bad_trials(self, quantile: BinomialQuantile, trials: object) -> None:
        with pytest.raises(InvalidParametersError, match="trials"):
            quantile.quantile(0.5, 0.5, trials)  # type: ignore[arg-type]

    def test_linear_validates_too(self, quantile: BinomialQuantile) -> None:
        with pytest.raises(InvalidParametersError):
            quantile.quantile_linear(1.0, 0.5, 10)
