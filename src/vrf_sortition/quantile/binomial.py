"""Inverse CDF of the binomial distribution.

Given a ratio ``u`` in ``[0, 1)`` drawn from a VRF hash, the number of
votes awarded to a participant holding ``n`` units of stake is the
smallest ``i`` with ``u <= F(i)``, where ``F`` is the CDF of
``Binomial(n, p)``.

The CDF is evaluated through the regularized incomplete beta function::

    F(k) = I_{1-p}(n - k, k + 1)

which stays finite for stakes far beyond anything a factorial-based PMF
sum can handle.

Semantic interpretation of u:
    u near 0.0: zero votes (or as few as the distribution allows)
    u near 1.0: close to the full stake when p is large
"""

from __future__ import annotations

import math

import numpy as np
from scipy import special

from vrf_sortition.exceptions import InvalidParametersError

# Largest trial count the vectorized reference scan will evaluate.
LINEAR_SCAN_LIMIT = 1_000_000


def binomial_cdf(k: int, trials: int, probability: float) -> float:
    """Return ``P(X <= k)`` for ``X ~ Binomial(trials, probability)``.

    Args:
        k: Number of successes.
        trials: Number of Bernoulli trials (the stake).
        probability: Per-trial success probability in ``[0, 1]``.

    Returns:
        Cumulative probability in ``[0, 1]``.
    """
    if k < 0:
        return 0.0
    if k >= trials:
        return 1.0
    return float(special.betainc(float(trials - k), float(k + 1), 1.0 - probability))


class BinomialQuantile:
    """Stateless binomial quantile function.

    :meth:`quantile` is the production path: a binary search over the
    monotone CDF needing ``O(log n)`` evaluations. :meth:`quantile_linear`
    scans every ``F(i)`` and exists as a reference oracle for tests.
    Both share the same CDF and edge-case rules and therefore return
    identical results.
    """

    def quantile(self, ratio: float, probability: float, trials: int) -> int:
        """Return the smallest ``i`` in ``[0, trials]`` with ``ratio <= F(i)``.

        Args:
            ratio: Uniform value in ``[0, 1)``.
            probability: Success probability in ``[0, 1]``.
            trials: Number of trials (stake), ``>= 0``.

        Returns:
            The quantile, ``trials`` if no ``i < trials`` qualifies.

        Raises:
            InvalidParametersError: If any argument is outside its domain.
        """
        self._validate(ratio, probability, trials)
        degenerate = self._degenerate(probability, trials)
        if degenerate is not None:
            return degenerate

        # Invariant: F(hi) >= ratio. F(trials) == 1 > ratio always holds.
        lo, hi = 0, int(trials)
        while lo < hi:
            mid = (lo + hi) // 2
            if ratio <= binomial_cdf(mid, trials, probability):
                hi = mid
            else:
                lo = mid + 1
        return lo

    def quantile_linear(self, ratio: float, probability: float, trials: int) -> int:
        """Reference implementation scanning ``F(0) .. F(trials - 1)``.

        Args:
            ratio: Uniform value in ``[0, 1)``.
            probability: Success probability in ``[0, 1]``.
            trials: Number of trials, at most :data:`LINEAR_SCAN_LIMIT`.

        Returns:
            Same value as :meth:`quantile`.

        Raises:
            InvalidParametersError: If any argument is outside its domain.
            ValueError: If *trials* exceeds :data:`LINEAR_SCAN_LIMIT`.
        """
        self._validate(ratio, probability, trials)
        if trials > LINEAR_SCAN_LIMIT:
            raise ValueError(
                f"Linear scan limited to {LINEAR_SCAN_LIMIT} trials, got {trials}"
            )
        degenerate = self._degenerate(probability, trials)
        if degenerate is not None:
            return degenerate

        ks = np.arange(int(trials), dtype=np.float64)
        cdf = special.betainc(trials - ks, ks + 1.0, 1.0 - probability)
        hits = np.flatnonzero(ratio <= cdf)
        if hits.size == 0:
            return int(trials)
        return int(hits[0])

    @staticmethod
    def _degenerate(probability: float, trials: int) -> int | None:
        """Return the fixed answer for ``n == 0``, ``p == 0`` or ``p == 1``."""
        if trials == 0 or probability == 0.0:
            return 0
        if probability == 1.0:
            return int(trials)
        return None

    @staticmethod
    def _validate(ratio: float, probability: float, trials: int) -> None:
        """Check quantile arguments.

        Raises:
            InvalidParametersError: On the first invalid argument.
        """
        if not (0.0 <= ratio < 1.0):
            raise InvalidParametersError(f"ratio must be in [0, 1), got {ratio!r}")
        if math.isnan(probability) or not (0.0 <= probability <= 1.0):
            raise InvalidParametersError(
                f"probability must be in [0, 1], got {probability!r}"
            )
        if isinstance(trials, bool) or not isinstance(trials, (int, np.integer)):
            raise InvalidParametersError(
                f"trials must be an integer, got {type(trials).__name__}"
            )
        if trials < 0:
            raise InvalidParametersError(f"trials must be non-negative, got {trials}")
