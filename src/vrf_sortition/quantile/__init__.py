"""Binomial quantile subsystem for vrf-sortition.

Inverse-CDF lookup that turns a unit-interval ratio into a vote count.
Binary search is the production path; a vectorized linear scan is kept
as a reference oracle.
"""

from vrf_sortition.quantile.binomial import (
    LINEAR_SCAN_LIMIT,
    BinomialQuantile,
    binomial_cdf,
)

__all__ = [
    "LINEAR_SCAN_LIMIT",
    "BinomialQuantile",
    "binomial_cdf",
]
