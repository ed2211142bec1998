"""vrf-sortition: Algorand-style cryptographic sortition over a VRF.

Turns a participant's stake and a verifiable random function output into
a privately drawn, publicly verifiable vote count for one round of a
stake-weighted consensus protocol.
"""

from __future__ import annotations

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("vrf-sortition")
except PackageNotFoundError:
    __version__ = "0.0.0"

from vrf_sortition.config import SortitionConfig, load_config
from vrf_sortition.exceptions import (
    ConfigValidationError,
    HashMappingError,
    InvalidParametersError,
    SortitionError,
    VrfProofError,
    VrfVerificationError,
)
from vrf_sortition.interval import map_to_unit_interval, max_value
from vrf_sortition.quantile import BinomialQuantile, binomial_cdf
from vrf_sortition.selector import SortitionSelector, build_vrf, select, verify
from vrf_sortition.types import SelectionResult, SortitionParameters

__all__ = [
    "BinomialQuantile",
    "ConfigValidationError",
    "HashMappingError",
    "InvalidParametersError",
    "SelectionResult",
    "SortitionConfig",
    "SortitionError",
    "SortitionParameters",
    "SortitionSelector",
    "VrfProofError",
    "VrfVerificationError",
    "__version__",
    "binomial_cdf",
    "build_vrf",
    "load_config",
    "map_to_unit_interval",
    "max_value",
    "select",
    "verify",
]
