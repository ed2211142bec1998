"""Mapping of VRF hashes onto the unit interval.

A hash of ``L`` bytes is read as a big-endian integer ``H`` and divided by
``2 ** (8 * L)``. The division is carried out exactly with
:class:`fractions.Fraction`; only the final ratio is rounded to a float,
so hashes longer than a double's 53-bit mantissa lose no information
before the rounding step.
"""

from __future__ import annotations

import math
from fractions import Fraction

from vrf_sortition.exceptions import HashMappingError

# Largest double strictly below 1.0 (1 - 2**-53).
_BELOW_ONE = math.nextafter(1.0, 0.0)


def max_value(length: int) -> int:
    """Return ``2 ** (8 * length)``, one past the largest ``length``-byte value.

    Args:
        length: Hash length in bytes.

    Returns:
        The exclusive upper bound as an arbitrary-precision integer.

    Raises:
        ValueError: If *length* is negative.
    """
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")
    return 1 << (8 * length)


def hash_to_integer(vrf_hash: bytes) -> int:
    """Interpret *vrf_hash* as a big-endian unsigned integer."""
    return int.from_bytes(vrf_hash, "big")


def map_to_unit_interval(vrf_hash: bytes) -> float:
    """Map a fixed-length hash to a float in ``[0, 1)``.

    The exact rational ``H / 2**(8L)`` is rounded to the nearest double.
    Ratios within ``2**-54`` of one would round up to ``1.0``; those are
    pinned to the largest double below one so the result stays strictly
    below one. Rounding to nearest is monotonic, so ``H1 < H2`` implies
    ``ratio(H1) <= ratio(H2)``.

    Args:
        vrf_hash: VRF output bytes (any non-zero length).

    Returns:
        Ratio in ``[0, 1)``.

    Raises:
        HashMappingError: If *vrf_hash* is empty or not bytes-like.
    """
    if not isinstance(vrf_hash, (bytes, bytearray, memoryview)):
        raise HashMappingError(
            f"VRF hash must be bytes, got {type(vrf_hash).__name__}"
        )
    raw = bytes(vrf_hash)
    if not raw:
        raise HashMappingError("Cannot map an empty hash to the unit interval")

    exact = Fraction(hash_to_integer(raw), max_value(len(raw)))
    ratio = float(exact)
    if ratio >= 1.0:
        return _BELOW_ONE
    return ratio
