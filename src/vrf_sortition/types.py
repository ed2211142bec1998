"""Data types for sortition parameters and results."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass, field

from vrf_sortition.exceptions import InvalidParametersError

# Stakes and vote counts are unsigned 64-bit quantities.
MAX_U64 = 2**64 - 1


def _check_u64(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParametersError(
            f"{name} must be an integer, got {type(value).__name__}"
        )
    if not 0 <= value <= MAX_U64:
        raise InvalidParametersError(f"{name} must be in [0, 2**64 - 1], got {value}")
    return value


@dataclass(frozen=True, slots=True)
class SortitionParameters:
    """Validated per-round inputs to a sortition draw.

    Attributes:
        threshold: Expected number of votes selected across all stake.
        stake: The participant's stake; draws never exceed it.
        total_stake: Sum of all stake in the round, strictly positive.
    """

    threshold: float
    stake: int
    total_stake: int

    @classmethod
    def create(cls, threshold: float, stake: int, total_stake: int) -> SortitionParameters:
        """Validate raw values and build the parameter set.

        Raises:
            InvalidParametersError: If total stake is zero, the threshold is
                negative or non-finite, a stake is not an unsigned 64-bit
                integer, or ``threshold / total_stake`` exceeds one.
        """
        stake = _check_u64("stake", stake)
        total_stake = _check_u64("total_stake", total_stake)
        if total_stake == 0:
            raise InvalidParametersError("total_stake must be positive")
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise InvalidParametersError(
                f"threshold must be a real number, got {type(threshold).__name__}"
            )
        threshold = float(threshold)
        if not math.isfinite(threshold) or threshold < 0.0:
            raise InvalidParametersError(
                f"threshold must be finite and non-negative, got {threshold!r}"
            )
        if threshold > total_stake:
            raise InvalidParametersError(
                f"probability threshold/total_stake = {threshold}/{total_stake} exceeds 1"
            )
        return cls(threshold=threshold, stake=stake, total_stake=total_stake)

    @property
    def probability(self) -> float:
        """Per-unit-of-stake success probability, in ``[0, 1]``."""
        return self.threshold / self.total_stake


@dataclass(frozen=True, slots=True)
class SelectionResult:
    """Outcome of :meth:`SortitionSelector.select`.

    Unpacks as ``(vote_count, proof)``; the diagnostic fields are excluded
    from unpacking and equality.

    Attributes:
        vote_count: Number of votes awarded, ``0 <= vote_count <= stake``.
        proof: VRF proof binding the draw to (public key, seed).
        vrf_hash: Hash derived from the proof.
        ratio: Unit-interval value the hash mapped to.
    """

    vote_count: int
    proof: bytes
    vrf_hash: bytes = field(default=b"", compare=False, repr=False)
    ratio: float = field(default=0.0, compare=False)

    def __iter__(self) -> Iterator[int | bytes]:
        yield self.vote_count
        yield self.proof
