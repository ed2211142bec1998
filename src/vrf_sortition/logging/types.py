"""Data types for the diagnostic logging subsystem."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SelectionRecord:
    """Immutable record of one ``select`` call.

    Attributes:
        timestamp_ns: Wall-clock time of the call (nanoseconds since epoch).
        elapsed_ms: Time spent in the full select pipeline (ms).
        vrf_suite: Name of the VRF capability that produced the proof.
        seed_hex: Hex-encoded seed.
        proof_hex: Hex-encoded proof.
        hash_hex: Hex-encoded VRF hash.
        ratio: Unit-interval value the hash mapped to.
        threshold: Expected selections across all stake.
        stake: Participant stake (binomial trials).
        total_stake: Total stake in the round.
        probability: ``threshold / total_stake``.
        vote_count: Votes awarded.
        config_hash: 16-char SHA-256 prefix of the active config.
    """

    timestamp_ns: int
    elapsed_ms: float

    vrf_suite: str
    seed_hex: str
    proof_hex: str
    hash_hex: str

    ratio: float
    threshold: float
    stake: int
    total_stake: int
    probability: float
    vote_count: int

    config_hash: str


@dataclass(frozen=True, slots=True)
class VerificationRecord:
    """Immutable record of one ``verify`` call.

    ``hash_hex``, ``ratio`` and ``expected_vote_count`` are ``None`` when
    the proof failed cryptographic verification.

    Attributes:
        timestamp_ns: Wall-clock time of the call (nanoseconds since epoch).
        elapsed_ms: Time spent in the full verify pipeline (ms).
        vrf_suite: Name of the VRF capability used to verify.
        seed_hex: Hex-encoded seed.
        proof_hex: Hex-encoded proof under test.
        hash_hex: Hex-encoded verified hash, if any.
        ratio: Unit-interval value of the verified hash, if any.
        stake: Participant stake.
        probability: ``threshold / total_stake``.
        claimed_vote_count: Vote count asserted by the prover.
        expected_vote_count: Vote count recomputed from the hash, if any.
        proof_valid: Whether the VRF proof verified.
        accepted: Final verdict returned to the caller.
        rejection_reason: Why the claim was rejected, or ``None`` if accepted.
        config_hash: 16-char SHA-256 prefix of the active config.
    """

    timestamp_ns: int
    elapsed_ms: float

    vrf_suite: str
    seed_hex: str
    proof_hex: str
    hash_hex: str | None

    ratio: float | None
    stake: int
    probability: float
    claimed_vote_count: object
    expected_vote_count: int | None

    proof_valid: bool
    accepted: bool
    rejection_reason: str | None

    config_hash: str
