"""Sortition selection and verification, the integration layer for vrf-sortition.

Orchestrates the per-participant pipeline:
    secret key + seed → VRF proof → hash → unit interval → binomial quantile → votes.

Verification replaces the first two steps with ``vrf.verify`` and then
recomputes the vote count from the verified hash. A proof is accepted only
if it verifies *and* the recomputed count equals the claimed one.
"""

from __future__ import annotations

import hashlib
import logging
import operator
import time
from typing import TYPE_CHECKING

from vrf_sortition.config import SortitionConfig, load_config
from vrf_sortition.exceptions import (
    ConfigValidationError,
    InvalidParametersError,
    VrfVerificationError,
)
from vrf_sortition.interval import map_to_unit_interval
from vrf_sortition.logging.logger import SortitionLogger
from vrf_sortition.logging.types import SelectionRecord, VerificationRecord
from vrf_sortition.quantile.binomial import BinomialQuantile
from vrf_sortition.types import SelectionResult, SortitionParameters
from vrf_sortition.vrf.locked import LockedVrf
from vrf_sortition.vrf.registry import VrfRegistry

if TYPE_CHECKING:
    from vrf_sortition.vrf.base import VrfCapability

logger = logging.getLogger("vrf_sortition")


def _config_hash(config: SortitionConfig) -> str:
    """First 16 hex characters of the SHA-256 digest of the config dump."""
    raw = config.model_dump_json().encode("utf-8")
    return hashlib.sha256(raw).hexdigest()[:16]


def _seed_bytes(seed: bytes) -> bytes:
    """Return *seed* as ``bytes``; anything not bytes-like is rejected."""
    if not isinstance(seed, (bytes, bytearray, memoryview)):
        raise InvalidParametersError(f"seed must be bytes, got {type(seed).__name__}")
    return bytes(seed)


def _claimed_count(value: object) -> int | None:
    """Interpret a peer's claimed vote count, or ``None`` if it is not an integer."""
    if isinstance(value, bool):
        return None
    try:
        return operator.index(value)  # type: ignore[arg-type]
    except TypeError:
        return None


def build_vrf(config: SortitionConfig) -> VrfCapability:
    """Instantiate the VRF capability named by ``config.vrf_suite``.

    The capability is wrapped in :class:`LockedVrf` when
    ``config.shared_vrf_lock`` is set.

    Raises:
        ConfigValidationError: If the suite is not registered or its
            class cannot be constructed without arguments.
    """
    try:
        vrf_cls = VrfRegistry.get(config.vrf_suite)
    except KeyError as exc:
        raise ConfigValidationError(str(exc.args[0])) from exc

    try:
        vrf: VrfCapability = vrf_cls()
    except Exception as exc:
        raise ConfigValidationError(
            f"VRF suite {config.vrf_suite!r} could not be instantiated: {exc}"
        ) from exc
    if config.shared_vrf_lock:
        return LockedVrf(vrf)
    return vrf


class SortitionSelector:
    """Cryptographic sortition over a VRF capability.

    One selector owns one capability. The capability is not assumed to be
    thread-safe: use one selector per worker, or enable
    ``shared_vrf_lock`` so calls are serialized.

    Args:
        config: Settings; loaded from the environment when ``None``.
        vrf: Capability to use instead of the one named in *config*.
    """

    def __init__(
        self,
        config: SortitionConfig | None = None,
        vrf: VrfCapability | None = None,
    ) -> None:
        self._config = config if config is not None else load_config()
        self._vrf = vrf if vrf is not None else build_vrf(self._config)
        self._quantile = BinomialQuantile()
        self._logger = SortitionLogger(self._config)
        self._config_hash = _config_hash(self._config)

        logger.debug(
            "SortitionSelector initialized: vrf_suite=%s, hash_length=%d, log_level=%s",
            self._vrf.name,
            self._vrf.hash_length,
            self._config.log_level,
        )

    def derive_public_key(self, secret_key: bytes) -> bytes:
        """Return the VRF public key for *secret_key*.

        Raises:
            VrfProofError: If *secret_key* is malformed.
        """
        return self._vrf.derive_public_key(secret_key)

    def vote_count(self, vrf_hash: bytes, params: SortitionParameters) -> int:
        """Turn a VRF hash into a vote count for *params*.

        This is the single computation shared by :meth:`select` and
        :meth:`verify`.
        """
        return self._draw(vrf_hash, params)[1]

    def _draw(self, vrf_hash: bytes, params: SortitionParameters) -> tuple[float, int]:
        ratio = map_to_unit_interval(vrf_hash)
        return ratio, self._quantile.quantile(ratio, params.probability, params.stake)

    def select(
        self,
        secret_key: bytes,
        seed: bytes,
        threshold: float,
        stake: int,
        total_stake: int,
    ) -> SelectionResult:
        """Draw this participant's vote count for the round.

        Args:
            secret_key: VRF secret key.
            seed: Round- and purpose-specific seed.
            threshold: Expected number of votes across all stake.
            stake: This participant's stake.
            total_stake: Total stake in the round.

        Returns:
            SelectionResult with the vote count and the proof.

        Raises:
            InvalidParametersError: If the parameters or the seed are
                invalid. Raised before the VRF is touched.
            VrfProofError: If the VRF cannot produce a proof.
        """
        t_start = time.perf_counter()
        params = SortitionParameters.create(threshold, stake, total_stake)
        seed = _seed_bytes(seed)

        proof = self._vrf.prove(secret_key, seed)
        vrf_hash = self._vrf.proof_to_hash(proof)
        ratio, votes = self._draw(vrf_hash, params)

        self._logger.log_selection(
            SelectionRecord(
                timestamp_ns=time.time_ns(),
                elapsed_ms=(time.perf_counter() - t_start) * 1000.0,
                vrf_suite=self._vrf.name,
                seed_hex=seed.hex(),
                proof_hex=proof.hex(),
                hash_hex=vrf_hash.hex(),
                ratio=ratio,
                threshold=params.threshold,
                stake=params.stake,
                total_stake=params.total_stake,
                probability=params.probability,
                vote_count=votes,
                config_hash=self._config_hash,
            )
        )
        return SelectionResult(vote_count=votes, proof=proof, vrf_hash=vrf_hash, ratio=ratio)

    def verify(
        self,
        public_key: bytes,
        claimed_vote_count: int,
        proof: bytes,
        seed: bytes,
        threshold: float,
        stake: int,
        total_stake: int,
    ) -> bool:
        """Check a peer's claimed vote count against its proof.

        Args:
            public_key: The peer's VRF public key.
            claimed_vote_count: Vote count the peer asserts. Any integer type
                is accepted; ``bool`` and non-integers never match.
            proof: The peer's VRF proof.
            seed: Round- and purpose-specific seed.
            threshold: Expected number of votes across all stake.
            stake: The peer's stake.
            total_stake: Total stake in the round.

        Returns:
            ``True`` iff the proof verifies and the recomputed vote count
            equals *claimed_vote_count*.

        Raises:
            InvalidParametersError: If the round parameters or the seed
                are invalid.
        """
        t_start = time.perf_counter()
        params = SortitionParameters.create(threshold, stake, total_stake)
        seed = _seed_bytes(seed)

        rejection: str | None = None
        try:
            vrf_hash = self._vrf.verify(public_key, proof, seed)
        except VrfVerificationError as exc:
            rejection = str(exc)
            vrf_hash = None

        ratio: float | None = None
        expected: int | None = None
        if vrf_hash is not None:
            ratio, expected = self._draw(vrf_hash, params)

        accepted = expected is not None and _claimed_count(claimed_vote_count) == expected
        if expected is not None and not accepted:
            rejection = f"claimed {claimed_vote_count!r}, recomputed {expected}"

        self._logger.log_verification(
            VerificationRecord(
                timestamp_ns=time.time_ns(),
                elapsed_ms=(time.perf_counter() - t_start) * 1000.0,
                vrf_suite=self._vrf.name,
                seed_hex=seed.hex(),
                proof_hex=bytes(proof).hex() if isinstance(proof, (bytes, bytearray)) else "",
                hash_hex=None if vrf_hash is None else vrf_hash.hex(),
                ratio=ratio,
                stake=params.stake,
                probability=params.probability,
                claimed_vote_count=claimed_vote_count,
                expected_vote_count=expected,
                proof_valid=vrf_hash is not None,
                accepted=accepted,
                rejection_reason=rejection,
                config_hash=self._config_hash,
            )
        )
        return accepted

    @property
    def vrf(self) -> VrfCapability:
        """The active VRF capability (may be a LockedVrf wrapper)."""
        return self._vrf

    @property
    def config(self) -> SortitionConfig:
        """The configuration this selector was built with."""
        return self._config

    @property
    def sortition_logger(self) -> SortitionLogger:
        """The diagnostic logger for this selector."""
        return self._logger

    def close(self) -> None:
        """Release all resources held by the selector."""
        self._vrf.close()


def select(
    secret_key: bytes,
    seed: bytes,
    threshold: float,
    stake: int,
    total_stake: int,
    vrf: VrfCapability | None = None,
) -> SelectionResult:
    """Run :meth:`SortitionSelector.select` with a selector built for this call."""
    return SortitionSelector(vrf=vrf).select(secret_key, seed, threshold, stake, total_stake)


def verify(
    public_key: bytes,
    claimed_vote_count: int,
    proof: bytes,
    seed: bytes,
    threshold: float,
    stake: int,
    total_stake: int,
    vrf: VrfCapability | None = None,
) -> bool:
    """Run :meth:`SortitionSelector.verify` with a selector built for this call."""
    return SortitionSelector(vrf=vrf).verify(
        public_key, claimed_vote_count, proof, seed, threshold, stake, total_stake
    )
