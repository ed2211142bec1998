"""Abstract base class for all VRF capabilities.

Every verifiable random function backend, whether an elliptic-curve VRF
or a test double, implements this interface. Sortition only needs four
operations: derive a public key, prove, convert a proof to its hash, and
verify a proof against a public key and seed.

A capability instance is not assumed to be safe for concurrent use.
Callers that share one across threads wrap it in
:class:`~vrf_sortition.vrf.locked.LockedVrf`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class VrfCapability(ABC):
    """Abstract base for all VRF capabilities."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Suite identifier (e.g., ``'secp256k1_sha256_tai'``)."""

    @property
    @abstractmethod
    def hash_length(self) -> int:
        """Length ``L`` in bytes of every hash this capability outputs."""

    @abstractmethod
    def derive_public_key(self, secret_key: bytes) -> bytes:
        """Derive the public key for *secret_key*.

        Raises:
            VrfProofError: If *secret_key* is malformed.
        """

    @abstractmethod
    def prove(self, secret_key: bytes, seed: bytes) -> bytes:
        """Construct a proof for *seed* under *secret_key*.

        Raises:
            VrfProofError: If the key is malformed or construction fails.
        """

    @abstractmethod
    def proof_to_hash(self, proof: bytes) -> bytes:
        """Return the ``hash_length``-byte output bound to *proof*.

        Raises:
            VrfVerificationError: If *proof* cannot be decoded.
        """

    @abstractmethod
    def verify(self, public_key: bytes, proof: bytes, seed: bytes) -> bytes:
        """Verify *proof* against (*public_key*, *seed*) and return its hash.

        Raises:
            VrfVerificationError: If the proof is invalid or any input is
                malformed. No other exception is raised for bad input.
        """

    def close(self) -> None:
        """Release resources. Built-in capabilities hold none."""

    def health_check(self) -> dict[str, Any]:
        """Return a status dictionary for this capability."""
        return {"suite": self.name, "hash_length": self.hash_length}
