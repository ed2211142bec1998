"""Deterministic mock VRF for testing.

**Not secure.** Anyone who knows the public key can forge a proof. The
mock exists so the numeric pipeline can be exercised with chosen hash
lengths and chosen hash values without paying for curve arithmetic.
"""

from __future__ import annotations

import hashlib
import hmac

from vrf_sortition.exceptions import VrfProofError, VrfVerificationError
from vrf_sortition.vrf.base import VrfCapability
from vrf_sortition.vrf.registry import register_vrf

_PUBLIC_KEY_LENGTH = 32


@register_vrf("mock")
class MockVrf(VrfCapability):
    """Keyed-hash VRF test double.

    public key = ``SHA256("pk" || sk)``; proof = ``pk || SHA256(pk || seed)``;
    hash = SHAKE-256 of the proof, stretched to *hash_length* bytes. When
    *fixed_hash* is given every proof maps to that hash instead, which makes
    the vote count fully controllable in tests.

    Args:
        hash_length: Output length ``L`` in bytes.
        fixed_hash: Optional constant hash; overrides *hash_length*.
    """

    def __init__(self, hash_length: int = 32, fixed_hash: bytes | None = None) -> None:
        if fixed_hash is not None:
            hash_length = len(fixed_hash)
        if hash_length <= 0:
            raise ValueError(f"hash_length must be positive, got {hash_length}")
        self._hash_length = hash_length
        self._fixed_hash = fixed_hash

    @property
    def name(self) -> str:
        """Return ``'mock'``."""
        return "mock"

    @property
    def hash_length(self) -> int:
        return self._hash_length

    def derive_public_key(self, secret_key: bytes) -> bytes:
        if not isinstance(secret_key, (bytes, bytearray)) or not secret_key:
            raise VrfProofError("Secret key must be non-empty bytes")
        return hashlib.sha256(b"pk" + bytes(secret_key)).digest()

    def prove(self, secret_key: bytes, seed: bytes) -> bytes:
        public_key = self.derive_public_key(secret_key)
        if not isinstance(seed, (bytes, bytearray)):
            raise VrfProofError(f"Seed must be bytes, got {type(seed).__name__}")
        return public_key + hashlib.sha256(public_key + bytes(seed)).digest()

    def proof_to_hash(self, proof: bytes) -> bytes:
        if not isinstance(proof, (bytes, bytearray)) or len(proof) != 2 * _PUBLIC_KEY_LENGTH:
            raise VrfVerificationError("Malformed mock proof")
        if self._fixed_hash is not None:
            return self._fixed_hash
        return hashlib.shake_256(bytes(proof)).digest(self._hash_length)

    def verify(self, public_key: bytes, proof: bytes, seed: bytes) -> bytes:
        vrf_hash = self.proof_to_hash(proof)
        if not isinstance(public_key, (bytes, bytearray)):
            raise VrfVerificationError("Public key must be bytes")
        if not isinstance(seed, (bytes, bytearray)):
            raise VrfVerificationError(f"Seed must be bytes, got {type(seed).__name__}")
        expected = bytes(public_key) + hashlib.sha256(bytes(public_key) + bytes(seed)).digest()
        if not hmac.compare_digest(expected, bytes(proof)):
            raise VrfVerificationError("Mock proof does not match public key and seed")
        return vrf_hash
