"""ECVRF-SECP256K1-SHA256-TAI capability.

Elliptic-curve VRF over secp256k1 with SHA-256 and try-and-increment
hash-to-curve, following the structure of draft-irtf-cfrg-vrf (ECVRF
suite byte ``0xFE``). Curve arithmetic, point encoding and RFC 6979
deterministic nonces are delegated to the ``ecdsa`` package.

Wire layout:
    public key: 33-byte SEC1 compressed point ``Y = x*B``
    proof:      ``Gamma`` (33) || ``c`` (16) || ``s`` (32) = 81 bytes
    hash:       32 bytes, ``SHA256(suite || 0x03 || Gamma)`` (cofactor 1)
"""

from __future__ import annotations

import hashlib

from ecdsa import SECP256k1
from ecdsa.ellipticcurve import INFINITY, PointJacobi
from ecdsa.errors import MalformedPointError
from ecdsa.rfc6979 import generate_k

from vrf_sortition.exceptions import VrfProofError, VrfVerificationError
from vrf_sortition.vrf.base import VrfCapability
from vrf_sortition.vrf.registry import register_vrf

_SUITE = b"\xfe"
_CURVE = SECP256k1.curve
_GENERATOR = SECP256k1.generator
_ORDER = SECP256k1.order
_FIELD_PRIME = _CURVE.p()

_POINT_LENGTH = 33
_CHALLENGE_LENGTH = 16
_SCALAR_LENGTH = 32
_PROOF_LENGTH = _POINT_LENGTH + _CHALLENGE_LENGTH + _SCALAR_LENGTH
_HASH_LENGTH = 32


def _encode(point: PointJacobi) -> bytes:
    return point.to_bytes("compressed")


def _decode_point(data: bytes) -> PointJacobi | None:
    """Decode a canonical compressed point, or return ``None``."""
    if len(data) != _POINT_LENGTH:
        return None
    try:
        point = PointJacobi.from_bytes(
            _CURVE, data, valid_encodings=("compressed",), order=_ORDER
        )
    except MalformedPointError:
        return None
    # Rejects x-coordinates >= p, which decode to a reduced point.
    if _encode(point) != data:
        return None
    return point


def _hash_to_curve(public_key: bytes, seed: bytes) -> PointJacobi | None:
    """Try-and-increment hash of (*public_key*, *seed*) onto the curve."""
    prefix = _SUITE + b"\x01" + public_key + seed
    for ctr in range(256):
        digest = hashlib.sha256(prefix + bytes([ctr])).digest()
        if int.from_bytes(digest, "big") >= _FIELD_PRIME:
            continue
        point = _decode_point(b"\x02" + digest)
        if point is not None:
            return point
    return None


def _challenge(*points: PointJacobi) -> int:
    data = _SUITE + b"\x02" + b"".join(_encode(p) for p in points)
    return int.from_bytes(hashlib.sha256(data).digest()[:_CHALLENGE_LENGTH], "big")


@register_vrf("secp256k1_sha256_tai")
class EcvrfSecp256k1(VrfCapability):
    """ECVRF over secp256k1 with SHA-256 and try-and-increment.

    Proving is deterministic: the nonce is derived per RFC 6979 from the
    secret scalar and the hashed-to-curve point, so the same key and seed
    always yield the same proof. The instance holds no mutable state.
    """

    @property
    def name(self) -> str:
        """Return ``'secp256k1_sha256_tai'``."""
        return "secp256k1_sha256_tai"

    @property
    def hash_length(self) -> int:
        """Return 32."""
        return _HASH_LENGTH

    def derive_public_key(self, secret_key: bytes) -> bytes:
        """Return the compressed point ``x*B`` for secret scalar ``x``.

        Raises:
            VrfProofError: If *secret_key* is not a scalar in ``[1, n-1]``.
        """
        return _encode(_GENERATOR * self._secret_scalar(secret_key))

    def prove(self, secret_key: bytes, seed: bytes) -> bytes:
        """Construct the 81-byte proof ``Gamma || c || s``.

        Raises:
            VrfProofError: If the key is malformed or hashing to the curve
                fails.
        """
        x = self._secret_scalar(secret_key)
        if not isinstance(seed, (bytes, bytearray)):
            raise VrfProofError(f"Seed must be bytes, got {type(seed).__name__}")
        public_key = _encode(_GENERATOR * x)
        h = _hash_to_curve(public_key, bytes(seed))
        if h is None:
            raise VrfProofError("Hash-to-curve exhausted all 256 counter values")

        gamma = h * x
        k = generate_k(_ORDER, x, hashlib.sha256, hashlib.sha256(_encode(h)).digest())
        c = _challenge(h, gamma, _GENERATOR * k, h * k)
        s = (k + c * x) % _ORDER
        return (
            _encode(gamma)
            + c.to_bytes(_CHALLENGE_LENGTH, "big")
            + s.to_bytes(_SCALAR_LENGTH, "big")
        )

    def proof_to_hash(self, proof: bytes) -> bytes:
        """Return ``SHA256(suite || 0x03 || Gamma)``.

        Raises:
            VrfVerificationError: If *proof* cannot be decoded.
        """
        gamma, _, _ = self._decode_proof(proof)
        return self._gamma_to_hash(gamma)

    def verify(self, public_key: bytes, proof: bytes, seed: bytes) -> bytes:
        """Check ``c == H(H, Gamma, s*B - c*Y, s*H - c*Gamma)``.

        Raises:
            VrfVerificationError: On any decoding failure or a challenge
                mismatch.
        """
        if not isinstance(public_key, (bytes, bytearray)):
            raise VrfVerificationError("Public key must be bytes")
        public_key = bytes(public_key)
        y = _decode_point(public_key)
        if y is None:
            raise VrfVerificationError("Public key is not a valid compressed secp256k1 point")
        gamma, c, s = self._decode_proof(proof)
        if not isinstance(seed, (bytes, bytearray)):
            raise VrfVerificationError(f"Seed must be bytes, got {type(seed).__name__}")

        h = _hash_to_curve(public_key, bytes(seed))
        if h is None:
            raise VrfVerificationError("Hash-to-curve exhausted all 256 counter values")

        neg_c = (_ORDER - c) % _ORDER
        u = _GENERATOR.mul_add(s, y, neg_c)
        v = h.mul_add(s, gamma, neg_c)
        if u == INFINITY or v == INFINITY:
            raise VrfVerificationError("Proof yields the point at infinity")
        if _challenge(h, gamma, u, v) != c:
            raise VrfVerificationError("Proof does not verify against public key and seed")
        return self._gamma_to_hash(gamma)

    @staticmethod
    def _secret_scalar(secret_key: bytes) -> int:
        if not isinstance(secret_key, (bytes, bytearray)) or not secret_key:
            raise VrfProofError("Secret key must be non-empty bytes")
        x = int.from_bytes(secret_key, "big")
        if not 0 < x < _ORDER:
            raise VrfProofError("Secret key is not a valid secp256k1 scalar")
        return x

    @staticmethod
    def _decode_proof(proof: bytes) -> tuple[PointJacobi, int, int]:
        if not isinstance(proof, (bytes, bytearray)) or len(proof) != _PROOF_LENGTH:
            raise VrfVerificationError(f"Proof must be {_PROOF_LENGTH} bytes")
        proof = bytes(proof)
        gamma = _decode_point(proof[:_POINT_LENGTH])
        if gamma is None:
            raise VrfVerificationError("Proof Gamma is not a valid curve point")
        c = int.from_bytes(proof[_POINT_LENGTH : _POINT_LENGTH + _CHALLENGE_LENGTH], "big")
        s = int.from_bytes(proof[_POINT_LENGTH + _CHALLENGE_LENGTH :], "big")
        if s >= _ORDER:
            raise VrfVerificationError("Proof scalar s is not reduced modulo the group order")
        return gamma, c, s

    @staticmethod
    def _gamma_to_hash(gamma: PointJacobi) -> bytes:
        return hashlib.sha256(_SUITE + b"\x03" + _encode(gamma)).digest()
