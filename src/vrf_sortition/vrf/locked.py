"""Mutex wrapper for sharing one VRF capability across threads.

``LockedVrf`` wraps any :class:`VrfCapability` and holds a
:class:`threading.Lock` for the duration of every call. All exceptions
from the wrapped capability propagate unchanged.
"""

from __future__ import annotations

import threading
from typing import Any

from vrf_sortition.vrf.base import VrfCapability


class LockedVrf(VrfCapability):
    """Composition wrapper granting exclusive access per call.

    Args:
        inner: The capability to serialize access to.
    """

    def __init__(self, inner: VrfCapability) -> None:
        self._inner = inner
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        """Return the wrapped capability's name."""
        return self._inner.name

    @property
    def hash_length(self) -> int:
        """Return the wrapped capability's hash length."""
        return self._inner.hash_length

    @property
    def inner(self) -> VrfCapability:
        """The wrapped capability."""
        return self._inner

    def derive_public_key(self, secret_key: bytes) -> bytes:
        with self._lock:
            return self._inner.derive_public_key(secret_key)

    def prove(self, secret_key: bytes, seed: bytes) -> bytes:
        with self._lock:
            return self._inner.prove(secret_key, seed)

    def proof_to_hash(self, proof: bytes) -> bytes:
        with self._lock:
            return self._inner.proof_to_hash(proof)

    def verify(self, public_key: bytes, proof: bytes, seed: bytes) -> bytes:
        with self._lock:
            return self._inner.verify(public_key, proof, seed)

    def close(self) -> None:
        with self._lock:
            self._inner.close()

    def health_check(self) -> dict[str, Any]:
        status = self._inner.health_check()
        status["locked"] = True
        return status
