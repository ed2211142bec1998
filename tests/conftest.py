"""Shared pytest fixtures for vrf-sortition tests.

Provides reusable configuration objects, VRF capabilities, and a fixed
secp256k1 key pair that are used across multiple test modules.
"""

from __future__ import annotations

import pytest

from vrf_sortition.config import SortitionConfig
from vrf_sortition.selector import SortitionSelector
from vrf_sortition.vrf.ecvrf import EcvrfSecp256k1
from vrf_sortition.vrf.mock import MockVrf

# Fixed secret scalar so key-dependent assertions are reproducible.
SECRET_KEY = bytes.fromhex("c9afa9d845ba75166b5c215767b1d6934e50c3db36e89b127b8a622b120f6721")
SEED = b"random_seed"


@pytest.fixture
def silent_config() -> SortitionConfig:
    """Return a config with no logging for noise-free tests."""
    return SortitionConfig(log_level="none")


@pytest.fixture
def diagnostic_config() -> SortitionConfig:
    """Return a config with diagnostic mode and full logging enabled."""
    return SortitionConfig(log_level="full", diagnostic_mode=True)


@pytest.fixture
def ecvrf() -> EcvrfSecp256k1:
    """Return the ECVRF-SECP256K1-SHA256-TAI capability."""
    return EcvrfSecp256k1()


@pytest.fixture
def mock_vrf() -> MockVrf:
    """Return a deterministic mock VRF with 32-byte hashes."""
    return MockVrf()


@pytest.fixture
def secret_key() -> bytes:
    return SECRET_KEY


@pytest.fixture
def public_key(ecvrf: EcvrfSecp256k1) -> bytes:
    return ecvrf.derive_public_key(SECRET_KEY)


@pytest.fixture
def seed() -> bytes:
    return SEED


@pytest.fixture
def selector(silent_config: SortitionConfig, ecvrf: EcvrfSecp256k1) -> SortitionSelector:
    """Return a silent selector backed by the real ECVRF."""
    return SortitionSelector(config=silent_config, vrf=ecvrf)
