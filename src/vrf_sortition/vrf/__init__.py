"""VRF capability subsystem for vrf-sortition.

Re-exports the ABC, registry, and all built-in capabilities
for convenient access::

    from vrf_sortition.vrf import VrfCapability, VrfRegistry
    from vrf_sortition.vrf import EcvrfSecp256k1, MockVrf, LockedVrf
"""

from vrf_sortition.vrf.base import VrfCapability
from vrf_sortition.vrf.ecvrf import EcvrfSecp256k1
from vrf_sortition.vrf.locked import LockedVrf
from vrf_sortition.vrf.mock import MockVrf
from vrf_sortition.vrf.registry import VrfRegistry, register_vrf

__all__ = [
    "EcvrfSecp256k1",
    "LockedVrf",
    "MockVrf",
    "VrfCapability",
    "VrfRegistry",
    "register_vrf",
]
