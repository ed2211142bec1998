"""Suite-name lookup for VRF capabilities.

The two built-in suites bind themselves here with ``@register_vrf`` when
:mod:`vrf_sortition.vrf` is imported. Suites shipped by other packages
are advertised under the ``vrf_sortition.vrf_suites`` entry-point group
and scanned once, the first time a lookup misses or the suite list is
requested. Only :class:`VrfCapability` subclasses are ever bound to a
name; anything else a plugin exports is skipped with a warning.
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import TYPE_CHECKING, ClassVar

from vrf_sortition.vrf.base import VrfCapability

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("vrf_sortition")

_ENTRY_POINT_GROUP = "vrf_sortition.vrf_suites"


def _is_capability(obj: object) -> bool:
    return isinstance(obj, type) and issubclass(obj, VrfCapability)


class VrfRegistry:
    """Maps suite names such as ``"secp256k1_sha256_tai"`` to capability classes.

    Names bound by ``@register_vrf`` win over plugin entry points that
    advertise the same name.
    """

    _suites: ClassVar[dict[str, type[VrfCapability]]] = {}
    _plugins_scanned: ClassVar[bool] = False

    @classmethod
    def register(cls, name: str) -> Callable[[type[VrfCapability]], type[VrfCapability]]:
        """Class decorator binding *name* to a :class:`VrfCapability` subclass.

        Example::

            @register_vrf("ed25519_sha512_tai")
            class Ed25519Vrf(VrfCapability):
                ...

        Raises:
            TypeError: If the decorated object is not a capability class.
        """

        def bind(vrf_cls: type[VrfCapability]) -> type[VrfCapability]:
            if not _is_capability(vrf_cls):
                raise TypeError(
                    f"VRF suite {name!r} must be a VrfCapability subclass, "
                    f"got {vrf_cls!r}"
                )
            cls._suites[name] = vrf_cls
            return vrf_cls

        return bind

    @classmethod
    def get(cls, name: str) -> type[VrfCapability]:
        """Return the capability class bound to *name*.

        Raises:
            KeyError: If no built-in or plugin suite is called *name*.
        """
        vrf_cls = cls._suites.get(name)
        if vrf_cls is None and not cls._plugins_scanned:
            cls._scan_plugins()
            vrf_cls = cls._suites.get(name)
        if vrf_cls is None:
            known = ", ".join(sorted(cls._suites)) or "(none)"
            raise KeyError(f"Unknown VRF suite: {name!r}. Available: {known}")
        return vrf_cls

    @classmethod
    def list_available(cls) -> list[str]:
        """Return every suite name, plugins included, in sorted order."""
        if not cls._plugins_scanned:
            cls._scan_plugins()
        return sorted(cls._suites)

    @classmethod
    def _scan_plugins(cls) -> None:
        cls._plugins_scanned = True
        try:
            entry_points = importlib.metadata.entry_points(group=_ENTRY_POINT_GROUP)
        except Exception:  # Broken distribution metadata must not break lookups.
            logger.warning("Could not read entry points for %s", _ENTRY_POINT_GROUP, exc_info=True)
            return

        for ep in entry_points:
            if ep.name in cls._suites:
                continue
            try:
                loaded = ep.load()
            except Exception:  # One bad plugin must not hide the others.
                logger.warning(
                    "Failed to load VRF suite entry point %r: %s",
                    ep.name,
                    ep.value,
                    exc_info=True,
                )
                continue
            if not _is_capability(loaded):
                logger.warning(
                    "Skipping VRF suite entry point %r: %s is not a VrfCapability subclass",
                    ep.name,
                    ep.value,
                )
                continue
            cls._suites[ep.name] = loaded
            logger.debug("Registered VRF suite %r from %s", ep.name, ep.value)

    @classmethod
    def _reset(cls) -> None:
        """Forget every suite and rescan plugins on next use. Test-only."""
        cls._suites.clear()
        cls._plugins_scanned = False


register_vrf = VrfRegistry.register
