"""Diagnostic logging subsystem for vrf-sortition.

Provides immutable per-call selection and verification records and a
configurable logger that supports none/summary/full verbosity and
in-memory diagnostic mode.
"""

from vrf_sortition.logging.logger import SortitionLogger
from vrf_sortition.logging.types import SelectionRecord, VerificationRecord

__all__ = [
    "SelectionRecord",
    "SortitionLogger",
    "VerificationRecord",
]
