"""Diagnostic logger for sortition events.

Uses the standard ``logging`` module with the ``"vrf_sortition"`` logger.
No ``print()`` statements. Supports three verbosity levels and an
in-memory diagnostic mode for post-hoc analysis.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from vrf_sortition.config import SortitionConfig
    from vrf_sortition.logging.types import SelectionRecord, VerificationRecord

logger = logging.getLogger("vrf_sortition")


class SortitionLogger:
    """Per-call diagnostic logger.

    Log levels:
        ``"none"``: No logging output. Records are still stored if
        ``diagnostic_mode=True``.

        ``"summary"``: One line per call with key values (vote count,
        ratio, probability, truncated hex of seed, proof and hash).

        ``"full"``: Full JSON dump of all record fields.

    Diagnostic mode stores all records in memory for post-hoc analysis
    via ``get_diagnostic_data()`` and ``get_summary_stats()``.
    """

    def __init__(self, config: SortitionConfig) -> None:
        """Initialize the logger from configuration.

        Args:
            config: Supplies ``log_level``, ``diagnostic_mode`` and
                ``log_hex_chars``.
        """
        self._log_level = config.log_level
        self._diagnostic_mode = config.diagnostic_mode
        self._hex_chars = config.log_hex_chars
        self._selections: list[SelectionRecord] = []
        self._verifications: list[VerificationRecord] = []

    def _short(self, value: str | None) -> str:
        if value is None:
            return "-"
        if len(value) <= self._hex_chars:
            return value
        return value[: self._hex_chars] + "…"

    def log_selection(self, record: SelectionRecord) -> None:
        """Log a single ``select`` outcome."""
        if self._diagnostic_mode:
            self._selections.append(record)

        if self._log_level == "none":
            return

        if self._log_level == "summary":
            logger.info(
                "select votes=%d stake=%d p=%.6g ratio=%.6f seed=%s proof=%s hash=%s "
                "suite=%s total=%.2fms",
                record.vote_count,
                record.stake,
                record.probability,
                record.ratio,
                self._short(record.seed_hex),
                self._short(record.proof_hex),
                self._short(record.hash_hex),
                record.vrf_suite,
                record.elapsed_ms,
            )
        elif self._log_level == "full":
            logger.info("selection_record: %s", json.dumps(asdict(record), default=str))

    def log_verification(self, record: VerificationRecord) -> None:
        """Log a single ``verify`` outcome.

        Rejections are logged at the same level as acceptances: invalid
        proofs from untrusted peers are routine, not errors.
        """
        if self._diagnostic_mode:
            self._verifications.append(record)

        if self._log_level == "none":
            return

        if self._log_level == "summary":
            if record.accepted:
                verdict = "accepted"
            elif not record.proof_valid:
                verdict = f"rejected [INVALID PROOF: {record.rejection_reason}]"
            else:
                verdict = f"rejected [COUNT MISMATCH: {record.rejection_reason}]"
            logger.info(
                "verify %s claimed=%s expected=%s stake=%d p=%.6g seed=%s proof=%s "
                "suite=%s total=%.2fms",
                verdict,
                record.claimed_vote_count,
                "-" if record.expected_vote_count is None else record.expected_vote_count,
                record.stake,
                record.probability,
                self._short(record.seed_hex),
                self._short(record.proof_hex),
                record.vrf_suite,
                record.elapsed_ms,
            )
        elif self._log_level == "full":
            logger.info("verification_record: %s", json.dumps(asdict(record), default=str))

    def get_diagnostic_data(self) -> dict[str, list[Any]]:
        """Return all stored records (requires ``diagnostic_mode=True``).

        Returns:
            Dictionary with ``"selections"`` and ``"verifications"`` lists.
            Both are empty if diagnostic_mode is False.
        """
        return {
            "selections": list(self._selections),
            "verifications": list(self._verifications),
        }

    def get_summary_stats(self) -> dict[str, Any]:
        """Compute summary statistics over all stored records.

        Returns:
            Dictionary with aggregate stats, or empty dict if no records.
        """
        if not self._selections and not self._verifications:
            return {}

        stats: dict[str, Any] = {
            "total_selections": len(self._selections),
            "total_verifications": len(self._verifications),
        }

        if self._selections:
            n = len(self._selections)
            votes = [r.vote_count for r in self._selections]
            ratios = [r.ratio for r in self._selections]
            stats.update(
                {
                    "mean_vote_count": sum(votes) / n,
                    "max_vote_count": max(votes),
                    "mean_ratio": sum(ratios) / n,
                    "mean_select_ms": sum(r.elapsed_ms for r in self._selections) / n,
                }
            )

        if self._verifications:
            n = len(self._verifications)
            invalid_proofs = sum(1 for r in self._verifications if not r.proof_valid)
            mismatches = sum(
                1 for r in self._verifications if r.proof_valid and not r.accepted
            )
            stats.update(
                {
                    "invalid_proof_count": invalid_proofs,
                    "count_mismatch_count": mismatches,
                    "rejection_rate": (invalid_proofs + mismatches) / n,
                    "mean_verify_ms": sum(r.elapsed_ms for r in self._verifications) / n,
                }
            )

        return stats
