"""Configuration system for vrf-sortition.

Uses pydantic-settings for declarative, layered configuration:
init kwargs -> environment variables (SORTITION_*) -> .env file -> field defaults.

Only ambient concerns live here (which VRF suite to build, locking, and
diagnostic logging). Round parameters such as threshold and stake are
passed per call and validated by :class:`~vrf_sortition.types.SortitionParameters`.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vrf_sortition.exceptions import ConfigValidationError

_LOG_LEVELS: frozenset[str] = frozenset({"none", "summary", "full"})


class SortitionConfig(BaseSettings):
    """Configuration for vrf-sortition.

    Resolution order: init kwargs -> env vars (SORTITION_*) -> .env file -> defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="SORTITION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- VRF capability ---

    vrf_suite: str = Field(
        default="secp256k1_sha256_tai",
        description="Registered VRF capability name",
    )
    shared_vrf_lock: bool = Field(
        default=False,
        description="Serialize calls into the VRF capability with a mutex",
    )

    # --- Logging ---

    log_level: str = Field(
        default="summary",
        description="Logging verbosity: 'none', 'summary', 'full'",
    )
    diagnostic_mode: bool = Field(
        default=False,
        description="Store all selection/verification records in memory",
    )
    log_hex_chars: int = Field(
        default=16,
        description="Hex characters of seeds, proofs and hashes shown in summary logs",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        if value not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(_LOG_LEVELS)}, got {value!r}"
            )
        return value

    @field_validator("log_hex_chars")
    @classmethod
    def _check_log_hex_chars(cls, value: int) -> int:
        if value < 0:
            raise ValueError("log_hex_chars must be non-negative")
        return value


def load_config(**overrides: Any) -> SortitionConfig:
    """Build a config from the environment, applying keyword overrides.

    Args:
        **overrides: Field values that take precedence over env vars.

    Returns:
        A validated SortitionConfig.

    Raises:
        ConfigValidationError: If any field fails validation.
    """
    try:
        return SortitionConfig(**overrides)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc
