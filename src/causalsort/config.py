"""
Centralized configuration for causalsort.

Uses Pydantic BaseSettings for environment variable integration
and validation.

Configuration sources (in order of precedence):
1. Explicit constructor arguments
2. Environment variables (CAUSALSORT_*)
3. .env file
4. Default values

Example:
    from causalsort.config import get_config

    config = get_config()
    print(config.duplicate_policy)  # From CAUSALSORT_DUPLICATE_POLICY or default

    # Override at runtime
    config = get_config(duplicate_policy="reject")
"""

from __future__ import annotations

from typing import Literal, Optional, get_args

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DuplicatePolicy = Literal["keep_first", "reject"]


def validate_duplicate_policy(value: str) -> DuplicatePolicy:
    """Normalise a duplicate policy name, raising ValueError if unknown."""
    policy = value.strip().lower()
    if policy not in get_args(DuplicatePolicy):
        choices = ", ".join(get_args(DuplicatePolicy))
        raise ValueError(f"Unknown duplicate policy {value!r} (expected one of: {choices})")
    return policy


class CausalSortConfig(BaseSettings):
    """
    Central configuration for causalsort.

    All settings can be overridden via environment variables
    prefixed with CAUSALSORT_.

    Example:
        export CAUSALSORT_DUPLICATE_POLICY=reject
        export CAUSALSORT_LOG_LEVEL=debug
    """

    model_config = SettingsConfigDict(
        env_prefix="CAUSALSORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        description="Logging level for causalsort",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log output format (json for log shippers, text for console)",
    )

    # Sorting
    duplicate_policy: DuplicatePolicy = Field(
        default="keep_first",
        description="What to do when the same identifier is supplied twice",
    )

    # Telemetry
    emit_telemetry: bool = Field(
        default=True,
        description="Emit OTel span events for each sort",
    )

    @field_validator("log_level", "log_format", "duplicate_policy", mode="before")
    @classmethod
    def normalize_case(cls, v: object) -> object:
        """Accept values like INFO or Keep_First from the environment."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


# Global singleton
_config: Optional[CausalSortConfig] = None


def get_config(**overrides) -> CausalSortConfig:
    """
    Get the global configuration instance.

    Creates a singleton on first call. Subsequent calls return
    the same instance unless overrides are provided.

    Args:
        **overrides: Override any config values

    Returns:
        CausalSortConfig instance
    """
    global _config

    if overrides or _config is None:
        _config = CausalSortConfig(**overrides)

    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
