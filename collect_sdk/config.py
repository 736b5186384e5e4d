"""Logging configuration for the Collect SDK.

This is the configuration object owned by the shared CollectLogger and read by
the network trace logger on every call.
"""

import os
from collections.abc import Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

NETWORK_DEBUG_ENV = "COLLECT_NETWORK_DEBUG"
LOG_LEVEL_ENV = "COLLECT_LOG_LEVEL"

_TRUTHY = {"1", "true", "yes", "on"}


class LogLevel(str, Enum):
    """Severity filter for SDK events."""

    INFO = "info"
    WARNING = "warning"
    NONE = "none"

    def allows(self, event_level: "LogLevel") -> bool:
        """
        Check whether an event of `event_level` passes this filter.

        - INFO lets every event through
        - WARNING lets only warnings through
        - NONE blocks everything
        """
        if self is LogLevel.NONE or event_level is LogLevel.NONE:
            return False
        if self is LogLevel.INFO:
            return True
        return event_level is LogLevel.WARNING


class LogConfiguration(BaseModel):
    """Configuration shared by the SDK loggers."""

    model_config = ConfigDict(validate_assignment=True)

    level: LogLevel = Field(
        default=LogLevel.NONE,
        description="Minimal severity of SDK events to print",
    )

    is_network_debug_enabled: bool = Field(
        default=False,
        description="Print traces of outgoing requests and their responses",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Accept level names in any case."""
        if isinstance(v, str) and not isinstance(v, LogLevel):
            return v.strip().lower()
        return v

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "LogConfiguration":
        """
        Build a configuration from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            A new LogConfiguration

        Raises:
            ValueError: If COLLECT_LOG_LEVEL holds an unknown level
        """
        env = os.environ if environ is None else environ

        network_debug = env.get(NETWORK_DEBUG_ENV, "").strip().lower() in _TRUTHY

        raw_level = env.get(LOG_LEVEL_ENV)
        if raw_level is None or not raw_level.strip():
            return cls(is_network_debug_enabled=network_debug)

        try:
            level = LogLevel(raw_level.strip().lower())
        except ValueError as e:
            choices = ", ".join(lvl.value for lvl in LogLevel)
            raise ValueError(f"Invalid {LOG_LEVEL_ENV} '{raw_level}': expected one of {choices}") from e

        return cls(level=level, is_network_debug_enabled=network_debug)
