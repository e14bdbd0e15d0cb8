"""Runtime configuration for the bigdecimal package.

The engine itself has nothing to tune: every operation is fully determined by
its operands and MathContext. What is configurable is how its diagnostics are
emitted. Settings come from environment variables with sensible defaults:

    BIGDECIMAL_LOG_LEVEL: Minimum level for structlog output (default: WARNING)
    BIGDECIMAL_JSON_LOGS: Render JSON lines instead of console output (default: false)

The package never configures logging on import; applications call
configure_logging() once at startup, as scripts do. Until structlog has been
configured, by configure_logging() or by the application itself, the package
emits no events, so structlog's default stdout printer stays quiet.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

import structlog

LOG_LEVEL_ENV = "BIGDECIMAL_LOG_LEVEL"
JSON_LOGS_ENV = "BIGDECIMAL_JSON_LOGS"

_TRUTHY = ("true", "1", "yes")


@dataclass(frozen=True)
class Settings:
    """Logging configuration for the decimal engine.

    Attributes:
        log_level: Standard logging level name (DEBUG, INFO, WARNING, ...)
        json_logs: If True, render events as JSON. If False, use the
            human-readable console renderer.
    """

    log_level: str = "WARNING"
    json_logs: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            Settings with unset variables left at their defaults
        """
        env = os.environ if environ is None else environ
        return cls(
            log_level=env.get(LOG_LEVEL_ENV, cls.log_level).upper(),
            json_logs=env.get(JSON_LOGS_ENV, "false").lower() in _TRUTHY,
        )

    @property
    def level(self) -> int:
        """Numeric logging level.

        Raises:
            ValueError: If log_level is not a known level name
        """
        level = logging.getLevelName(self.log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")
        return level


# Default configuration instance
DEFAULT_SETTINGS = Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog for bigdecimal diagnostics.

    Args:
        settings: Settings to apply (default: read from the environment)
    """
    if settings is None:
        settings = Settings.from_env()

    renderer = (
        structlog.processors.JSONRenderer() if settings.json_logs else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(settings.level),
    )


__all__ = [
    "LOG_LEVEL_ENV",
    "JSON_LOGS_ENV",
    "Settings",
    "DEFAULT_SETTINGS",
    "configure_logging",
]
