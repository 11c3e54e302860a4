"""Structured logging setup for the bridge and its CLI."""

from __future__ import annotations

import sys
from typing import Any

import structlog

SECRET_KEYS = frozenset({"api_key", "apikey", "authorization", "token", "password"})
REDACTED = "[REDACTED]"


class SecretRedactor:
    """structlog processor that masks credential-like keys in events."""

    def __init__(self, keys: frozenset[str] = SECRET_KEYS) -> None:
        self.keys = keys

    def __call__(
        self, _logger: Any, _method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        return self._redact(event_dict)

    def _redact(self, data: dict[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, value in data.items():
            if key.lower() in self.keys:
                result[key] = REDACTED
            elif isinstance(value, dict):
                result[key] = self._redact(value)
            else:
                result[key] = value
        return result


def setup_logging(level: str = "INFO", format: str = "console") -> None:
    """Configure structured logging.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        format: "json" for machine consumption, "console" for humans
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        SecretRedactor(),
    ]

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    level_map = {
        "DEBUG": 10,
        "INFO": 20,
        "WARNING": 30,
        "ERROR": 40,
        "CRITICAL": 50,
    }
    level_num = level_map.get(level.upper(), 20)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )
