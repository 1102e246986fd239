"""Observability – logger lookup and token masking."""
from __future__ import annotations

from typing import Any

import structlog


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """``structlog.get_logger(name)``, with *initial_values* bound when given."""
    logger = structlog.get_logger(name)
    return logger.bind(**initial_values) if initial_values else logger


def token_prefix(value: str | None, length: int = 20) -> str:
    """Shorten a push token or credential for log output.

    The full value is never returned: anything up to *length* characters is
    cut to half its size.
    """
    if not value:
        return "<empty>"
    if len(value) <= length:
        return value[: max(1, len(value) // 2)] + "..."
    return value[:length] + "..."


__all__ = ["get_logger", "token_prefix"]
