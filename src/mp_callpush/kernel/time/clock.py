"""Kernel time – Clock protocol + implementations.

Credential issue times and cache ages are computed from a ``Clock`` so
refresh behaviour can be driven deterministically in tests.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Port: source of timezone-aware "now"."""

    def now(self) -> datetime: ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(UTC)


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, fixed: datetime) -> None:
        if fixed.tzinfo is None:
            raise ValueError("FrozenClock requires a timezone-aware datetime")
        self._fixed = fixed

    def now(self) -> datetime:
        return self._fixed

    def advance(self, **kwargs: float) -> datetime:
        """Move forward by ``timedelta(**kwargs)`` and return the new time."""
        self._fixed += timedelta(**kwargs)
        return self._fixed


__all__ = ["Clock", "FrozenClock", "SystemClock"]
