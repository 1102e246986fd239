"""Resilience – deadline propagation through a context variable.

Callers either pass a :class:`Deadline` explicitly or install one with
:meth:`DeadlineContext.scoped`; an explicit deadline wins.
"""
from __future__ import annotations

import asyncio
import contextlib
import inspect
from contextvars import ContextVar, Token
from typing import AsyncIterator, Awaitable, TypeVar

from mp_callpush.kernel.errors import TimeoutError as AppTimeoutError
from mp_callpush.resilience.deadline.deadline import Deadline

__all__ = [
    "DeadlineContext",
    "DeadlineExceededError",
    "deadline_aware",
]

T = TypeVar("T")

_current_deadline: ContextVar[Deadline | None] = ContextVar("mp_callpush_deadline", default=None)


class DeadlineExceededError(AppTimeoutError):
    """The deadline ran out before or while *operation* was running."""

    default_code = "deadline_exceeded"

    def __init__(self, operation: str, *, started: bool) -> None:
        when = "during" if started else "before"
        super().__init__(f"Deadline exceeded {when} {operation}", detail={"operation": operation})
        self.operation = operation


class DeadlineContext:
    @staticmethod
    def get() -> Deadline | None:
        return _current_deadline.get()

    @staticmethod
    def set(deadline: Deadline) -> Token[Deadline | None]:
        return _current_deadline.set(deadline)

    @staticmethod
    def reset(token: Token[Deadline | None]) -> None:
        _current_deadline.reset(token)

    @staticmethod
    def effective(deadline: Deadline | None = None) -> Deadline | None:
        return deadline or _current_deadline.get()

    @staticmethod
    def raise_if_exceeded(deadline: Deadline | None = None, *, operation: str = "operation") -> None:
        dl = DeadlineContext.effective(deadline)
        if dl is not None and dl.is_expired:
            raise DeadlineExceededError(operation, started=False)

    @staticmethod
    @contextlib.asynccontextmanager
    async def scoped(deadline: Deadline) -> AsyncIterator[Deadline]:
        token = _current_deadline.set(deadline)
        try:
            yield deadline
        finally:
            _current_deadline.reset(token)


async def deadline_aware(
    awaitable: Awaitable[T],
    deadline: Deadline | None = None,
    *,
    operation: str = "operation",
) -> T:
    """Await *awaitable* within the effective deadline.

    An already-expired deadline closes a coroutine without starting it.
    Raises :class:`DeadlineExceededError`.
    """
    dl = DeadlineContext.effective(deadline)
    if dl is None:
        return await awaitable
    if dl.is_expired:
        if inspect.iscoroutine(awaitable):
            awaitable.close()
        raise DeadlineExceededError(operation, started=False)
    timeout = asyncio.timeout(dl.remaining_seconds)
    try:
        async with timeout:
            return await awaitable
    except TimeoutError:
        if not timeout.expired():
            raise
        raise DeadlineExceededError(operation, started=True) from None
