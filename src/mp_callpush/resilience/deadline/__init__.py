"""Resilience – Deadline propagation via contextvars."""
from mp_callpush.resilience.deadline.context import (
    DeadlineContext,
    DeadlineExceededError,
    deadline_aware,
)
from mp_callpush.resilience.deadline.deadline import Deadline

__all__ = ["Deadline", "DeadlineContext", "DeadlineExceededError", "deadline_aware"]
