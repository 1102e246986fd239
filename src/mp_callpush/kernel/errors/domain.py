"""Domain errors – recipient token resolution failures.

These are expected outcomes: fatal to a single notification, never to the
process.
"""

from __future__ import annotations

from typing import Any

from mp_callpush.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a domain rule / invariant is violated."""

    default_code = "domain_error"


class RecipientTokenError(DomainError):
    """The recipient's real-time push token could not be resolved."""

    default_code = "recipient_token_error"

    def __init__(self, message: str, *, recipient_id: str, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.detail.setdefault("recipient_id", recipient_id)
        self.recipient_id = recipient_id


class NotFoundError(RecipientTokenError):
    """No device record exists for the recipient."""

    default_code = "not_found"

    def __init__(self, recipient_id: str, **kwargs: Any) -> None:
        super().__init__(
            f"Device record for recipient '{recipient_id}' not found",
            recipient_id=recipient_id,
            **kwargs,
        )


class MissingTokenError(RecipientTokenError):
    """The device record has no real-time push token."""

    default_code = "missing_token"

    def __init__(self, recipient_id: str, **kwargs: Any) -> None:
        super().__init__(
            f"Recipient '{recipient_id}' has no real-time push token",
            recipient_id=recipient_id,
            **kwargs,
        )


class InvalidFormatError(RecipientTokenError):
    """The stored token is not 64 hexadecimal characters.

    ``value`` carries the offending token for diagnostics only.
    """

    default_code = "invalid_token_format"

    def __init__(self, recipient_id: str, value: str, **kwargs: Any) -> None:
        super().__init__(
            f"Real-time push token for recipient '{recipient_id}' is malformed "
            f"(expected 64 hexadecimal characters, got {len(value)})",
            recipient_id=recipient_id,
            **kwargs,
        )
        self.value = value


__all__ = [
    "DomainError",
    "InvalidFormatError",
    "MissingTokenError",
    "NotFoundError",
    "RecipientTokenError",
]
