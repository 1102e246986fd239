"""Infrastructure errors – crypto failures, external integrations."""

from __future__ import annotations

from typing import Any

from mp_callpush.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class SigningError(InfrastructureError):
    """The provider key could not be loaded or the signature failed."""

    default_code = "signing_error"


class TimeoutError(InfrastructureError):  # noqa: A001
    """An I/O operation exceeded its deadline."""

    default_code = "infrastructure_timeout"


class ExternalServiceError(InfrastructureError):
    """An external service returned an unexpected response."""

    default_code = "external_service_error"

    def __init__(
        self,
        service: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"External service '{service}' error", **kwargs)
        self.service = service
        self.status_code = status_code
        if status_code is not None:
            self.detail.setdefault("status_code", status_code)


class DispatchError(ExternalServiceError):
    """A push sender failed to deliver a notification.

    ``reason`` holds the provider's rejection reason when one was returned.
    """

    default_code = "dispatch_error"

    def __init__(
        self,
        service: str,
        message: str | None = None,
        *,
        reason: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(service, message, **kwargs)
        self.reason = reason
        if reason is not None:
            self.detail.setdefault("reason", reason)


__all__ = [
    "DispatchError",
    "ExternalServiceError",
    "InfrastructureError",
    "SigningError",
    "TimeoutError",
]
