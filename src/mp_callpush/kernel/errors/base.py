"""Root error class for the mp-callpush error hierarchy."""

from __future__ import annotations

from typing import Any


class BaseError(Exception):
    """Root of every error raised by mp-callpush.

    Each error carries a machine-readable ``code`` and a ``detail`` mapping of
    log-safe context. Callers further up the stack may attach more context
    with :meth:`annotate` before re-raising.

    Args:
        message: Human-readable description. Must not contain secrets.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Extra log-safe context.
        cause: Lower-level exception that triggered this error.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail) if detail else {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def annotate(self, **context: Any) -> "BaseError":
        """Add *context* to ``detail`` without overwriting existing keys."""
        for key, value in context.items():
            self.detail.setdefault(key, value)
        return self

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict view used for structured log fields."""
        payload: dict[str, Any] = {"code": self.code, "message": self.message, "detail": dict(self.detail)}
        if self.cause is not None:
            payload["cause"] = type(self.cause).__name__
        return payload


__all__ = ["BaseError"]
