"""Observability – SensitiveFieldsFilter.

Provider credentials, private keys and device push tokens must never reach
a log sink. Keys are matched case-insensitively; any key ending in
``_token`` is treated as sensitive as well.
"""
from __future__ import annotations

from typing import Any

DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset({
    "authorization",
    "private_key",
    "secret",
    "token",
})

_TOKEN_SUFFIX = "_token"


class SensitiveFieldsFilter:
    """Replace values of sensitive keys with ``[REDACTED]``.

    Instances are structlog processors: ``SensitiveFieldsFilter()(logger,
    method, event_dict)`` returns the redacted event dict.
    """

    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None, *, redact_token_suffix: bool = True) -> None:
        self._fields = frozenset(f.lower() for f in (sensitive_fields or DEFAULT_SENSITIVE_FIELDS))
        self._suffix = redact_token_suffix

    def is_sensitive(self, key: str) -> bool:
        lowered = key.lower()
        return lowered in self._fields or (self._suffix and lowered.endswith(_TOKEN_SUFFIX))

    def redact(self, data: dict[str, Any]) -> dict[str, Any]:
        """Return a copy of *data* with nested dicts and lists of dicts redacted."""
        return {k: self.REDACTED if self.is_sensitive(k) else self._walk(v) for k, v in data.items()}

    def _walk(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self.redact(value)
        if isinstance(value, (list, tuple)):
            return type(value)(self._walk(v) for v in value)
        return value

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        return self.redact(event_dict)


__all__ = ["DEFAULT_SENSITIVE_FIELDS", "SensitiveFieldsFilter"]
