"""Observability – structured logging helpers."""
from mp_callpush.observability.logging.factory import SERVICE_NAME, JsonLoggerFactory
from mp_callpush.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter
from mp_callpush.observability.logging.processors import get_logger, token_prefix

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "JsonLoggerFactory",
    "SERVICE_NAME",
    "SensitiveFieldsFilter",
    "get_logger",
    "token_prefix",
]
