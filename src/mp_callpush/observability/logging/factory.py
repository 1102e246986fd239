"""Observability – JsonLoggerFactory."""
from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog

from mp_callpush.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter

SERVICE_NAME = "mp-callpush"


def _add_service(service: str) -> Any:
    def processor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service)
        return event_dict

    return processor


class JsonLoggerFactory:
    """Route structlog events through a single stdlib root handler.

    Redaction runs right after context variables are merged, so values bound
    with ``structlog.contextvars`` are masked too.
    """

    @staticmethod
    def configure(
        level: int = logging.INFO,
        sensitive_fields: frozenset[str] | None = DEFAULT_SENSITIVE_FIELDS,
        *,
        json_output: bool = True,
        service: str = SERVICE_NAME,
        stream: TextIO | None = None,
    ) -> None:
        processors: list[Any] = [structlog.contextvars.merge_contextvars]
        if sensitive_fields:
            processors.append(SensitiveFieldsFilter(sensitive_fields))
        processors += [
            _add_service(service),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
        ]
        structlog.configure(
            processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        renderer: Any = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            )
        )
        root = logging.getLogger()
        root.handlers[:] = [handler]
        root.setLevel(level)


__all__ = ["SERVICE_NAME", "JsonLoggerFactory"]
