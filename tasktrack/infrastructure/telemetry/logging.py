"""Structured logging with request correlation.

Every record carries the request id, caller id and role of the request being
served (when there is one) and the active trace id, so a single chat turn can
be followed from the HTTP layer through the generation retries.
"""

import json
import logging
import sys
from contextvars import ContextVar
from dataclasses import asdict, dataclass, replace
from datetime import UTC, datetime
from typing import Any

from opentelemetry import trace


@dataclass(frozen=True)
class LogContext:
    """Correlation fields for the request currently being served."""

    request_id: str | None = None
    user_id: str | None = None
    role: str | None = None


_EMPTY = LogContext()
_log_context: ContextVar[LogContext] = ContextVar("log_context", default=_EMPTY)

# Attributes every LogRecord has; anything else came in through `extra=`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


def set_request_context(
    request_id: str | None = None,
    user_id: str | None = None,
    role: str | None = None,
) -> None:
    """Merge the given fields into the current request's log context."""
    updates = {
        k: v
        for k, v in {"request_id": request_id, "user_id": user_id, "role": role}.items()
        if v is not None
    }
    _log_context.set(replace(_log_context.get(), **updates))


def clear_request_context() -> None:
    _log_context.set(_EMPTY)


def current_log_context() -> LogContext:
    return _log_context.get()


def _trace_id() -> str | None:
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return None
    return format(span_context.trace_id, "032x")


def _correlation_fields() -> dict[str, Any]:
    fields = {k: v for k, v in asdict(current_log_context()).items() if v}
    if trace_id := _trace_id():
        fields["trace_id"] = trace_id
    return fields


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _RESERVED_ATTRS}


class StructuredFormatter(logging.Formatter):
    """One JSON object per line, for log shipping."""

    def __init__(self, service_name: str | None = None) -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self.service_name:
            payload["service"] = self.service_name

        payload.update(_correlation_fields())
        payload.update(_extra_fields(record))

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class TextFormatter(logging.Formatter):
    """Single-line human-readable output for local runs."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, UTC).strftime("%H:%M:%S")
        ctx = current_log_context()

        tags = []
        if ctx.request_id:
            tags.append(f"req={ctx.request_id[:8]}")
        if ctx.role:
            tags.append(ctx.role)
        prefix = f"[{' '.join(tags)}] " if tags else ""

        line = f"{ts} {record.levelname:<7} {record.name}: {prefix}{record.getMessage()}"

        extra = _extra_fields(record)
        if extra:
            line += " (" + ", ".join(f"{k}={v}" for k, v in extra.items()) + ")"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


class ContextLogger(logging.LoggerAdapter):
    """Adapter merging fields bound at creation into each call's `extra`."""

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        kwargs["extra"] = {**(self.extra or {}), **(kwargs.get("extra") or {})}
        return msg, kwargs


def configure_logging(
    level: str = "INFO",
    format_type: str = "json",
    service_name: str = "tasktrack-backend",
) -> None:
    """Route all logging to stdout with the chosen formatter.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format_type: 'json' or 'text'
        service_name: Value of the `service` field in JSON output
    """
    handler = logging.StreamHandler(sys.stdout)
    if format_type == "json":
        handler.setFormatter(StructuredFormatter(service_name=service_name))
    else:
        handler.setFormatter(TextFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper()))

    # Quiet chatty libraries
    for name in ("uvicorn.access", "httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if level.upper() == "DEBUG" else logging.WARNING
    )


def get_logger(name: str, **bound: Any) -> ContextLogger:
    """Get a logger whose records always include the `bound` fields."""
    return ContextLogger(logging.getLogger(name), bound)
