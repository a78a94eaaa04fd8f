"""Telemetry infrastructure (logging, tracing, metrics)."""

from tasktrack.infrastructure.telemetry.logging import (
    ContextLogger,
    LogContext,
    clear_request_context,
    configure_logging,
    current_log_context,
    get_logger,
    set_request_context,
)
from tasktrack.infrastructure.telemetry.metrics import (
    record_assistant_reply,
    record_cache_lookup,
    record_fallback,
    record_generation_attempt,
    record_http_request,
    record_pacing_wait,
    set_service_info,
)
from tasktrack.infrastructure.telemetry.tracing import (
    configure_tracing,
    create_span,
    instrument_fastapi,
    instrument_httpx,
    shutdown_tracing,
)

__all__ = [
    # Logging
    "ContextLogger",
    "LogContext",
    "current_log_context",
    "configure_logging",
    "get_logger",
    "set_request_context",
    "clear_request_context",
    # Tracing
    "configure_tracing",
    "create_span",
    "instrument_fastapi",
    "instrument_httpx",
    "shutdown_tracing",
    # Metrics
    "set_service_info",
    "record_http_request",
    "record_generation_attempt",
    "record_pacing_wait",
    "record_cache_lookup",
    "record_assistant_reply",
    "record_fallback",
]
