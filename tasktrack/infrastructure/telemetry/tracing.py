"""OpenTelemetry tracing: provider setup, instrumentation and spans."""

from contextlib import contextmanager
from typing import Any, Generator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Span, Status, StatusCode

from tasktrack.config import Settings
from tasktrack.domain.errors import AppError
from tasktrack.infrastructure.telemetry.logging import get_logger

logger = get_logger(__name__)

TRACER_NAME = "tasktrack"

_tracer_provider: TracerProvider | None = None


def configure_tracing(settings: Settings) -> TracerProvider:
    """Install the process tracer provider.

    Spans are exported over OTLP/gRPC only when `otlp_endpoint` is set;
    otherwise they are created (so trace ids reach the logs) but dropped.
    Calling again replaces the previous provider's exporter configuration.
    """
    global _tracer_provider

    provider = TracerProvider(
        resource=Resource.create({
            "service.name": settings.otel_service_name,
            "service.version": settings.version,
            "deployment.environment": settings.environment,
        })
    )

    if settings.otlp_endpoint:
        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otlp_endpoint, insecure=True))
        )
        logger.info("OTLP span export enabled", extra={"endpoint": settings.otlp_endpoint})

    if _tracer_provider is None:
        trace.set_tracer_provider(provider)
    _tracer_provider = provider

    return provider


def _tracer() -> trace.Tracer:
    if _tracer_provider is not None:
        return _tracer_provider.get_tracer(TRACER_NAME)
    return trace.get_tracer(TRACER_NAME)


def instrument_fastapi(app: Any) -> None:
    FastAPIInstrumentor.instrument_app(app, tracer_provider=_tracer_provider)


def instrument_httpx() -> None:
    """Trace outbound httpx calls (the generation service)."""
    instrumentor = HTTPXClientInstrumentor()
    if not instrumentor.is_instrumented_by_opentelemetry:
        instrumentor.instrument(tracer_provider=_tracer_provider)


@contextmanager
def create_span(
    name: str,
    attributes: dict[str, Any] | None = None,
    kind: trace.SpanKind = trace.SpanKind.INTERNAL,
) -> Generator[Span, None, None]:
    """Run the block inside a span.

    None-valued attributes are skipped. An exception escaping the block marks
    the span as failed; application errors also tag it with their code.
    """
    with _tracer().start_as_current_span(
        name,
        kind=kind,
        attributes={k: v for k, v in (attributes or {}).items() if v is not None},
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        try:
            yield span
        except Exception as e:
            if isinstance(e, AppError):
                span.set_attribute("error.code", e.code)
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.record_exception(e)
            raise


def shutdown_tracing() -> None:
    """Flush pending spans and release the provider."""
    global _tracer_provider
    if _tracer_provider is not None:
        _tracer_provider.shutdown()
        _tracer_provider = None
