"""Prometheus metrics configuration."""

from prometheus_client import Counter, Histogram, Info

# Service info
SERVICE_INFO = Info("tasktrack", "TaskTrack backend service information")

# Request metrics
HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# Generation service metrics
GENERATION_ATTEMPTS_TOTAL = Counter(
    "generation_attempts_total",
    "Outbound generation attempts by outcome",
    ["provider", "model", "outcome"],  # outcome: success, rate_limited, http_error, ...
)

GENERATION_REQUEST_DURATION_SECONDS = Histogram(
    "generation_request_duration_seconds",
    "Generation request latency in seconds",
    ["provider", "model"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
)

PACING_WAIT_SECONDS = Histogram(
    "generation_pacing_wait_seconds",
    "Time spent waiting at the pacing gate",
    buckets=(0.0, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

# Assistant metrics
ASSISTANT_REPLIES_TOTAL = Counter(
    "assistant_replies_total",
    "Assistant replies by source",
    ["role", "source"],  # source: cache, model, fallback
)

ASSISTANT_FALLBACKS_TOTAL = Counter(
    "assistant_fallbacks_total",
    "Fallback replies by reason",
    ["reason"],  # reason: not_configured, exhausted, http_error, malformed
)

RESPONSE_CACHE_LOOKUPS_TOTAL = Counter(
    "response_cache_lookups_total",
    "Response cache lookups",
    ["result"],  # result: hit, miss, expired
)


def set_service_info(version: str, environment: str) -> None:
    """Set service information.

    Args:
        version: Service version
        environment: Deployment environment
    """
    SERVICE_INFO.info({
        "version": version,
        "environment": environment,
    })


def record_http_request(
    method: str,
    endpoint: str,
    status_code: int,
    duration_seconds: float,
) -> None:
    """Record an HTTP request."""
    HTTP_REQUESTS_TOTAL.labels(
        method=method,
        endpoint=endpoint,
        status_code=str(status_code),
    ).inc()
    HTTP_REQUEST_DURATION_SECONDS.labels(
        method=method,
        endpoint=endpoint,
    ).observe(duration_seconds)


def record_generation_attempt(
    provider: str,
    model: str,
    outcome: str,
    duration_seconds: float,
) -> None:
    """Record one outbound generation attempt.

    Args:
        provider: Provider name
        model: Model name
        outcome: Attempt outcome
        duration_seconds: Attempt duration in seconds
    """
    GENERATION_ATTEMPTS_TOTAL.labels(
        provider=provider,
        model=model,
        outcome=outcome,
    ).inc()
    GENERATION_REQUEST_DURATION_SECONDS.labels(
        provider=provider,
        model=model,
    ).observe(duration_seconds)


def record_pacing_wait(waited_seconds: float) -> None:
    PACING_WAIT_SECONDS.observe(waited_seconds)


def record_cache_lookup(result: str) -> None:
    RESPONSE_CACHE_LOOKUPS_TOTAL.labels(result=result).inc()


def record_assistant_reply(role: str, source: str) -> None:
    ASSISTANT_REPLIES_TOTAL.labels(role=role, source=source).inc()


def record_fallback(reason: str) -> None:
    ASSISTANT_FALLBACKS_TOTAL.labels(reason=reason).inc()
