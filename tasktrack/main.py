"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tasktrack import __version__
from tasktrack.application.assistant import get_assistant_runtime
from tasktrack.config import Settings, get_settings
from tasktrack.infrastructure.database import close_db, init_db
from tasktrack.infrastructure.middleware import (
    RequestContextMiddleware,
    error_handler_middleware,
)
from tasktrack.infrastructure.telemetry import (
    configure_logging,
    configure_tracing,
    get_logger,
    instrument_fastapi,
    instrument_httpx,
    set_service_info,
    shutdown_tracing,
)
from tasktrack.presentation.http import api_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the task store on startup; release it and the generation client on shutdown."""
    settings: Settings = app.state.settings

    await init_db(settings, create_tables=settings.database_create_tables)
    runtime = get_assistant_runtime()
    logger.info(
        "TaskTrack backend started",
        extra={
            "version": settings.version,
            "environment": settings.environment,
            "generation_configured": runtime.generation_enabled,
        },
    )
    if not runtime.generation_enabled:
        logger.warning("GEMINI_API_KEY is not set; assistant replies use the local fallback")

    yield

    await runtime.close()
    await close_db()
    shutdown_tracing()
    logger.info("TaskTrack backend stopped")


def _configure_telemetry(settings: Settings) -> None:
    configure_logging(
        level=settings.log_level,
        format_type=settings.log_format,
        service_name=settings.otel_service_name,
    )
    configure_tracing(settings)
    instrument_httpx()
    set_service_info(version=settings.version, environment=settings.environment)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API.

    Args:
        settings: Settings override; defaults to the environment

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    _configure_telemetry(settings)

    app = FastAPI(
        title="TaskTrack API",
        description="Daily task tracking with a task-aware study assistant",
        version=__version__,
        lifespan=lifespan,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None,
    )
    app.state.settings = settings

    instrument_fastapi(app)

    # Last added runs first: request context wraps CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[] if settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    error_handler_middleware(app)
    app.include_router(api_router)

    return app


# Default app instance for uvicorn
app = create_app()
