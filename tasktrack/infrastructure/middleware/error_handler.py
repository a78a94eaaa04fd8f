"""Exception handlers turning errors into `{"error": {...}}` JSON responses."""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tasktrack.domain.errors import (
    AppError,
    AuthError,
    InsufficientPermissionsError,
    NotFoundError,
    ProviderError,
    ValidationError,
)
from tasktrack.infrastructure.telemetry.logging import get_logger

logger = get_logger(__name__)

# Most specific family first.
_STATUS_BY_FAMILY: tuple[tuple[type[AppError], int], ...] = (
    (NotFoundError, 404),
    (ValidationError, 400),
    (InsufficientPermissionsError, 403),
    (AuthError, 401),
    (ProviderError, 502),
)


def _get_status_code(error: AppError) -> int:
    for family, status_code in _STATUS_BY_FAMILY:
        if isinstance(error, family):
            return status_code
    return 500


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
    retryable: bool = False,
) -> JSONResponse:
    body = {
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
            "retryable": retryable,
            "request_id": getattr(request.state, "request_id", None),
        }
    }
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def error_handler_middleware(app: FastAPI) -> None:
    """Register the global exception handlers on `app`."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        status_code = _get_status_code(exc)

        log = logger.warning if status_code < 500 else logger.error
        log(
            f"Request failed: {exc.message}",
            extra={"error_code": exc.code, "status_code": status_code, "path": request.url.path},
        )

        return _error_response(
            request, status_code, exc.code, exc.message, exc.details, exc.retryable
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        logger.warning(
            "Request validation failed",
            extra={"path": request.url.path, "error_count": len(errors)},
        )
        return _error_response(
            request, 400, "VALIDATION_ERROR", "Request validation failed", {"errors": errors}
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled exception",
            extra={"path": request.url.path, "error_type": type(exc).__name__},
        )
        return _error_response(request, 500, "INTERNAL_ERROR", "An unexpected error occurred")
