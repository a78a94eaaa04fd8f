"""Errors raised by TaskTrack services.

Each error carries a stable `code` for API clients, a human-readable
`message`, structured `details` and whether retrying could succeed. The HTTP
layer maps the families below to status codes; the assistant pipeline never
lets a provider error reach the caller.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass
class AppError(Exception):
    code: str
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)
    retryable: bool = False
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "retryable": self.retryable,
            "timestamp": self.timestamp.isoformat(),
        }


# Lookups (404)


@dataclass
class NotFoundError(AppError):
    code: str = "NOT_FOUND"


@dataclass
class UserNotFoundError(NotFoundError):
    code: str = "USER_NOT_FOUND"


@dataclass
class TaskNotFoundError(NotFoundError):
    """Missing, or owned by someone other than the caller."""

    code: str = "TASK_NOT_FOUND"


# Input (400)


@dataclass
class ValidationError(AppError):
    code: str = "VALIDATION_ERROR"


# Bearer token and role checks (401 / 403)


@dataclass
class AuthError(AppError):
    code: str = "AUTH_ERROR"


@dataclass
class TokenExpiredError(AuthError):
    code: str = "TOKEN_EXPIRED"
    retryable: bool = True  # with a fresh token


@dataclass
class TokenInvalidError(AuthError):
    code: str = "TOKEN_INVALID"


@dataclass
class InsufficientPermissionsError(AuthError):
    code: str = "INSUFFICIENT_PERMISSIONS"


# Generation service


@dataclass
class ProviderError(AppError):
    """The generation service call failed.

    `retryable` marks the failures the retrying client backs off on.
    """

    code: str = "PROVIDER_ERROR"
    provider: str = ""


@dataclass
class ProviderRateLimitError(ProviderError):
    """HTTP 429."""

    code: str = "PROVIDER_RATE_LIMITED"
    retryable: bool = True


@dataclass
class ProviderTimeoutError(ProviderError):
    code: str = "PROVIDER_TIMEOUT"
    retryable: bool = True


@dataclass
class ProviderTransportError(ProviderError):
    """Connection refused or reset, DNS failure and the like."""

    code: str = "PROVIDER_TRANSPORT_ERROR"
    retryable: bool = True


@dataclass
class ProviderHTTPError(ProviderError):
    """Any non-2xx answer other than 429."""

    code: str = "PROVIDER_HTTP_ERROR"
    status_code: int = 0


@dataclass
class ProviderMalformedResponseError(ProviderError):
    """2xx answer without reply text."""

    code: str = "PROVIDER_MALFORMED_RESPONSE"
