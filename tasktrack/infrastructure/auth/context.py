"""Authentication context for request handling."""

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tasktrack.domain.entities import USER_ROLES, UserRole
from tasktrack.domain.errors import InsufficientPermissionsError, TokenInvalidError
from tasktrack.infrastructure.auth.tokens import TokenVerifier, get_token_verifier
from tasktrack.infrastructure.telemetry.logging import set_request_context

security = HTTPBearer(auto_error=False)


@dataclass
class AuthContext:
    """Authenticated user context available in request handlers."""

    user_id: UUID
    email: str
    role: UserRole
    raw_token: str = ""
    claims: dict[str, Any] = field(default_factory=dict)

    @property
    def is_counselor(self) -> bool:
        return self.role == "counselor"

    def require_role(self, role: UserRole) -> None:
        """Raise unless the caller has `role`."""
        if self.role != role:
            raise InsufficientPermissionsError(
                message=f"This operation requires the {role} role",
                details={"required_role": role, "role": self.role},
            )


def auth_context_from_claims(token: str, claims: dict[str, Any]) -> AuthContext:
    try:
        user_id = UUID(str(claims.get("sub")))
    except ValueError as e:
        raise TokenInvalidError(message="Invalid token: subject is not a user ID") from e

    role = claims.get("role", "individual")
    if role not in USER_ROLES:
        raise TokenInvalidError(
            message="Invalid token: unknown role",
            details={"role": role},
        )

    return AuthContext(
        user_id=user_id,
        email=claims.get("email", ""),
        role=role,
        raw_token=token,
        claims=claims,
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> AuthContext:
    """FastAPI dependency to get authenticated user context."""
    if credentials is None:
        raise TokenInvalidError(message="Missing bearer token")

    token = credentials.credentials
    auth = auth_context_from_claims(token, verifier.verify_token(token))
    set_request_context(user_id=str(auth.user_id), role=auth.role)
    return auth
