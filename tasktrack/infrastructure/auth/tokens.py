"""Bearer JWT verification."""

from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any
from uuid import UUID

import jwt

from tasktrack.config import Settings, get_settings
from tasktrack.domain.errors import TokenExpiredError, TokenInvalidError
from tasktrack.infrastructure.telemetry.logging import get_logger

logger = get_logger(__name__)


# Checked in order; subclasses before InvalidTokenError.
_REJECTIONS: tuple[tuple[type[jwt.InvalidTokenError], str], ...] = (
    (jwt.InvalidIssuerError, "Invalid token issuer"),
    (jwt.InvalidSignatureError, "Invalid token signature"),
    (jwt.MissingRequiredClaimError, "Token is missing a required claim"),
    (jwt.DecodeError, "Invalid token format"),
    (jwt.InvalidTokenError, "Token verification failed"),
)


class TokenVerifier:
    """Verifies shared-secret JWTs carrying `sub`, `email` and `role` claims."""

    def __init__(self, settings: Settings):
        self.secret = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.issuer = settings.jwt_issuer or None

    def verify_token(self, token: str) -> dict[str, Any]:
        """Decode and validate a bearer token.

        Raises:
            TokenExpiredError: The `exp` claim has passed
            TokenInvalidError: Any other signature, format or claim problem
        """
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                options={"require": ["sub", "exp"], "verify_iss": self.issuer is not None},
            )
        except jwt.ExpiredSignatureError as e:
            logger.info("Expired token rejected")
            raise TokenExpiredError(message="Token has expired") from e
        except jwt.InvalidTokenError as e:
            message = next(msg for kind, msg in _REJECTIONS if isinstance(e, kind))
            logger.warning("Token rejected", extra={"reason": message, "error": str(e)})
            raise TokenInvalidError(message=message, details={"error": str(e)}) from e

    def issue_token(
        self,
        user_id: UUID,
        email: str,
        role: str,
        expires_in: timedelta = timedelta(hours=12),
    ) -> str:
        """Sign a token for a user (used by seeding scripts and tests)."""
        now = datetime.now(UTC)
        claims: dict[str, Any] = {
            "sub": str(user_id),
            "email": email,
            "role": role,
            "iat": now,
            "exp": now + expires_in,
        }
        if self.issuer:
            claims["iss"] = self.issuer
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)


@lru_cache
def get_token_verifier() -> TokenVerifier:
    """Get cached token verifier instance."""
    return TokenVerifier(get_settings())
