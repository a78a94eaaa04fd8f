"""Authentication infrastructure - bearer JWT verification."""

from tasktrack.infrastructure.auth.context import AuthContext, get_current_user
from tasktrack.infrastructure.auth.tokens import TokenVerifier, get_token_verifier

__all__ = ["AuthContext", "get_current_user", "TokenVerifier", "get_token_verifier"]
