"""
Role-based authorization for protected routes.

Tokens are HS256 JWTs issued by the auth provider with a `role` claim.
The role claim is the only source of privilege.
"""
import logging
from typing import Any, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from ..config.settings import Settings
from ..engine.models import UserRole
from .state import get_app_settings

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def decode_token(token: str, settings: Settings) -> Optional[dict[str, Any]]:
    """
    Verify and decode a JWT.

    Returns:
        Decoded claims if valid, None if invalid, expired, or unconfigured
    """
    if not settings.jwt_secret:
        logger.error("JWT_SECRET is not configured; rejecting token")
        return None
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.warning("JWT verification failed: %s", e)
        return None


def require_roles(*roles: UserRole):
    """Dependency factory: allow only callers whose token carries one of `roles`."""
    allowed = {r.value for r in roles}

    def dependency(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        settings: Settings = Depends(get_app_settings),
    ) -> dict[str, Any]:
        if credentials is None or not credentials.credentials:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No token provided")

        claims = decode_token(credentials.credentials, settings)
        role = None if claims is None else claims.get("role")
        if not isinstance(role, str) or role not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return claims

    return dependency
