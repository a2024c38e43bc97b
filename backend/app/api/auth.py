"""Bearer API-key authentication.

Keys come from settings (API_KEY, ADMIN_API_KEY). When a key is blank
the matching check is disabled (dev mode) and requests pass through.

Usage in routes:
    @router.post("/graph/{user_id}/generate", dependencies=[Depends(require_auth)])
    @router.delete("/graph/{user_id}", dependencies=[Depends(require_admin)])
"""

from __future__ import annotations

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import settings
from app.core.exceptions import AuthenticationError, ForbiddenError

_bearer_scheme = HTTPBearer(auto_error=False)

DEV_PRINCIPAL = "dev"


def _token(credentials: HTTPAuthorizationCredentials | None, key_name: str) -> str:
    if credentials is None:
        raise AuthenticationError(f"Missing Authorization header. Use: Bearer <{key_name}>")
    return credentials.credentials


async def require_auth(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> str:
    """Accept the user API key or the admin key.

    Raises:
        AuthenticationError: Token missing or not recognised.
    """
    if not settings.api_key:
        return DEV_PRINCIPAL

    token = _token(credentials, "api_key")
    if token in {settings.api_key, settings.admin_api_key} - {""}:
        return token
    raise AuthenticationError("Invalid API key")


async def require_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> str:
    """Accept only the admin key.

    Raises:
        AuthenticationError: Token missing.
        ForbiddenError: Token is not the admin key.
    """
    if not settings.admin_api_key:
        return DEV_PRINCIPAL

    token = _token(credentials, "admin_api_key")
    if token == settings.admin_api_key:
        return token
    raise ForbiddenError("Admin access required")
