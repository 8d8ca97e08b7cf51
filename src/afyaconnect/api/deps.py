"""Request dependencies shared by routers: bearer-token auth."""

from typing import Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from afyaconnect.core.errors import ForbiddenError, UnauthorizedError
from afyaconnect.services.auth import ROLE_ADMIN, auth_service, decode_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict[str, Any]:
    if credentials is None:
        raise UnauthorizedError("Access token required")
    payload = decode_token(credentials.credentials)
    if payload is None:
        raise UnauthorizedError("Invalid or expired token")
    return auth_service.get_user(payload["user_id"])


def require_admin(user: dict[str, Any] = Depends(get_current_user)) -> dict[str, Any]:
    if user.get("role") != ROLE_ADMIN:
        raise ForbiddenError("Admin access required")
    return user
