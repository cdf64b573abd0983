"""FastAPI dependency — JWT authentication and role checks."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.config import Settings
from app.core.exceptions import AuthError, ForbiddenError
from app.application.services.auth_service import decode_access_token
from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.interfaces.deps import get_app_settings, get_user_repository

# auto_error off: a missing header is a 401, a bad token a 403
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    users: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_app_settings),
) -> User:
    """Extract and validate the current user from the bearer token."""
    if credentials is None:
        raise AuthError("Missing bearer token")

    payload = decode_access_token(credentials.credentials, settings)
    if payload is None:
        raise ForbiddenError("Invalid or expired token")

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise ForbiddenError("Invalid token")

    user = users.get_by_id(user_id)
    if user is None:
        raise ForbiddenError("User no longer exists")

    return user


def require_role(*roles: str):
    """Dependency factory: the current user must hold one of `roles`."""

    def checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise ForbiddenError(
                "Insufficient role",
                {"required": list(roles), "role": user.role},
            )
        return user

    return checker


require_admin = require_role("admin")
