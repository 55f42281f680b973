"""FastAPI dependencies: JWT auth, role gates and ownership gates."""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.infrastructure.database import get_db
from app.application.services.token_service import decode_access_token
from app.core.exceptions import ForbiddenException, UnauthorizedException
from app.domain.models.user import User

# auto_error=False so optional routes can run anonymously
security = HTTPBearer(auto_error=False)


def _resolve_user(request: Request, token: str, db: Session) -> User:
    claims = decode_access_token(token)

    user = db.get(User, claims.user_id)
    if user is None or not user.is_active:
        raise UnauthorizedException("User not found or inactive")

    request.state.user_id = user.id
    return user


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Require a valid bearer token and return its active user."""
    if credentials is None:
        raise UnauthorizedException("Missing authorization header")
    return _resolve_user(request, credentials.credentials, db)


def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Anonymous when no token is sent; a token that is sent must be valid."""
    if credentials is None:
        return None
    return _resolve_user(request, credentials.credentials, db)


def require_roles(*roles: str):
    """Dependency factory: the current user's role must be one of ``roles``."""

    def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise ForbiddenException(
                "You do not have permission to access this resource",
                {"requiredRoles": list(roles)},
            )
        return user

    return dependency


require_admin = require_roles("admin")
require_staff = require_roles("admin", "moderator")
