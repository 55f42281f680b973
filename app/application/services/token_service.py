"""Token service: issue and validate signed session tokens (JWT)."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from app.config import get_settings
from app.core.exceptions import InvalidTokenError, TokenExpiredError


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    expires_at: datetime


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)
    )
    to_encode = {"sub": str(user_id), "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> TokenClaims:
    """Validate ``token`` and return its claims.

    Raises:
        TokenExpiredError: signature is valid but the expiry has passed
        InvalidTokenError: bad signature, malformed token or subject
    """
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTError as e:
        raise InvalidTokenError(f"Invalid token: {e}")

    subject = payload.get("sub")
    exp = payload.get("exp")
    if subject is None or exp is None:
        raise InvalidTokenError("Invalid token: missing claims")
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        raise InvalidTokenError("Invalid token: malformed subject")

    return TokenClaims(user_id=user_id, expires_at=datetime.fromtimestamp(exp, tz=timezone.utc))
