"""Auth service: password hashing, registration, login and profile changes."""

from typing import Optional

import structlog
from passlib.context import CryptContext

from app.core.exceptions import ConflictException, UnauthorizedException, ValidationException
from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import ProfileUpdate, RegisterRequest
from app.infrastructure.database import utcnow

logger = structlog.get_logger(__name__)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_user(
    repo: UserRepository,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    role: str = "user",
) -> User:
    email = email.strip().lower()
    if repo.get_by_email(email):
        raise ConflictException("User with this email already exists", {"email": email})

    user = repo.create({
        "email": email,
        "password_hash": hash_password(password),
        "first_name": first_name,
        "last_name": last_name,
        "role": role,
    })
    logger.info("User created", user_id=user.id, role=role)
    return user


def register_user(repo: UserRepository, body: RegisterRequest) -> User:
    # Self-registration always yields a plain user; roles are granted by admins
    return create_user(repo, body.email, body.password, body.first_name, body.last_name)


def authenticate_user(repo: UserRepository, email: str, password: str) -> User:
    user = repo.get_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        raise UnauthorizedException("Invalid credentials")
    if not user.is_active:
        raise UnauthorizedException("Account is deactivated")

    user = repo.update(user, {"last_login": utcnow()})
    logger.info("User logged in", user_id=user.id)
    return user


def update_profile(repo: UserRepository, user: User, body: ProfileUpdate) -> User:
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    if "profile_picture" in changes:
        changes["profile_picture"] = str(changes["profile_picture"])
    changes["updated_at"] = utcnow()
    return repo.update(user, changes)


def change_password(repo: UserRepository, user: User, current_password: str, new_password: str) -> None:
    if not verify_password(current_password, user.password_hash):
        raise ValidationException(
            "Current password is incorrect",
            {"currentPassword": "Current password is incorrect"},
        )
    repo.update(user, {"password_hash": hash_password(new_password), "updated_at": utcnow()})
    logger.info("Password changed", user_id=user.id)


def ensure_default_admin(repo: UserRepository, email: str, password: str) -> Optional[User]:
    """Create the bootstrap admin account if it does not exist yet."""
    if not email or not password:
        return None
    existing = repo.get_by_email(email)
    if existing:
        return existing
    admin = create_user(repo, email, password, "Admin", "User", role="admin")
    logger.info("Default admin user created", email=admin.email)
    return admin
