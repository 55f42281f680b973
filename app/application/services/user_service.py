"""User administration service."""

from collections import Counter
from typing import Optional

import structlog

from app.application.services.common import get_or_404
from app.application.services.query_pipeline import Page, QuerySpec, build_filters, run_query
from app.core.exceptions import ValidationException
from app.domain.models.user import User, ROLES
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.common import ListParams
from app.domain.schemas.user import UserAdminUpdate
from app.infrastructure.database import utcnow

logger = structlog.get_logger(__name__)

USER_QUERY = QuerySpec(
    search_fields=("first_name", "last_name", "email"),
    sort_fields={
        "createdAt": "created_at",
        "lastLogin": "last_login",
        "email": "email",
        "firstName": "first_name",
        "lastName": "last_name",
        "role": "role",
    },
    default_sort="createdAt",
    default_order="desc",
    date_fields=frozenset({"created_at", "last_login"}),
)


def list_users(
    repo: UserRepository,
    params: ListParams,
    role: Optional[str] = None,
    is_active: Optional[bool] = None,
) -> Page:
    filters = build_filters({"role": (role, "exact"), "is_active": (is_active, "exact")})
    return run_query(repo.find(), USER_QUERY, params, filters)


def get_user(repo: UserRepository, user_id: int) -> User:
    return get_or_404(repo, user_id, "User")


def update_user(repo: UserRepository, user_id: int, body: UserAdminUpdate, admin: User) -> User:
    user = get_or_404(repo, user_id, "User")
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    if user.id == admin.id and (changes.get("role", user.role) != user.role or changes.get("is_active") is False):
        raise ValidationException(
            "You cannot change your own role or deactivate yourself",
            {"id": user_id},
        )
    changes["updated_at"] = utcnow()
    user = repo.update(user, changes)
    logger.info("User updated by admin", user_id=user.id, admin_id=admin.id, fields=sorted(changes))
    return user


def set_active(repo: UserRepository, user_id: int, active: bool, admin: User) -> User:
    user = get_or_404(repo, user_id, "User")
    if not active and user.id == admin.id:
        raise ValidationException("You cannot deactivate your own account", {"id": user_id})
    user = repo.update(user, {"is_active": active, "updated_at": utcnow()})
    logger.info("User activated" if active else "User deactivated", user_id=user.id, admin_id=admin.id)
    return user


def user_stats(repo: UserRepository) -> dict:
    users = repo.find()
    by_role = Counter(u.role for u in users)
    return {
        "totalUsers": len(users),
        "activeUsers": sum(1 for u in users if u.is_active),
        "inactiveUsers": sum(1 for u in users if not u.is_active),
        "verifiedUsers": sum(1 for u in users if u.email_verified),
        "usersByRole": {role: by_role.get(role, 0) for role in ROLES},
    }
