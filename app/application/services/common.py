"""Helpers shared by the resource services."""

from typing import Any, Optional, Sequence, TypeVar

from app.core.exceptions import ConflictException, EntityNotFoundException, ForbiddenException
from app.domain.models.user import User
from app.domain.repositories.base import BaseRepository

T = TypeVar("T")


def get_or_404(repo: BaseRepository[T], id: int, label: str) -> T:
    obj = repo.get_by_id(id)
    if obj is None:
        raise EntityNotFoundException(f"{label} not found", {"id": id})
    return obj


def check_version(obj: Any, expected: Optional[int]) -> None:
    """Reject a write made against a stale copy (``If-Match`` mismatch)."""
    if expected is not None and obj.version != expected:
        raise ConflictException(
            "Resource was modified by another request",
            {"expectedVersion": expected, "currentVersion": obj.version},
        )


def options(values, labels: Optional[dict] = None) -> list[dict]:
    """``[{"value", "label"}]`` pairs for the frontend's select boxes."""
    labels = labels or {}
    return [{"value": v, "label": labels.get(v, v.replace("-", " ").title())} for v in values]


def ensure_owner_or_roles(
    user: User,
    owner_id: int,
    roles: Sequence[str] = ("admin",),
    message: str = "You can only modify your own content",
) -> None:
    """Ownership gate: the owner or a user holding one of ``roles`` passes."""
    if user.id != owner_id and user.role not in roles:
        raise ForbiddenException(message)
