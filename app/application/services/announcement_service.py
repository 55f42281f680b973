"""Announcement service: staff-managed notices with a draft/published flag."""

from typing import Optional

import structlog

from app.application.services.common import check_version, get_or_404
from app.application.services.query_pipeline import Page, QuerySpec, build_filters, run_query
from app.core.exceptions import EntityNotFoundException
from app.domain.models.announcement import Announcement
from app.domain.models.user import User
from app.domain.repositories.base import BaseRepository
from app.domain.schemas.announcement import AnnouncementCreate, AnnouncementUpdate
from app.domain.schemas.common import ListParams
from app.infrastructure.database import utcnow

logger = structlog.get_logger(__name__)

ANNOUNCEMENT_QUERY = QuerySpec(
    search_fields=("title", "content"),
    sort_fields={
        "createdAt": "created_at",
        "updatedAt": "updated_at",
        "title": "title",
        "priority": "priority",
        "category": "category",
    },
    default_sort="createdAt",
    default_order="desc",
    date_fields=frozenset({"created_at", "updated_at"}),
)


def can_view(announcement: Announcement, viewer: Optional[User]) -> bool:
    return announcement.is_published or (viewer is not None and viewer.is_staff)


def list_announcements(
    repo: BaseRepository[Announcement],
    params: ListParams,
    viewer: Optional[User],
    category: Optional[str] = None,
    priority: Optional[str] = None,
) -> Page:
    filters = build_filters({"category": (category, "exact"), "priority": (priority, "exact")})
    return run_query(
        repo.find(), ANNOUNCEMENT_QUERY, params, filters,
        visible=lambda a: can_view(a, viewer),
    )


def get_announcement(repo: BaseRepository[Announcement], announcement_id: int, viewer: Optional[User]) -> Announcement:
    announcement = get_or_404(repo, announcement_id, "Announcement")
    if not can_view(announcement, viewer):
        raise EntityNotFoundException("Announcement not found", {"id": announcement_id})
    return announcement


def create_announcement(repo: BaseRepository[Announcement], body: AnnouncementCreate, author: User) -> Announcement:
    data = body.model_dump()
    data.update(author_id=author.id, author_name=author.full_name)
    announcement = repo.create(data)
    logger.info("Announcement created", announcement_id=announcement.id, author_id=author.id)
    return announcement


def update_announcement(
    repo: BaseRepository[Announcement],
    announcement_id: int,
    body: AnnouncementUpdate,
    expected_version: Optional[int] = None,
) -> Announcement:
    announcement = get_or_404(repo, announcement_id, "Announcement")
    check_version(announcement, expected_version)
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    changes["updated_at"] = utcnow()
    return repo.update(announcement, changes)


def delete_announcement(repo: BaseRepository[Announcement], announcement_id: int) -> None:
    get_or_404(repo, announcement_id, "Announcement")
    repo.delete(announcement_id)
    logger.info("Announcement deleted", announcement_id=announcement_id)
