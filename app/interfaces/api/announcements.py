"""Announcements API routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from app.application.services import announcement_service
from app.application.services.common import options
from app.domain.models.announcement import Announcement, ANNOUNCEMENT_CATEGORIES, ANNOUNCEMENT_PRIORITIES
from app.domain.models.user import User
from app.domain.repositories.base import BaseRepository
from app.domain.schemas.announcement import AnnouncementCreate, AnnouncementRead, AnnouncementUpdate
from app.domain.schemas.common import ListParams
from app.interfaces.api.deps import get_optional_user, require_staff
from app.interfaces.api.responses import paginated, set_etag
from app.interfaces.deps import get_announcement_repository, if_match_version, list_params

router = APIRouter(prefix="/api/announcements", tags=["Announcements"])


@router.get("")
def list_announcements(
    category: Optional[str] = None,
    priority: Optional[str] = None,
    params: ListParams = Depends(list_params()),
    repo: BaseRepository[Announcement] = Depends(get_announcement_repository),
    viewer: Optional[User] = Depends(get_optional_user),
):
    page = announcement_service.list_announcements(repo, params, viewer, category=category, priority=priority)
    return paginated(page, AnnouncementRead)


@router.get("/categories/list")
def announcement_categories():
    return {"categories": options(ANNOUNCEMENT_CATEGORIES)}


@router.get("/priorities/list")
def announcement_priorities():
    return {"priorities": options(ANNOUNCEMENT_PRIORITIES)}


@router.get("/{announcement_id}")
def get_announcement(
    announcement_id: int,
    response: Response,
    repo: BaseRepository[Announcement] = Depends(get_announcement_repository),
    viewer: Optional[User] = Depends(get_optional_user),
):
    announcement = announcement_service.get_announcement(repo, announcement_id, viewer)
    set_etag(response, announcement)
    return {"announcement": AnnouncementRead.model_validate(announcement)}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_announcement(
    body: AnnouncementCreate,
    repo: BaseRepository[Announcement] = Depends(get_announcement_repository),
    user: User = Depends(require_staff),
):
    announcement = announcement_service.create_announcement(repo, body, user)
    return {
        "message": "Announcement created successfully",
        "announcement": AnnouncementRead.model_validate(announcement),
    }


@router.put("/{announcement_id}")
def update_announcement(
    announcement_id: int,
    body: AnnouncementUpdate,
    expected_version: Optional[int] = Depends(if_match_version),
    repo: BaseRepository[Announcement] = Depends(get_announcement_repository),
    user: User = Depends(require_staff),
):
    announcement = announcement_service.update_announcement(repo, announcement_id, body, expected_version)
    return {
        "message": "Announcement updated successfully",
        "announcement": AnnouncementRead.model_validate(announcement),
    }


@router.delete("/{announcement_id}")
def delete_announcement(
    announcement_id: int,
    repo: BaseRepository[Announcement] = Depends(get_announcement_repository),
    user: User = Depends(require_staff),
):
    announcement_service.delete_announcement(repo, announcement_id)
    return {"message": "Announcement deleted successfully"}
