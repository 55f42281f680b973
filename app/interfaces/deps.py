"""
API Dependencies.
"""

from typing import Callable, Optional

from fastapi import Depends, Header, Query
from sqlalchemy.orm import Session

from app.core.exceptions import ValidationException
from app.infrastructure.database import get_db
from app.domain.models.user import User
from app.domain.models.post import Post
from app.domain.models.announcement import Announcement
from app.domain.models.event import Event
from app.domain.models.marketplace_item import MarketplaceItem
from app.domain.models.contact import Contact
from app.domain.models.activity_log import ActivityLog
from app.domain.repositories.base import BaseRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.common import ListParams
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return SQLAlchemyUserRepository(db, User)


def get_post_repository(db: Session = Depends(get_db)) -> BaseRepository[Post]:
    return SQLAlchemyRepository(db, Post)


def get_announcement_repository(db: Session = Depends(get_db)) -> BaseRepository[Announcement]:
    return SQLAlchemyRepository(db, Announcement)


def get_event_repository(db: Session = Depends(get_db)) -> BaseRepository[Event]:
    return SQLAlchemyRepository(db, Event)


def get_marketplace_repository(db: Session = Depends(get_db)) -> BaseRepository[MarketplaceItem]:
    return SQLAlchemyRepository(db, MarketplaceItem)


def get_contact_repository(db: Session = Depends(get_db)) -> BaseRepository[Contact]:
    return SQLAlchemyRepository(db, Contact)


def get_activity_repository(db: Session = Depends(get_db)) -> BaseRepository[ActivityLog]:
    return SQLAlchemyRepository(db, ActivityLog)


def list_params(default_limit: int = 10) -> Callable[..., ListParams]:
    """Build the common page/limit/sort/search query dependency."""

    def dependency(
        page: int = Query(1),
        limit: int = Query(default_limit),
        sort_by: Optional[str] = Query(None, alias="sortBy"),
        sort_order: Optional[str] = Query(None, alias="sortOrder"),
        search: Optional[str] = Query(None),
    ) -> ListParams:
        return ListParams(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order, search=search)

    return dependency


def if_match_version(if_match: Optional[str] = Header(None, alias="If-Match")) -> Optional[int]:
    """Parse an ``If-Match`` header carrying a resource version (``"3"`` or ``W/"3"``)."""
    if if_match is None:
        return None
    value = if_match.strip()
    if value.startswith("W/"):
        value = value[2:]
    value = value.strip('"')
    try:
        return int(value)
    except ValueError:
        raise ValidationException(details={"If-Match": "Must carry a numeric resource version"})
