"""Pydantic schemas for Announcements."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from app.domain.schemas.common import CamelModel

AnnouncementCategory = Literal["general", "rules", "events", "updates", "other"]
AnnouncementPriority = Literal["low", "normal", "high", "urgent"]


class AnnouncementCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1, max_length=5000)
    category: AnnouncementCategory
    priority: AnnouncementPriority
    is_published: bool = False


class AnnouncementUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[str] = Field(default=None, min_length=1, max_length=5000)
    category: Optional[AnnouncementCategory] = None
    priority: Optional[AnnouncementPriority] = None
    is_published: Optional[bool] = None


class AnnouncementRead(CamelModel):
    id: int
    title: str
    content: str
    category: str
    priority: str
    is_published: bool
    author_id: int
    author_name: str
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
