"""Pydantic schemas for Posts and Comments."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from app.domain.schemas.common import CamelModel

PostCategory = Literal["general", "announcement", "event", "marketplace", "question", "discussion"]
PostVisibility = Literal["public", "community", "private"]
PostPriority = Literal["low", "medium", "high"]


def _normalize_tags(tags):
    if tags is None:
        return tags
    return list(dict.fromkeys(tag.strip().lower() for tag in tags if tag.strip()))


class PostCreate(CamelModel):
    # No author fields: they are taken from the authenticated user
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1, max_length=5000)
    category: PostCategory
    visibility: PostVisibility = "public"
    priority: Optional[PostPriority] = None
    tags: list[str] = Field(default_factory=list)
    is_published: bool = True

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, tags):
        return _normalize_tags(tags)


class PostUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[str] = Field(default=None, min_length=1, max_length=5000)
    category: Optional[PostCategory] = None
    visibility: Optional[PostVisibility] = None
    priority: Optional[PostPriority] = None
    tags: Optional[list[str]] = None
    is_published: Optional[bool] = None

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, tags):
        return _normalize_tags(tags)


class CommentCreate(CamelModel):
    content: str = Field(min_length=1, max_length=1000)


class CommentRead(CamelModel):
    id: int
    post_id: int
    author_id: int
    author_name: str
    content: str
    created_at: Optional[datetime] = None


class PostRead(CamelModel):
    id: int
    title: str
    content: str
    category: str
    visibility: str
    priority: Optional[str] = None
    tags: list[str] = []
    author_id: int
    author_name: str
    author_role: str
    likes: list[int] = []
    like_count: int = 0
    comments: list[CommentRead] = []
    comment_count: int = 0
    is_published: bool
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LikeResponse(CamelModel):
    liked: bool
    likes: list[int]
    like_count: int
