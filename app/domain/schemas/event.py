"""Pydantic schemas for Events."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, model_validator

from app.domain.schemas.common import CamelModel

EventType = Literal["meetup", "workshop", "conference", "webinar", "other"]
EventStatus = Literal["draft", "upcoming", "ongoing", "completed", "cancelled"]


class EventCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=2000)
    date: datetime
    end_date: Optional[datetime] = None
    location: str = Field(min_length=1, max_length=200)
    type: EventType
    is_online: bool = False
    max_attendees: Optional[int] = Field(default=None, ge=1)
    status: EventStatus = "draft"
    is_published: bool = False

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date is not None and self.end_date < self.date:
            raise ValueError("endDate must not be before date")
        return self


class EventUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1, max_length=2000)
    date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = Field(default=None, min_length=1, max_length=200)
    type: Optional[EventType] = None
    is_online: Optional[bool] = None
    max_attendees: Optional[int] = Field(default=None, ge=1)
    status: Optional[EventStatus] = None
    is_published: Optional[bool] = None


class EventRead(CamelModel):
    id: int
    title: str
    description: str
    date: datetime
    end_date: Optional[datetime] = None
    location: str
    type: str
    is_online: bool
    max_attendees: Optional[int] = None
    current_attendees: int = 0
    status: str
    is_published: bool
    organizer_id: int
    organizer_name: str
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
