"""Pydantic schemas for the activity log."""

from datetime import datetime
from typing import Optional

from app.domain.schemas.common import CamelModel


class ActivityLogRead(CamelModel):
    id: int
    timestamp: Optional[datetime] = None
    method: str
    url: str
    status: Optional[int] = None
    ip: Optional[str] = None
    user_id: Optional[int] = None
