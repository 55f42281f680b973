"""Pydantic schemas for user administration."""

from typing import Literal, Optional

from pydantic import Field

from app.domain.schemas.common import CamelModel


class UserAdminUpdate(CamelModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    role: Optional[Literal["user", "moderator", "admin"]] = None
    is_active: Optional[bool] = None
    email_verified: Optional[bool] = None
