"""Pydantic schemas for User and Auth."""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, HttpUrl

from app.domain.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class ProfileUpdate(CamelModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    profile_picture: Optional[HttpUrl] = None


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6, max_length=128)


class UserRead(CamelModel):
    id: int
    email: str
    first_name: str
    last_name: str
    full_name: str
    role: str
    is_active: bool
    email_verified: bool = False
    profile_picture: Optional[str] = None
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AuthResponse(CamelModel):
    message: str
    user: UserRead
    token: str
