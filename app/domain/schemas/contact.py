"""Pydantic schemas for Contacts."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr, Field

from app.domain.schemas.common import CamelModel

Department = Literal["Engineering", "Marketing", "Sales", "HR", "Finance", "Operations", "Other"]


class ContactCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(default=None, min_length=10, max_length=20)
    company: Optional[str] = Field(default=None, min_length=1, max_length=100)
    position: Optional[str] = Field(default=None, min_length=1, max_length=100)
    department: Optional[Department] = None
    location: Optional[str] = Field(default=None, min_length=1, max_length=100)
    notes: Optional[str] = Field(default=None, max_length=1000)
    tags: list[str] = Field(default_factory=list)


class ContactUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, min_length=10, max_length=20)
    company: Optional[str] = Field(default=None, min_length=1, max_length=100)
    position: Optional[str] = Field(default=None, min_length=1, max_length=100)
    department: Optional[Department] = None
    location: Optional[str] = Field(default=None, min_length=1, max_length=100)
    notes: Optional[str] = Field(default=None, max_length=1000)
    tags: Optional[list[str]] = None
    is_active: Optional[bool] = None


class ContactRead(CamelModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    company: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    tags: list[str] = []
    is_active: bool
    created_by: str
    created_by_id: int
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
