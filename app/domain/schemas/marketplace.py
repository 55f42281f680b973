"""Pydantic schemas for Marketplace items."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from app.domain.schemas.common import CamelModel

ItemCategory = Literal["clothing", "electronics", "books", "home", "sports", "other"]
ItemCondition = Literal["new", "like-new", "good", "fair", "poor"]
Currency = Literal["USD", "EUR", "GBP", "CAD", "AUD"]


class MarketplaceItemCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=2000)
    price: float = Field(ge=0)
    currency: Currency
    category: ItemCategory
    condition: ItemCondition
    images: list[str] = Field(default_factory=list)
    location: str = Field(min_length=1, max_length=200)


class MarketplaceItemUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1, max_length=2000)
    price: Optional[float] = Field(default=None, ge=0)
    currency: Optional[Currency] = None
    category: Optional[ItemCategory] = None
    condition: Optional[ItemCondition] = None
    images: Optional[list[str]] = None
    location: Optional[str] = Field(default=None, min_length=1, max_length=200)
    is_available: Optional[bool] = None


class MarketplaceItemRead(CamelModel):
    id: int
    title: str
    description: str
    price: float
    currency: str
    category: str
    condition: str
    images: list[str] = []
    location: str
    is_available: bool
    is_approved: bool
    seller_id: int
    seller_name: str
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
