"""Marketplace item domain model: maps to the 'marketplace_items' table."""

from sqlalchemy import JSON, Column, Integer, String, Float, Boolean, DateTime, ForeignKey, Text

from app.infrastructure.database import Base, utcnow

ITEM_CATEGORIES = ("clothing", "electronics", "books", "home", "sports", "other")
ITEM_CONDITIONS = ("new", "like-new", "good", "fair", "poor")
CURRENCIES = ("USD", "EUR", "GBP", "CAD", "AUD")


class MarketplaceItem(Base):
    __tablename__ = "marketplace_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    category = Column(String(30), nullable=False, index=True)
    condition = Column(String(20), nullable=False)
    images = Column(JSON, nullable=False, default=list)
    location = Column(String(200), nullable=False)
    is_available = Column(Boolean, nullable=False, default=True)
    is_approved = Column(Boolean, nullable=False, default=False)

    seller_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    seller_name = Column(String(120), nullable=False)

    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow)

    __mapper_args__ = {"version_id_col": version}

    @property
    def owner_id(self) -> int:
        return self.seller_id

    def __repr__(self):
        return f"<MarketplaceItem {self.id} - {self.title}>"
