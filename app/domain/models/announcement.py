"""Announcement domain model: maps to the 'announcements' table."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Text

from app.infrastructure.database import Base, utcnow

ANNOUNCEMENT_CATEGORIES = ("general", "rules", "events", "updates", "other")
ANNOUNCEMENT_PRIORITIES = ("low", "normal", "high", "urgent")


class Announcement(Base):
    __tablename__ = "announcements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, index=True)
    priority = Column(String(20), nullable=False, default="normal")
    is_published = Column(Boolean, nullable=False, default=False)

    author_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    author_name = Column(String(120), nullable=False)

    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow)

    __mapper_args__ = {"version_id_col": version}

    @property
    def owner_id(self) -> int:
        return self.author_id

    def __repr__(self):
        return f"<Announcement {self.id} - {self.title}>"
