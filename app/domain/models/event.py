"""Event domain model: maps to the 'events' table."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Text

from app.infrastructure.database import Base, utcnow

EVENT_TYPES = ("meetup", "workshop", "conference", "webinar", "other")
EVENT_STATUSES = ("draft", "upcoming", "ongoing", "completed", "cancelled")


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    end_date = Column(DateTime(timezone=True), nullable=True)
    location = Column(String(200), nullable=False)
    type = Column(String(30), nullable=False, index=True)
    is_online = Column(Boolean, nullable=False, default=False)
    max_attendees = Column(Integer, nullable=True)
    current_attendees = Column(Integer, nullable=False, default=0)
    status = Column(String(20), nullable=False, default="draft")
    is_published = Column(Boolean, nullable=False, default=False)

    organizer_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    organizer_name = Column(String(120), nullable=False)

    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow)

    __mapper_args__ = {"version_id_col": version}

    @property
    def owner_id(self) -> int:
        return self.organizer_id

    def __repr__(self):
        return f"<Event {self.id} - {self.title}>"
