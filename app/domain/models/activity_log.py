"""Activity log model: one row per API request."""

from sqlalchemy import Column, Integer, String, DateTime

from app.infrastructure.database import Base, utcnow


class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(DateTime(timezone=True), default=utcnow, index=True)
    method = Column(String(10), nullable=False)
    url = Column(String(2000), nullable=False)
    status = Column(Integer, nullable=True)
    ip = Column(String(64), nullable=True)
    user_id = Column(Integer, nullable=True, index=True)
