"""Contact domain model: maps to the 'contacts' table."""

from sqlalchemy import JSON, Column, Integer, String, Boolean, DateTime, ForeignKey, Text

from app.infrastructure.database import Base, utcnow

DEPARTMENTS = ("Engineering", "Marketing", "Sales", "HR", "Finance", "Operations", "Other")
CONTACT_TAGS = ("developer", "senior", "frontend", "backend", "manager", "lead", "junior")


class Contact(Base):
    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)  # stored lower-cased
    phone = Column(String(20), nullable=True)
    company = Column(String(100), nullable=True)
    position = Column(String(100), nullable=True)
    department = Column(String(30), nullable=True, index=True)
    location = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)

    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_by = Column(String(120), nullable=False)

    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow)

    __mapper_args__ = {"version_id_col": version}

    @property
    def owner_id(self) -> int:
        return self.created_by_id

    def __repr__(self):
        return f"<Contact {self.email}>"
