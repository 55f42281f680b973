"""SQLAlchemy engine, session factory and declarative base.

The engine is created once per process and cached; every request gets its
own session through the ``get_db`` dependency.
"""

from datetime import datetime, timezone
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import get_settings

Base = declarative_base()

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def init_engine(url: Optional[str] = None, **kwargs) -> Engine:
    """(Re)create the cached engine and session factory."""
    global _engine, _session_factory

    url = url or get_settings().DATABASE_URL
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs.setdefault("poolclass", StaticPool)
    else:
        kwargs.setdefault("pool_pre_ping", True)

    if _engine is not None:
        _engine.dispose()

    _engine = create_engine(url, **kwargs)
    _session_factory = sessionmaker(bind=_engine, autocommit=False, autoflush=False)
    return _engine


def get_engine() -> Engine:
    if _engine is None:
        init_engine()
    return _engine


def SessionLocal() -> Session:
    """Open a new session on the cached engine."""
    get_engine()
    return _session_factory()


def create_tables() -> None:
    # Import all models so SQLAlchemy knows about them
    from app.domain.models.user import User  # noqa: F401
    from app.domain.models.post import Post, PostComment, PostLike  # noqa: F401
    from app.domain.models.announcement import Announcement  # noqa: F401
    from app.domain.models.event import Event  # noqa: F401
    from app.domain.models.marketplace_item import MarketplaceItem  # noqa: F401
    from app.domain.models.contact import Contact  # noqa: F401
    from app.domain.models.activity_log import ActivityLog  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
