"""FastAPI application: main entry point."""

import os
import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text

from app.config import check_required_settings, get_settings
from app.infrastructure.database import SessionLocal, create_tables
from app.core.logging import configure_logging
from app.core.middleware import setup_middleware
from app.core.exceptions import register_exception_handlers
from app.application.services.auth_service import ensure_default_admin
from app.domain.models.user import User
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

# Import routers
from app.interfaces.api.auth import router as auth_router
from app.interfaces.api.users import router as users_router
from app.interfaces.api.posts import router as posts_router
from app.interfaces.api.announcements import router as announcements_router
from app.interfaces.api.events import router as events_router
from app.interfaces.api.marketplace import router as marketplace_router
from app.interfaces.api.contacts import router as contacts_router
from app.interfaces.api.activity import router as activity_router
from app.interfaces.api.upload import router as upload_router

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    # Missing DATABASE_URL / SECRET_KEY aborts startup
    check_required_settings()
    logger.info("Starting notice board API", env=settings.ENVIRONMENT)

    # Create DB tables
    create_tables()
    logger.info("Database tables created/verified")

    db = SessionLocal()
    try:
        ensure_default_admin(
            SQLAlchemyUserRepository(db, User),
            settings.DEFAULT_ADMIN_EMAIL,
            settings.DEFAULT_ADMIN_PASSWORD,
        )
    finally:
        db.close()

    yield

    logger.info("Notice board API stopped")


app = FastAPI(
    title="Community Notice Board API",
    description="Posts, announcements, events, marketplace and member directory",
    version="1.0.0",
    lifespan=lifespan,
)

# Setup Middleware (Correlation ID, Logging, Activity log)
setup_middleware(app)

register_exception_handlers(app)

# Added last so it runs first and answers preflight requests itself
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["ETag", "X-Request-ID"],
)

# Include routers
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(posts_router)
app.include_router(announcements_router)
app.include_router(events_router)
app.include_router(marketplace_router)
app.include_router(contacts_router)
app.include_router(activity_router)
app.include_router(upload_router)

os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")


@app.get("/")
def root():
    return {
        "name": "Community Notice Board API",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except Exception:
        logger.exception("Database health check failed")
        database = "disconnected"
    finally:
        db.close()
    return {"status": "healthy" if database == "connected" else "degraded", "database": database}
