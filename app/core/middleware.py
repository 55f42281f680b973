"""
Middleware configuration for the application.
Includes Correlation ID setup, request logging and the activity log.
"""

import time
import structlog
from typing import Callable
from fastapi import Request, Response
from asgi_correlation_id import CorrelationIdMiddleware
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware

from app.application.services.activity_service import log_activity, prune_activity
from app.config import get_settings
from app.infrastructure.database import SessionLocal

logger = structlog.get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log requests and responses with timing."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        logger.info(
            "Request started",
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else "unknown",
        )

        try:
            response = await call_next(request)

            process_time = time.time() - start_time

            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                process_time_ms=round(process_time * 1000, 2),
            )

            return response

        except Exception:
            process_time = time.time() - start_time
            logger.exception(
                "Request failed",
                method=request.method,
                path=request.url.path,
                process_time_ms=round(process_time * 1000, 2),
            )
            raise


class ActivityLogMiddleware(BaseHTTPMiddleware):
    """Persist one ActivityLog row per /api request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        if request.url.path.startswith("/api"):
            await run_in_threadpool(
                record_activity,
                method=request.method,
                url=str(request.url.path) + (f"?{request.url.query}" if request.url.query else ""),
                status=response.status_code,
                ip=request.client.host if request.client else None,
                user_id=getattr(request.state, "user_id", None),
            )

        return response


def record_activity(**fields) -> None:
    # a failed write must never change the response
    db = SessionLocal()
    try:
        log_activity(db, **fields)
        prune_activity(db, get_settings().ACTIVITY_LOG_RETENTION)
    except Exception:
        db.rollback()
        logger.exception("Activity log write failed", url=fields.get("url"))
    finally:
        db.close()


def setup_middleware(app):
    """Setup all middleware for the application."""

    # Starlette runs the last added middleware first
    app.add_middleware(ActivityLogMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CorrelationIdMiddleware,
        header_name="X-Request-ID",
        update_request_header=True,
    )
