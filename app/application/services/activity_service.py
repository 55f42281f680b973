"""Activity log: one row per API request, written outside the request session."""

from typing import Optional

from sqlalchemy.orm import Session

from app.application.services.query_pipeline import Page, QuerySpec, build_filters, run_query
from app.domain.models.activity_log import ActivityLog
from app.domain.repositories.base import BaseRepository
from app.domain.schemas.common import ListParams
from app.infrastructure.database import utcnow

ACTIVITY_QUERY = QuerySpec(
    search_fields=("url",),
    sort_fields={"timestamp": "timestamp", "status": "status"},
    default_sort="timestamp",
    default_order="desc",
    date_fields=frozenset({"timestamp"}),
)


def log_activity(
    db: Session,
    method: str,
    url: str,
    status: Optional[int],
    ip: Optional[str],
    user_id: Optional[int] = None,
) -> ActivityLog:
    entry = ActivityLog(
        timestamp=utcnow(),
        method=method,
        url=url,
        status=status,
        ip=ip,
        user_id=user_id,
    )
    db.add(entry)
    db.commit()
    return entry


def list_activity(
    repo: BaseRepository[ActivityLog],
    params: ListParams,
    method: Optional[str] = None,
    user_id: Optional[int] = None,
) -> Page:
    filters = build_filters({
        "method": (method.upper() if method else None, "exact"),
        "user_id": (user_id, "exact"),
    })
    return run_query(repo.find(), ACTIVITY_QUERY, params, filters)


def prune_activity(db: Session, keep: int) -> int:
    """Delete all but the newest ``keep`` rows. Returns the number removed."""
    if keep <= 0:
        return 0
    cutoff = (
        db.query(ActivityLog.id)
        .order_by(ActivityLog.id.desc())
        .offset(keep)
        .limit(1)
        .scalar()
    )
    if cutoff is None:
        return 0
    removed = db.query(ActivityLog).filter(ActivityLog.id <= cutoff).delete(synchronize_session=False)
    db.commit()
    return removed
