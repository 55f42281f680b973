"""Event service: staff-managed community events."""

from datetime import datetime, timezone
from typing import Optional

import structlog

from app.application.services.common import check_version, get_or_404
from app.application.services.query_pipeline import Page, QuerySpec, build_filters, run_query
from app.core.exceptions import EntityNotFoundException, ValidationException
from app.domain.models.event import Event
from app.domain.models.user import User
from app.domain.repositories.base import BaseRepository
from app.domain.schemas.common import ListParams
from app.domain.schemas.event import EventCreate, EventUpdate
from app.infrastructure.database import utcnow

logger = structlog.get_logger(__name__)

EVENT_QUERY = QuerySpec(
    search_fields=("title", "description", "location"),
    sort_fields={
        "date": "date",
        "endDate": "end_date",
        "createdAt": "created_at",
        "updatedAt": "updated_at",
        "title": "title",
        "status": "status",
    },
    default_sort="date",
    default_order="asc",
    date_fields=frozenset({"date", "end_date", "created_at", "updated_at"}),
)


def can_view(event: Event, viewer: Optional[User]) -> bool:
    return event.is_published or (viewer is not None and viewer.is_staff)


def list_events(
    repo: BaseRepository[Event],
    params: ListParams,
    viewer: Optional[User],
    type: Optional[str] = None,
    status: Optional[str] = None,
    is_online: Optional[bool] = None,
) -> Page:
    filters = build_filters({
        "type": (type, "exact"),
        "status": (status, "exact"),
        "is_online": (is_online, "exact"),
    })
    return run_query(repo.find(), EVENT_QUERY, params, filters, visible=lambda e: can_view(e, viewer))


def get_event(repo: BaseRepository[Event], event_id: int, viewer: Optional[User]) -> Event:
    event = get_or_404(repo, event_id, "Event")
    if not can_view(event, viewer):
        raise EntityNotFoundException("Event not found", {"id": event_id})
    return event


def create_event(repo: BaseRepository[Event], body: EventCreate, organizer: User) -> Event:
    data = body.model_dump()
    data.update(
        organizer_id=organizer.id,
        organizer_name=organizer.full_name,
        current_attendees=0,
    )
    event = repo.create(data)
    logger.info("Event created", event_id=event.id, organizer_id=organizer.id)
    return event


def update_event(
    repo: BaseRepository[Event],
    event_id: int,
    body: EventUpdate,
    expected_version: Optional[int] = None,
) -> Event:
    event = get_or_404(repo, event_id, "Event")
    check_version(event, expected_version)

    changes = body.model_dump(exclude_unset=True)
    # endDate may be cleared explicitly; everything else ignores nulls
    changes = {k: v for k, v in changes.items() if v is not None or k == "end_date"}

    start = changes.get("date", event.date)
    end = changes.get("end_date", event.end_date)
    if start is not None and end is not None and _as_utc(end) < _as_utc(start):
        raise ValidationException(details={"endDate": "endDate must not be before date"})

    changes["updated_at"] = utcnow()
    return repo.update(event, changes)


def delete_event(repo: BaseRepository[Event], event_id: int) -> None:
    get_or_404(repo, event_id, "Event")
    repo.delete(event_id)
    logger.info("Event deleted", event_id=event_id)


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
