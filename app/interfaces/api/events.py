"""Events API routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.application.services import event_service
from app.application.services.common import options
from app.domain.models.event import Event, EVENT_STATUSES, EVENT_TYPES
from app.domain.models.user import User
from app.domain.repositories.base import BaseRepository
from app.domain.schemas.common import ListParams
from app.domain.schemas.event import EventCreate, EventRead, EventUpdate
from app.interfaces.api.deps import get_optional_user, require_staff
from app.interfaces.api.responses import paginated, set_etag
from app.interfaces.deps import get_event_repository, if_match_version, list_params

router = APIRouter(prefix="/api/events", tags=["Events"])


@router.get("")
def list_events(
    type: Optional[str] = None,
    status: Optional[str] = None,
    is_online: Optional[bool] = Query(None, alias="isOnline"),
    params: ListParams = Depends(list_params()),
    repo: BaseRepository[Event] = Depends(get_event_repository),
    viewer: Optional[User] = Depends(get_optional_user),
):
    page = event_service.list_events(repo, params, viewer, type=type, status=status, is_online=is_online)
    return paginated(page, EventRead)


@router.get("/types/list")
def event_types():
    return {"types": options(EVENT_TYPES)}


@router.get("/statuses/list")
def event_statuses():
    return {"statuses": options(EVENT_STATUSES)}


@router.get("/{event_id}")
def get_event(
    event_id: int,
    response: Response,
    repo: BaseRepository[Event] = Depends(get_event_repository),
    viewer: Optional[User] = Depends(get_optional_user),
):
    event = event_service.get_event(repo, event_id, viewer)
    set_etag(response, event)
    return {"event": EventRead.model_validate(event)}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_event(
    body: EventCreate,
    repo: BaseRepository[Event] = Depends(get_event_repository),
    user: User = Depends(require_staff),
):
    event = event_service.create_event(repo, body, user)
    return {"message": "Event created successfully", "event": EventRead.model_validate(event)}


@router.put("/{event_id}")
def update_event(
    event_id: int,
    body: EventUpdate,
    expected_version: Optional[int] = Depends(if_match_version),
    repo: BaseRepository[Event] = Depends(get_event_repository),
    user: User = Depends(require_staff),
):
    event = event_service.update_event(repo, event_id, body, expected_version)
    return {"message": "Event updated successfully", "event": EventRead.model_validate(event)}


@router.delete("/{event_id}")
def delete_event(
    event_id: int,
    repo: BaseRepository[Event] = Depends(get_event_repository),
    user: User = Depends(require_staff),
):
    event_service.delete_event(repo, event_id)
    return {"message": "Event deleted successfully"}
