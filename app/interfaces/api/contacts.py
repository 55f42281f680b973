"""Contacts API routes: every route requires a signed-in member."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.application.services import contact_service
from app.application.services.common import options
from app.domain.models.contact import Contact, DEPARTMENTS
from app.domain.models.user import User
from app.domain.repositories.base import BaseRepository
from app.domain.schemas.common import ListParams
from app.domain.schemas.contact import ContactCreate, ContactRead, ContactUpdate
from app.interfaces.api.deps import get_current_user
from app.interfaces.api.responses import paginated, set_etag, split_csv
from app.interfaces.deps import get_contact_repository, if_match_version, list_params

router = APIRouter(prefix="/api/contacts", tags=["Contacts"])


@router.get("")
def list_contacts(
    department: Optional[str] = None,
    location: Optional[str] = None,
    tags: Optional[str] = None,
    is_active: Optional[bool] = Query(None, alias="isActive"),
    params: ListParams = Depends(list_params(default_limit=20)),
    repo: BaseRepository[Contact] = Depends(get_contact_repository),
    user: User = Depends(get_current_user),
):
    page = contact_service.list_contacts(
        repo, params,
        department=department,
        location=location,
        tags=split_csv(tags),
        is_active=is_active,
    )
    return paginated(page, ContactRead)


@router.get("/departments/list")
def contact_departments(user: User = Depends(get_current_user)):
    return {"departments": options(DEPARTMENTS, {"HR": "HR"})}


@router.get("/tags/list")
def list_contact_tags(
    repo: BaseRepository[Contact] = Depends(get_contact_repository),
    user: User = Depends(get_current_user),
):
    return {"tags": contact_service.contact_tags(repo)}


@router.get("/stats/overview")
def contact_stats(
    repo: BaseRepository[Contact] = Depends(get_contact_repository),
    user: User = Depends(get_current_user),
):
    return {"stats": contact_service.contact_stats(repo)}


@router.get("/{contact_id}")
def get_contact(
    contact_id: int,
    response: Response,
    repo: BaseRepository[Contact] = Depends(get_contact_repository),
    user: User = Depends(get_current_user),
):
    contact = contact_service.get_contact(repo, contact_id)
    set_etag(response, contact)
    return {"contact": ContactRead.model_validate(contact)}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_contact(
    body: ContactCreate,
    repo: BaseRepository[Contact] = Depends(get_contact_repository),
    user: User = Depends(get_current_user),
):
    contact = contact_service.create_contact(repo, body, user)
    return {"message": "Contact created successfully", "contact": ContactRead.model_validate(contact)}


@router.put("/{contact_id}")
def update_contact(
    contact_id: int,
    body: ContactUpdate,
    expected_version: Optional[int] = Depends(if_match_version),
    repo: BaseRepository[Contact] = Depends(get_contact_repository),
    user: User = Depends(get_current_user),
):
    contact = contact_service.update_contact(repo, contact_id, body, user, expected_version)
    return {"message": "Contact updated successfully", "contact": ContactRead.model_validate(contact)}


@router.delete("/{contact_id}")
def delete_contact(
    contact_id: int,
    repo: BaseRepository[Contact] = Depends(get_contact_repository),
    user: User = Depends(get_current_user),
):
    contact_service.delete_contact(repo, contact_id, user)
    return {"message": "Contact deleted successfully"}
