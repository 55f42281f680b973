"""Contact service: the member directory."""

from collections import Counter
from typing import Optional

import structlog

from app.application.services.common import check_version, ensure_owner_or_roles, get_or_404
from app.application.services.query_pipeline import Page, QuerySpec, build_filters, run_query
from app.core.exceptions import ConflictException
from app.domain.models.contact import Contact, DEPARTMENTS
from app.domain.models.user import User, STAFF_ROLES
from app.domain.repositories.base import BaseRepository
from app.domain.schemas.common import ListParams
from app.domain.schemas.contact import ContactCreate, ContactUpdate
from app.infrastructure.database import utcnow

logger = structlog.get_logger(__name__)

CONTACT_QUERY = QuerySpec(
    search_fields=("name", "email", "company", "position"),
    sort_fields={
        "name": "name",
        "email": "email",
        "company": "company",
        "department": "department",
        "createdAt": "created_at",
        "updatedAt": "updated_at",
    },
    default_sort="name",
    default_order="asc",
    date_fields=frozenset({"created_at", "updated_at"}),
)


def _normalize_tags(tags: list[str]) -> list[str]:
    seen = []
    for tag in tags:
        tag = tag.strip().lower()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def _ensure_unique_email(repo: BaseRepository[Contact], email: str, exclude_id: Optional[int] = None) -> None:
    for existing in repo.find(email=email):
        if existing.id != exclude_id:
            raise ConflictException("Contact with this email already exists", {"email": email})


def list_contacts(
    repo: BaseRepository[Contact],
    params: ListParams,
    department: Optional[str] = None,
    location: Optional[str] = None,
    tags: Optional[list[str]] = None,
    is_active: Optional[bool] = None,
) -> Page:
    filters = build_filters({
        "department": (department, "exact"),
        "location": (location, "contains"),
        "tags": (_normalize_tags(tags) if tags else None, "any"),
        "is_active": (is_active, "exact"),
    })
    return run_query(repo.find(), CONTACT_QUERY, params, filters)


def get_contact(repo: BaseRepository[Contact], contact_id: int) -> Contact:
    return get_or_404(repo, contact_id, "Contact")


def create_contact(repo: BaseRepository[Contact], body: ContactCreate, user: User) -> Contact:
    data = body.model_dump()
    data["email"] = data["email"].lower()
    data["tags"] = _normalize_tags(data["tags"])
    _ensure_unique_email(repo, data["email"])

    data.update(created_by_id=user.id, created_by=user.full_name, is_active=True)
    contact = repo.create(data)
    logger.info("Contact created", contact_id=contact.id, created_by=user.id)
    return contact


def update_contact(
    repo: BaseRepository[Contact],
    contact_id: int,
    body: ContactUpdate,
    user: User,
    expected_version: Optional[int] = None,
) -> Contact:
    contact = get_or_404(repo, contact_id, "Contact")
    ensure_owner_or_roles(user, contact.created_by_id, STAFF_ROLES, "You can only edit contacts you created")
    check_version(contact, expected_version)

    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in changes:
        changes["email"] = changes["email"].lower()
        _ensure_unique_email(repo, changes["email"], exclude_id=contact.id)
    if "tags" in changes:
        changes["tags"] = _normalize_tags(changes["tags"])
    changes["updated_at"] = utcnow()
    return repo.update(contact, changes)


def delete_contact(repo: BaseRepository[Contact], contact_id: int, user: User) -> None:
    contact = get_or_404(repo, contact_id, "Contact")
    ensure_owner_or_roles(user, contact.created_by_id, STAFF_ROLES, "You can only delete contacts you created")
    repo.delete(contact.id)
    logger.info("Contact deleted", contact_id=contact_id, by=user.id)


def contact_tags(repo: BaseRepository[Contact]) -> list[str]:
    """Every tag in use, most common first."""
    counts = Counter(tag for contact in repo.find() for tag in (contact.tags or []))
    return [tag for tag, _ in counts.most_common()]


def contact_stats(repo: BaseRepository[Contact]) -> dict:
    contacts = repo.find()
    by_department = Counter(c.department for c in contacts if c.department)
    return {
        "totalContacts": len(contacts),
        "activeContacts": sum(1 for c in contacts if c.is_active),
        "inactiveContacts": sum(1 for c in contacts if not c.is_active),
        "contactsByDepartment": [{"department": d, "count": by_department.get(d, 0)} for d in DEPARTMENTS],
    }
