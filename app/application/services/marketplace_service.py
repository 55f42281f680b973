"""Marketplace service: member listings with staff approval."""

from typing import Optional

import structlog

from app.application.services.common import check_version, ensure_owner_or_roles, get_or_404
from app.application.services.query_pipeline import Page, QuerySpec, build_filters, run_query
from app.core.exceptions import EntityNotFoundException, ValidationException
from app.domain.models.marketplace_item import MarketplaceItem
from app.domain.models.user import User, STAFF_ROLES
from app.domain.repositories.base import BaseRepository
from app.domain.schemas.common import ListParams
from app.domain.schemas.marketplace import MarketplaceItemCreate, MarketplaceItemUpdate
from app.infrastructure.database import utcnow

logger = structlog.get_logger(__name__)

MARKETPLACE_QUERY = QuerySpec(
    search_fields=("title", "description", "location"),
    sort_fields={
        "createdAt": "created_at",
        "updatedAt": "updated_at",
        "price": "price",
        "title": "title",
    },
    default_sort="createdAt",
    default_order="desc",
    date_fields=frozenset({"created_at", "updated_at"}),
)


def can_view(item: MarketplaceItem, viewer: Optional[User]) -> bool:
    """Approved, available items are public; sellers and staff also see the rest."""
    if viewer is not None and (viewer.is_staff or viewer.id == item.seller_id):
        return True
    return item.is_approved and item.is_available


def list_items(
    repo: BaseRepository[MarketplaceItem],
    params: ListParams,
    viewer: Optional[User],
    category: Optional[str] = None,
    condition: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
) -> Page:
    if min_price is not None and max_price is not None and min_price > max_price:
        raise ValidationException(details={"minPrice": "minPrice must not exceed maxPrice"})

    filters = build_filters({
        "category": (category, "exact"),
        "condition": (condition, "exact"),
    })
    # both bounds target price, so they cannot share the attr-keyed mapping
    filters += build_filters({"price": (min_price, "min")})
    filters += build_filters({"price": (max_price, "max")})
    return run_query(repo.find(), MARKETPLACE_QUERY, params, filters, visible=lambda i: can_view(i, viewer))


def get_item(repo: BaseRepository[MarketplaceItem], item_id: int, viewer: Optional[User]) -> MarketplaceItem:
    item = get_or_404(repo, item_id, "Item")
    if not can_view(item, viewer):
        raise EntityNotFoundException("Item not found", {"id": item_id})
    return item


def create_item(repo: BaseRepository[MarketplaceItem], body: MarketplaceItemCreate, seller: User) -> MarketplaceItem:
    data = body.model_dump()
    data.update(
        seller_id=seller.id,
        seller_name=seller.full_name,
        is_available=True,
        # staff listings skip the review queue
        is_approved=seller.is_staff,
    )
    item = repo.create(data)
    logger.info("Marketplace item created", item_id=item.id, seller_id=seller.id, approved=item.is_approved)
    return item


def update_item(
    repo: BaseRepository[MarketplaceItem],
    item_id: int,
    body: MarketplaceItemUpdate,
    user: User,
    expected_version: Optional[int] = None,
) -> MarketplaceItem:
    item = get_or_404(repo, item_id, "Item")
    ensure_owner_or_roles(user, item.seller_id, STAFF_ROLES, "You can only edit your own listings")
    check_version(item, expected_version)

    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    changes["updated_at"] = utcnow()
    return repo.update(item, changes)


def approve_item(repo: BaseRepository[MarketplaceItem], item_id: int, moderator: User) -> MarketplaceItem:
    item = get_or_404(repo, item_id, "Item")
    item = repo.update(item, {"is_approved": True, "updated_at": utcnow()})
    logger.info("Marketplace item approved", item_id=item.id, by=moderator.id)
    return item


def delete_item(repo: BaseRepository[MarketplaceItem], item_id: int, user: User) -> None:
    item = get_or_404(repo, item_id, "Item")
    ensure_owner_or_roles(user, item.seller_id, STAFF_ROLES, "You can only delete your own listings")
    repo.delete(item.id)
    logger.info("Marketplace item deleted", item_id=item_id, by=user.id)
