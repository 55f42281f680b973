"""Marketplace API routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.application.services import marketplace_service
from app.application.services.common import options
from app.domain.models.marketplace_item import MarketplaceItem, ITEM_CATEGORIES, ITEM_CONDITIONS
from app.domain.models.user import User
from app.domain.repositories.base import BaseRepository
from app.domain.schemas.common import ListParams
from app.domain.schemas.marketplace import MarketplaceItemCreate, MarketplaceItemRead, MarketplaceItemUpdate
from app.interfaces.api.deps import get_current_user, get_optional_user, require_staff
from app.interfaces.api.responses import paginated, set_etag
from app.interfaces.deps import get_marketplace_repository, if_match_version, list_params

router = APIRouter(prefix="/api/marketplace", tags=["Marketplace"])


@router.get("")
def list_items(
    category: Optional[str] = None,
    condition: Optional[str] = None,
    min_price: Optional[float] = Query(None, alias="minPrice"),
    max_price: Optional[float] = Query(None, alias="maxPrice"),
    params: ListParams = Depends(list_params(default_limit=12)),
    repo: BaseRepository[MarketplaceItem] = Depends(get_marketplace_repository),
    viewer: Optional[User] = Depends(get_optional_user),
):
    page = marketplace_service.list_items(
        repo, params, viewer,
        category=category,
        condition=condition,
        min_price=min_price,
        max_price=max_price,
    )
    return paginated(page, MarketplaceItemRead)


@router.get("/categories/list")
def item_categories():
    return {"categories": options(ITEM_CATEGORIES)}


@router.get("/conditions/list")
def item_conditions():
    return {"conditions": options(ITEM_CONDITIONS, {"like-new": "Like New"})}


@router.get("/{item_id}")
def get_item(
    item_id: int,
    response: Response,
    repo: BaseRepository[MarketplaceItem] = Depends(get_marketplace_repository),
    viewer: Optional[User] = Depends(get_optional_user),
):
    item = marketplace_service.get_item(repo, item_id, viewer)
    set_etag(response, item)
    return {"item": MarketplaceItemRead.model_validate(item)}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_item(
    body: MarketplaceItemCreate,
    repo: BaseRepository[MarketplaceItem] = Depends(get_marketplace_repository),
    user: User = Depends(get_current_user),
):
    item = marketplace_service.create_item(repo, body, user)
    message = "Item listed successfully" if item.is_approved else "Item submitted for approval"
    return {"message": message, "item": MarketplaceItemRead.model_validate(item)}


@router.put("/{item_id}")
def update_item(
    item_id: int,
    body: MarketplaceItemUpdate,
    expected_version: Optional[int] = Depends(if_match_version),
    repo: BaseRepository[MarketplaceItem] = Depends(get_marketplace_repository),
    user: User = Depends(get_current_user),
):
    item = marketplace_service.update_item(repo, item_id, body, user, expected_version)
    return {"message": "Item updated successfully", "item": MarketplaceItemRead.model_validate(item)}


@router.post("/{item_id}/approve")
def approve_item(
    item_id: int,
    repo: BaseRepository[MarketplaceItem] = Depends(get_marketplace_repository),
    user: User = Depends(require_staff),
):
    item = marketplace_service.approve_item(repo, item_id, user)
    return {"message": "Item approved successfully", "item": MarketplaceItemRead.model_validate(item)}


@router.delete("/{item_id}")
def delete_item(
    item_id: int,
    repo: BaseRepository[MarketplaceItem] = Depends(get_marketplace_repository),
    user: User = Depends(get_current_user),
):
    marketplace_service.delete_item(repo, item_id, user)
    return {"message": "Item deleted successfully"}
