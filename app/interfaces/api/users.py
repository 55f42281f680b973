"""User administration API routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.application.services import user_service
from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import UserRead
from app.domain.schemas.common import ListParams
from app.domain.schemas.user import UserAdminUpdate
from app.interfaces.api.deps import require_admin, require_staff
from app.interfaces.api.responses import paginated
from app.interfaces.deps import get_user_repository, list_params

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("")
def list_users(
    role: Optional[str] = None,
    is_active: Optional[bool] = Query(None, alias="isActive"),
    params: ListParams = Depends(list_params()),
    repo: UserRepository = Depends(get_user_repository),
    admin: User = Depends(require_admin),
):
    return paginated(user_service.list_users(repo, params, role=role, is_active=is_active), UserRead)


@router.get("/stats/overview")
def user_stats(
    repo: UserRepository = Depends(get_user_repository),
    admin: User = Depends(require_admin),
):
    return {"stats": user_service.user_stats(repo)}


@router.get("/{user_id}")
def get_user(
    user_id: int,
    repo: UserRepository = Depends(get_user_repository),
    staff: User = Depends(require_staff),
):
    return {"user": UserRead.model_validate(user_service.get_user(repo, user_id))}


@router.put("/{user_id}")
def update_user(
    user_id: int,
    body: UserAdminUpdate,
    repo: UserRepository = Depends(get_user_repository),
    admin: User = Depends(require_admin),
):
    user = user_service.update_user(repo, user_id, body, admin)
    return {"message": "User updated successfully", "user": UserRead.model_validate(user)}


@router.delete("/{user_id}")
def deactivate_user(
    user_id: int,
    repo: UserRepository = Depends(get_user_repository),
    admin: User = Depends(require_admin),
):
    user_service.set_active(repo, user_id, False, admin)
    return {"message": "User deactivated successfully"}


@router.post("/{user_id}/activate")
def activate_user(
    user_id: int,
    repo: UserRepository = Depends(get_user_repository),
    admin: User = Depends(require_admin),
):
    user = user_service.set_active(repo, user_id, True, admin)
    return {"message": "User activated successfully", "user": UserRead.model_validate(user)}
