"""Activity log API routes (admin only)."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.application.services.activity_service import list_activity
from app.domain.models.activity_log import ActivityLog
from app.domain.models.user import User
from app.domain.repositories.base import BaseRepository
from app.domain.schemas.activity import ActivityLogRead
from app.domain.schemas.common import ListParams
from app.interfaces.api.deps import require_admin
from app.interfaces.api.responses import paginated
from app.interfaces.deps import get_activity_repository, list_params

router = APIRouter(prefix="/api/activity", tags=["Activity"])


@router.get("")
def activity_log(
    method: Optional[str] = None,
    user_id: Optional[int] = Query(None, alias="userId"),
    params: ListParams = Depends(list_params(default_limit=50)),
    repo: BaseRepository[ActivityLog] = Depends(get_activity_repository),
    admin: User = Depends(require_admin),
):
    page = list_activity(repo, params, method=method, user_id=user_id)
    return paginated(page, ActivityLogRead)
