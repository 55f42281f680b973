"""Upload API route: single image upload."""

from fastapi import APIRouter, Depends, File, UploadFile

from app.application.services.upload_service import ImageStorage, LocalImageStorage, upload_image
from app.config import get_settings
from app.domain.models.user import User
from app.interfaces.api.deps import get_current_user

router = APIRouter(prefix="/api/upload", tags=["Upload"])


def get_image_storage() -> ImageStorage:
    settings = get_settings()
    return LocalImageStorage(settings.UPLOAD_DIR, settings.PUBLIC_BASE_URL)


@router.post("")
async def upload(
    image: UploadFile = File(...),
    storage: ImageStorage = Depends(get_image_storage),
    user: User = Depends(get_current_user),
):
    content = await image.read()
    url = upload_image(storage, content, image.content_type, get_settings().MAX_UPLOAD_BYTES)
    return {"url": url}
