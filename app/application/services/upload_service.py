"""Image uploads: profile pictures and listing photos."""

import os
import uuid
from typing import Optional, Protocol

import structlog

from app.core.exceptions import ValidationException

logger = structlog.get_logger(__name__)

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}


class ImageStorage(Protocol):
    def store(self, content: bytes, extension: str) -> str:
        """Persist the bytes and return their public URL."""
        ...


class LocalImageStorage:
    """Writes images under ``upload_dir``; the app serves that directory at ``/uploads``."""

    def __init__(self, upload_dir: str, public_base_url: str):
        self.upload_dir = upload_dir
        self.public_base_url = public_base_url.rstrip("/")

    def store(self, content: bytes, extension: str) -> str:
        os.makedirs(self.upload_dir, exist_ok=True)
        name = f"{uuid.uuid4().hex}.{extension}"
        with open(os.path.join(self.upload_dir, name), "wb") as f:
            f.write(content)
        return f"{self.public_base_url}/uploads/{name}"


def validate_image(content_type: Optional[str], size: int, max_bytes: int) -> str:
    """Return the file extension for an acceptable image, else raise."""
    extension = ALLOWED_IMAGE_TYPES.get((content_type or "").lower())
    if extension is None:
        raise ValidationException(
            "Only image files are allowed",
            {"image": f"Unsupported content type: {content_type}"},
        )
    if size == 0:
        raise ValidationException("Uploaded file is empty", {"image": "File is empty"})
    if size > max_bytes:
        raise ValidationException(
            "File too large",
            {"image": f"Maximum size is {max_bytes} bytes"},
        )
    return extension


def upload_image(storage: ImageStorage, content: bytes, content_type: Optional[str], max_bytes: int) -> str:
    extension = validate_image(content_type, len(content), max_bytes)
    url = storage.store(content, extension)
    logger.info("Image uploaded", url=url, size=len(content))
    return url
