"""Response envelopes shared by the resource routers."""

from typing import Optional

from fastapi import Response
from pydantic import BaseModel

from app.application.services.query_pipeline import Page


def paginated(page: Page, schema: type[BaseModel]) -> dict:
    return {
        "items": [schema.model_validate(item) for item in page.items],
        "pagination": page.pagination,
    }


def set_etag(response: Response, obj) -> None:
    response.headers["ETag"] = f'"{obj.version}"'


def split_csv(value: Optional[str]) -> Optional[list[str]]:
    """``?tags=a,b`` -> ``["a", "b"]``."""
    if not value:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]
