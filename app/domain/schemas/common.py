"""Shared Pydantic building blocks: camelCase wire format, list params, pagination."""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts camelCase or snake_case input, serializes as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class ListParams(BaseModel):
    page: int = 1
    limit: int = 10
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None
    search: Optional[str] = None


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class MessageResponse(BaseModel):
    message: str
