"""Generic list query pipeline shared by every collection endpoint.

Steps run in a fixed order over a snapshot of the collection:

    visibility -> field filters -> search -> sort -> paginate

Sorting is stable, so records that compare equal keep their collection
(insertion) order and consecutive pages partition the matched set.
"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from app.core.exceptions import ValidationException
from app.domain.schemas.common import ListParams, Pagination

SORT_ORDERS = ("asc", "desc")

Predicate = Callable[[Any], bool]


@dataclass(frozen=True)
class FieldFilter:
    """One filter parameter bound to a record attribute.

    Modes:
        exact     attribute == value
        any       attribute (a list) shares at least one element with value
        contains  value is a case-insensitive substring of attribute
        min/max   attribute >= value / attribute <= value
    """

    attr: str
    value: Any
    mode: str = "exact"

    def matches(self, record: Any) -> bool:
        current = getattr(record, self.attr, None)
        if self.mode == "exact":
            return current == self.value
        if self.mode == "any":
            wanted = set(self.value if isinstance(self.value, (list, tuple, set)) else [self.value])
            return bool(wanted.intersection(current or ()))
        if self.mode == "contains":
            return current is not None and str(self.value).lower() in str(current).lower()
        if current is None:
            return False
        if self.mode == "min":
            return current >= self.value
        if self.mode == "max":
            return current <= self.value
        raise ValueError(f"Unknown filter mode: {self.mode}")


@dataclass(frozen=True)
class QuerySpec:
    """Per-resource description of what can be searched and sorted."""

    search_fields: Sequence[str]
    sort_fields: Mapping[str, str]
    default_sort: str
    default_order: str = "desc"
    date_fields: frozenset = field(default_factory=frozenset)


@dataclass
class Page:
    items: list
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int

    @property
    def pagination(self) -> Pagination:
        return Pagination(
            current_page=self.current_page,
            total_pages=self.total_pages,
            total_items=self.total_items,
            items_per_page=self.items_per_page,
        )


def build_filters(params: Mapping[str, tuple]) -> list[FieldFilter]:
    """Turn ``{attr: (value, mode)}`` into filters, skipping absent values."""
    filters = []
    for attr, (value, mode) in params.items():
        if value is None or value == "" or value == []:
            continue
        filters.append(FieldFilter(attr, value, mode))
    return filters


def filter_visible(records: Iterable[Any], predicate: Optional[Predicate]) -> list:
    if predicate is None:
        return list(records)
    return [record for record in records if predicate(record)]


def apply_filters(records: Iterable[Any], filters: Sequence[FieldFilter]) -> list:
    return [record for record in records if all(f.matches(record) for f in filters)]


def apply_search(records: Iterable[Any], term: Optional[str], fields: Sequence[str]) -> list:
    if not term:
        return list(records)
    needle = term.lower()
    return [
        record for record in records
        if any(
            getattr(record, name, None) is not None and needle in str(getattr(record, name)).lower()
            for name in fields
        )
    ]


def _instant(value: Any) -> float:
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp()
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc).timestamp()
    raise TypeError(f"Not a date value: {value!r}")


def sort_records(records: Sequence[Any], attr: str, order: str, is_date: bool = False) -> list:
    """Stable sort by ``attr``; records without a value go last either way."""
    present = [r for r in records if getattr(r, attr, None) is not None]
    missing = [r for r in records if getattr(r, attr, None) is None]

    if is_date:
        key = lambda r: _instant(getattr(r, attr))  # noqa: E731
    else:
        key = lambda r: getattr(r, attr)  # noqa: E731

    # sorted() with reverse=True is still stable
    return sorted(present, key=key, reverse=(order == "desc")) + missing


def paginate(records: Sequence[Any], page: int, limit: int) -> Page:
    if limit <= 0:
        raise ValidationException(details={"limit": "Limit must be a positive integer"})

    total = len(records)
    start = (page - 1) * limit
    items = list(records[start:start + limit]) if start >= 0 else []

    return Page(
        items=items,
        current_page=page,
        total_pages=math.ceil(total / limit),
        total_items=total,
        items_per_page=limit,
    )


def resolve_sort(query_spec: QuerySpec, params: ListParams) -> tuple[str, str]:
    sort_by = params.sort_by or query_spec.default_sort
    order = (params.sort_order or query_spec.default_order).lower()

    errors = {}
    if sort_by not in query_spec.sort_fields:
        errors["sortBy"] = f"Cannot sort by '{sort_by}'. Allowed: {', '.join(query_spec.sort_fields)}"
    if order not in SORT_ORDERS:
        errors["sortOrder"] = "Sort order must be 'asc' or 'desc'"
    if errors:
        raise ValidationException(details=errors)

    return query_spec.sort_fields[sort_by], order


def run_query(
    records: Iterable[Any],
    query_spec: QuerySpec,
    params: ListParams,
    filters: Sequence[FieldFilter] = (),
    visible: Optional[Predicate] = None,
) -> Page:
    """Apply the full pipeline and return one page of results."""
    if params.limit <= 0:
        raise ValidationException(details={"limit": "Limit must be a positive integer"})
    attr, order = resolve_sort(query_spec, params)

    matched = filter_visible(records, visible)
    matched = apply_filters(matched, filters)
    matched = apply_search(matched, params.search, query_spec.search_fields)
    matched = sort_records(matched, attr, order, is_date=attr in query_spec.date_fields)

    return paginate(matched, params.page, params.limit)
