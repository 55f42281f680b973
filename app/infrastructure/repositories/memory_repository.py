"""
In-memory implementation of the Base Repository.

Holds transient model instances in a list. Used by tests and local
experiments where no database is wanted; handler and service code is the
same for both implementations.
"""

import itertools
from typing import Any, Generic, Iterable, List, Optional, Type, TypeVar

from app.domain.repositories.base import BaseRepository
from app.infrastructure.database import utcnow
from app.infrastructure.repositories.base_repository import _as_dict

ModelType = TypeVar("ModelType")


class InMemoryRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic repository backed by a Python list."""

    def __init__(self, model: Type[ModelType], items: Optional[Iterable[Any]] = None):
        self.model = model
        self._items: List[ModelType] = []
        self._ids = itertools.count(1)
        for item in items or ():
            self.create(item)

    def get_by_id(self, id: int) -> Optional[ModelType]:
        return next((item for item in self._items if item.id == id), None)

    def find(self, **criteria: Any) -> List[ModelType]:
        return [
            item for item in self._items
            if all(getattr(item, key, None) == value for key, value in criteria.items())
        ]

    def list(self, skip: int = 0, limit: Optional[int] = None) -> List[ModelType]:
        end = None if limit is None else skip + limit
        return self._items[skip:end]

    def create(self, obj_in: Any) -> ModelType:
        obj = obj_in if isinstance(obj_in, self.model) else self.model(**_as_dict(obj_in, exclude_unset=False))
        now = utcnow()
        obj.id = next(self._ids)
        for field, value in (("created_at", now), ("updated_at", now), ("version", 1)):
            if hasattr(self.model, field) and getattr(obj, field, None) is None:
                setattr(obj, field, value)
        self._apply_column_defaults(obj)
        self._items.append(obj)
        return obj

    def update(self, db_obj: ModelType, obj_in: Any) -> ModelType:
        for field, value in _as_dict(obj_in, exclude_unset=True).items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)
        return self.save(db_obj)

    def save(self, db_obj: ModelType) -> ModelType:
        if getattr(db_obj, "version", None) is not None:
            db_obj.version += 1
        return db_obj

    def delete(self, id: int) -> Optional[ModelType]:
        obj = self.get_by_id(id)
        if obj is not None:
            self._items.remove(obj)
        return obj

    def _apply_column_defaults(self, obj: ModelType) -> None:
        """Fill scalar column defaults the way an INSERT would."""
        table = getattr(self.model, "__table__", None)
        if table is None:
            return
        for column in table.columns:
            if getattr(obj, column.key, None) is not None or column.default is None:
                continue
            default = column.default
            if default.is_scalar:
                setattr(obj, column.key, default.arg)
            elif default.is_callable:
                # SQLAlchemy wraps zero-arg callables to accept an execution context
                setattr(obj, column.key, default.arg(None))
