"""
SQLAlchemy implementation of the Base Repository.
"""

from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session
from app.domain.repositories.base import BaseRepository
from app.infrastructure.database import Base

ModelType = TypeVar("ModelType", bound=Base)


def _as_dict(obj_in: Any, exclude_unset: bool) -> dict:
    if hasattr(obj_in, "model_dump"):
        return obj_in.model_dump(exclude_unset=exclude_unset)
    return dict(obj_in)


class SQLAlchemyRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic repository implementation for SQLAlchemy models."""

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, id: int) -> Optional[ModelType]:
        return self.db.get(self.model, id)

    def find(self, **criteria: Any) -> List[ModelType]:
        return self.db.query(self.model).filter_by(**criteria).order_by(self.model.id).all()

    def list(self, skip: int = 0, limit: Optional[int] = None) -> List[ModelType]:
        query = self.db.query(self.model).order_by(self.model.id).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def create(self, obj_in: Any) -> ModelType:
        db_obj = self.model(**_as_dict(obj_in, exclude_unset=False))
        self.db.add(db_obj)
        self.db.commit()
        self.db.refresh(db_obj)
        return db_obj

    def update(self, db_obj: ModelType, obj_in: Any) -> ModelType:
        update_data = _as_dict(obj_in, exclude_unset=True)

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        return self.save(db_obj)

    def save(self, db_obj: ModelType) -> ModelType:
        self.db.add(db_obj)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(db_obj)
        return db_obj

    def delete(self, id: int) -> Optional[ModelType]:
        obj = self.db.get(self.model, id)
        if obj:
            self.db.delete(obj)
            self.db.commit()
        return obj
