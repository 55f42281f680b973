"""
Base Repository Interface.
Defines the standard contract for data access operations.
"""

from typing import TypeVar, List, Optional, Any, Protocol

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for generic CRUD operations."""

    def get_by_id(self, id: int) -> Optional[T]:
        """Get a single entity by ID."""
        ...

    def find(self, **criteria: Any) -> List[T]:
        """All entities whose attributes equal ``criteria``, in insertion order."""
        ...

    def list(self, skip: int = 0, limit: Optional[int] = None) -> List[T]:
        """List entities in insertion order."""
        ...

    def create(self, obj_in: Any) -> T:
        """Create a new entity."""
        ...

    def update(self, db_obj: T, obj_in: Any) -> T:
        """Overwrite only the supplied fields of an existing entity."""
        ...

    def save(self, db_obj: T) -> T:
        """Persist changes made directly on an entity (or its children)."""
        ...

    def delete(self, id: int) -> Optional[T]:
        """Delete an entity by ID."""
        ...
