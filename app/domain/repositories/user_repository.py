"""
User Repository Interface.
"""

from typing import Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.user import User


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive lookup by email."""
        ...
