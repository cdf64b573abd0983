"""
User Repository Interface.
"""

from typing import List, Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.user import User


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_email(self, email: str) -> Optional[User]:
        ...

    def list_all(self) -> List[User]:
        """All users ordered by id."""
        ...

    def count(self) -> int:
        ...

    def delete_with_dependents(self, user_id: int) -> None:
        """Delete the user's entries and assignments, detach their projects, then the user."""
        ...
