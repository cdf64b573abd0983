"""
Weekly Assignment Repository Interface.
"""

from typing import List, Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.weekly_assignment import WeeklyAssignment


class AssignmentRepository(BaseRepository[WeeklyAssignment]):
    """Interface for WeeklyAssignment-specific operations."""

    def find(self, user_id: int, project_id: int, task_id: Optional[int]) -> Optional[WeeklyAssignment]:
        """Exact tuple match; a NULL task_id only matches NULL."""
        ...

    def list_for_user(self, user_id: int) -> List[WeeklyAssignment]:
        ...

    def list_all(self) -> List[WeeklyAssignment]:
        ...
