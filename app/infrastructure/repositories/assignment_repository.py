"""
SQLAlchemy Implementation of the Weekly Assignment Repository.
"""

from typing import List, Optional

from app.domain.models.weekly_assignment import WeeklyAssignment
from app.domain.repositories.assignment_repository import AssignmentRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyAssignmentRepository(SQLAlchemyRepository[WeeklyAssignment], AssignmentRepository):
    """WeeklyAssignment repository implementation using SQLAlchemy."""

    def find(self, user_id: int, project_id: int, task_id: Optional[int]) -> Optional[WeeklyAssignment]:
        query = self.db.query(WeeklyAssignment).filter(
            WeeklyAssignment.user_id == user_id,
            WeeklyAssignment.project_id == project_id,
        )
        if task_id is None:
            query = query.filter(WeeklyAssignment.task_id.is_(None))
        else:
            query = query.filter(WeeklyAssignment.task_id == task_id)
        return query.first()

    def list_for_user(self, user_id: int) -> List[WeeklyAssignment]:
        return (
            self.db.query(WeeklyAssignment)
            .filter(WeeklyAssignment.user_id == user_id)
            .order_by(WeeklyAssignment.id.asc())
            .all()
        )

    def list_all(self) -> List[WeeklyAssignment]:
        return self.db.query(WeeklyAssignment).order_by(WeeklyAssignment.id.asc()).all()
