"""
SQLAlchemy Implementation of User Repository.
"""

from typing import List, Optional

import structlog
from sqlalchemy import func

from app.domain.models.project import Project
from app.domain.models.time_entry import TimeEntry
from app.domain.models.user import User
from app.domain.models.weekly_assignment import WeeklyAssignment
from app.domain.repositories.user_repository import UserRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository

logger = structlog.get_logger(__name__)


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(func.lower(User.email) == email.lower()).first()

    def list_all(self) -> List[User]:
        return self.db.query(User).order_by(User.id.asc()).all()

    def count(self) -> int:
        return self.db.query(func.count(User.id)).scalar() or 0

    def delete_with_dependents(self, user_id: int) -> None:
        with self.atomic():
            entries = (
                self.db.query(TimeEntry)
                .filter(TimeEntry.user_id == user_id)
                .delete(synchronize_session=False)
            )
            assignments = (
                self.db.query(WeeklyAssignment)
                .filter(WeeklyAssignment.user_id == user_id)
                .delete(synchronize_session=False)
            )
            projects = (
                self.db.query(Project)
                .filter(Project.created_by == user_id)
                .update({Project.created_by: None}, synchronize_session=False)
            )
            self.db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
        logger.info(
            "User deleted",
            user_id=user_id,
            entries_deleted=entries,
            assignments_deleted=assignments,
            projects_detached=projects,
        )
