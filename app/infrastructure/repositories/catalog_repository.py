"""
SQLAlchemy Implementation of the Project and Task Repositories.

Cascades run leaf-first inside one transaction.
"""

from typing import List

import structlog

from app.domain.models.project import Project
from app.domain.models.task import Task
from app.domain.models.time_entry import TimeEntry
from app.domain.models.weekly_assignment import WeeklyAssignment
from app.domain.repositories.catalog_repository import ProjectRepository, TaskRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository

logger = structlog.get_logger(__name__)


class SQLAlchemyProjectRepository(SQLAlchemyRepository[Project], ProjectRepository):
    """Project repository implementation using SQLAlchemy."""

    def list_all(self) -> List[Project]:
        return self.db.query(Project).order_by(Project.id.asc()).all()

    def delete_with_dependents(self, project_id: int) -> None:
        with self.atomic():
            assignments = (
                self.db.query(WeeklyAssignment)
                .filter(WeeklyAssignment.project_id == project_id)
                .delete(synchronize_session=False)
            )
            entries = (
                self.db.query(TimeEntry)
                .filter(TimeEntry.project_id == project_id)
                .delete(synchronize_session=False)
            )
            tasks = (
                self.db.query(Task)
                .filter(Task.project_id == project_id)
                .delete(synchronize_session=False)
            )
            self.db.query(Project).filter(Project.id == project_id).delete(synchronize_session=False)
        logger.info(
            "Project deleted",
            project_id=project_id,
            tasks_deleted=tasks,
            entries_deleted=entries,
            assignments_deleted=assignments,
        )


class SQLAlchemyTaskRepository(SQLAlchemyRepository[Task], TaskRepository):
    """Task repository implementation using SQLAlchemy."""

    def list_all(self) -> List[Task]:
        return self.db.query(Task).order_by(Task.id.asc()).all()

    def delete_detaching_entries(self, task_id: int) -> None:
        with self.atomic():
            detached = (
                self.db.query(TimeEntry)
                .filter(TimeEntry.task_id == task_id)
                .update({TimeEntry.task_id: None}, synchronize_session=False)
            )
            assignments = (
                self.db.query(WeeklyAssignment)
                .filter(WeeklyAssignment.task_id == task_id)
                .delete(synchronize_session=False)
            )
            self.db.query(Task).filter(Task.id == task_id).delete(synchronize_session=False)
        logger.info(
            "Task deleted",
            task_id=task_id,
            entries_detached=detached,
            assignments_deleted=assignments,
        )
