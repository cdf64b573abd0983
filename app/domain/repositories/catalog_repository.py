"""
Catalog Repository Interfaces — projects and their tasks.
"""

from typing import List

from app.domain.repositories.base import BaseRepository
from app.domain.models.project import Project
from app.domain.models.task import Task


class ProjectRepository(BaseRepository[Project]):
    """Interface for Project-specific operations."""

    def list_all(self) -> List[Project]:
        """All projects ordered by id."""
        ...

    def delete_with_dependents(self, project_id: int) -> None:
        """Delete assignments, entries and tasks of the project, then the project, atomically."""
        ...


class TaskRepository(BaseRepository[Task]):
    """Interface for Task-specific operations."""

    def list_all(self) -> List[Task]:
        """All tasks ordered by id."""
        ...

    def delete_detaching_entries(self, task_id: int) -> None:
        """Null task_id on entries, delete assignments naming the task, then the task, atomically."""
        ...
