"""
API Dependencies — settings and repositories.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.config import Settings
from app.domain.models.project import Project
from app.domain.models.task import Task
from app.domain.models.time_entry import TimeEntry
from app.domain.models.user import User
from app.domain.models.weekly_assignment import WeeklyAssignment
from app.domain.repositories.assignment_repository import AssignmentRepository
from app.domain.repositories.catalog_repository import ProjectRepository, TaskRepository
from app.domain.repositories.entry_repository import EntryRepository
from app.domain.repositories.user_repository import UserRepository
from app.infrastructure.database import get_db
from app.infrastructure.repositories.assignment_repository import SQLAlchemyAssignmentRepository
from app.infrastructure.repositories.catalog_repository import (
    SQLAlchemyProjectRepository,
    SQLAlchemyTaskRepository,
)
from app.infrastructure.repositories.entry_repository import SQLAlchemyEntryRepository
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return SQLAlchemyUserRepository(db, User)


def get_project_repository(db: Session = Depends(get_db)) -> ProjectRepository:
    return SQLAlchemyProjectRepository(db, Project)


def get_task_repository(db: Session = Depends(get_db)) -> TaskRepository:
    return SQLAlchemyTaskRepository(db, Task)


def get_entry_repository(db: Session = Depends(get_db)) -> EntryRepository:
    return SQLAlchemyEntryRepository(db, TimeEntry)


def get_assignment_repository(db: Session = Depends(get_db)) -> AssignmentRepository:
    return SQLAlchemyAssignmentRepository(db, WeeklyAssignment)
