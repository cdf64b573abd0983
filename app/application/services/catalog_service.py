"""Catalog service — projects and their tasks."""

from typing import Optional

import structlog

from app.core.exceptions import NotFoundError, ValidationError
from app.domain.models.project import Project
from app.domain.models.task import Task
from app.domain.models.user import User
from app.domain.repositories.catalog_repository import ProjectRepository, TaskRepository
from app.domain.schemas.catalog import CatalogRead, ProjectCreate, ProjectRead, ProjectUpdate, TaskCreate, TaskRead

logger = structlog.get_logger(__name__)


def _clean_name(name: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise ValidationError("Name must not be blank")
    return cleaned


def require_project(projects: ProjectRepository, project_id: int) -> Project:
    project = projects.get_by_id(project_id)
    if not project:
        raise NotFoundError("Project not found", {"project_id": project_id})
    return project


def require_task(tasks: TaskRepository, task_id: int) -> Task:
    task = tasks.get_by_id(task_id)
    if not task:
        raise NotFoundError("Task not found", {"task_id": task_id})
    return task


def resolve_target(
    projects: ProjectRepository,
    tasks: TaskRepository,
    project_id: int,
    task_id: Optional[int],
) -> tuple[Project, Optional[Task]]:
    """Check that the project exists and, if a task is named, that it belongs to it."""
    project = require_project(projects, project_id)
    if task_id is None:
        return project, None
    task = require_task(tasks, task_id)
    if task.project_id != project.id:
        raise ValidationError(
            "Task does not belong to project",
            {"task_id": task_id, "project_id": project_id},
        )
    return project, task


def list_catalog(projects: ProjectRepository, tasks: TaskRepository) -> CatalogRead:
    return CatalogRead(
        projects=[ProjectRead.model_validate(p) for p in projects.list_all()],
        tasks=[TaskRead.model_validate(t) for t in tasks.list_all()],
    )


def create_project(projects: ProjectRepository, body: ProjectCreate, created_by: User) -> Project:
    project = projects.create({
        "name": _clean_name(body.name),
        "color": body.color,
        "created_by": created_by.id,
    })
    logger.info("Project created", project_id=project.id, created_by=created_by.id)
    return project


def update_project(projects: ProjectRepository, project_id: int, body: ProjectUpdate) -> Project:
    project = require_project(projects, project_id)
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in changes:
        changes["name"] = _clean_name(changes["name"])
    return projects.update(project, changes)


def delete_project(projects: ProjectRepository, project_id: int) -> None:
    require_project(projects, project_id)
    projects.delete_with_dependents(project_id)


def create_task(projects: ProjectRepository, tasks: TaskRepository, body: TaskCreate) -> Task:
    project = require_project(projects, body.project_id)
    task = tasks.create({"name": _clean_name(body.name), "project_id": project.id})
    logger.info("Task created", task_id=task.id, project_id=project.id)
    return task


def delete_task(tasks: TaskRepository, task_id: int) -> None:
    require_task(tasks, task_id)
    tasks.delete_detaching_entries(task_id)
