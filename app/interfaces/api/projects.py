"""Catalog API routes — projects and tasks."""

from fastapi import APIRouter, Depends, status

from app.application.services import catalog_service
from app.domain.models.user import User
from app.domain.repositories.catalog_repository import ProjectRepository, TaskRepository
from app.domain.schemas.catalog import (
    CatalogRead,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
    TaskCreate,
    TaskRead,
)
from app.interfaces.api.deps import get_current_user
from app.interfaces.deps import get_project_repository, get_task_repository

router = APIRouter(prefix="/api/projects", tags=["Projects"])
tasks_router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


@router.get("", response_model=CatalogRead)
def list_projects(
    projects: ProjectRepository = Depends(get_project_repository),
    tasks: TaskRepository = Depends(get_task_repository),
    user: User = Depends(get_current_user),
):
    """Projects and tasks in one payload, for the client's dropdowns."""
    return catalog_service.list_catalog(projects, tasks)


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_project(
    body: ProjectCreate,
    projects: ProjectRepository = Depends(get_project_repository),
    user: User = Depends(get_current_user),
):
    return ProjectRead.model_validate(catalog_service.create_project(projects, body, user))


@router.put("/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: int,
    body: ProjectUpdate,
    projects: ProjectRepository = Depends(get_project_repository),
    user: User = Depends(get_current_user),
):
    return ProjectRead.model_validate(catalog_service.update_project(projects, project_id, body))


@router.delete("/{project_id}")
def delete_project(
    project_id: int,
    projects: ProjectRepository = Depends(get_project_repository),
    user: User = Depends(get_current_user),
):
    """Delete the project with its tasks, entries and assignments."""
    catalog_service.delete_project(projects, project_id)
    return {"success": True}


@tasks_router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    body: TaskCreate,
    projects: ProjectRepository = Depends(get_project_repository),
    tasks: TaskRepository = Depends(get_task_repository),
    user: User = Depends(get_current_user),
):
    return TaskRead.model_validate(catalog_service.create_task(projects, tasks, body))


@tasks_router.delete("/{task_id}")
def delete_task(
    task_id: int,
    tasks: TaskRepository = Depends(get_task_repository),
    user: User = Depends(get_current_user),
):
    """Delete the task; entries that referenced it keep their time with no task."""
    catalog_service.delete_task(tasks, task_id)
    return {"success": True}
