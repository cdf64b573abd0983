"""Weekly assignment API routes — users read their own, admins manage all."""

from typing import List

from fastapi import APIRouter, Depends, status

from app.application.services import assignment_service
from app.domain.models.user import User
from app.domain.repositories.assignment_repository import AssignmentRepository
from app.domain.repositories.catalog_repository import ProjectRepository, TaskRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.assignment import AssignmentCreate, AssignmentRead
from app.interfaces.api.deps import get_current_user, require_admin
from app.interfaces.deps import (
    get_assignment_repository,
    get_project_repository,
    get_task_repository,
    get_user_repository,
)

router = APIRouter(prefix="/api/assignments", tags=["Assignments"])


@router.get("", response_model=List[AssignmentRead])
def my_assignments(
    assignments: AssignmentRepository = Depends(get_assignment_repository),
    user: User = Depends(get_current_user),
):
    return [AssignmentRead.model_validate(a) for a in assignment_service.list_for_user(assignments, user.id)]


@router.get("/all", response_model=List[AssignmentRead])
def all_assignments(
    assignments: AssignmentRepository = Depends(get_assignment_repository),
    admin: User = Depends(require_admin),
):
    return [AssignmentRead.model_validate(a) for a in assignment_service.list_all(assignments)]


@router.post("", response_model=AssignmentRead, status_code=status.HTTP_201_CREATED)
def create_assignment(
    body: AssignmentCreate,
    assignments: AssignmentRepository = Depends(get_assignment_repository),
    users: UserRepository = Depends(get_user_repository),
    projects: ProjectRepository = Depends(get_project_repository),
    tasks: TaskRepository = Depends(get_task_repository),
    admin: User = Depends(require_admin),
):
    assignment = assignment_service.create_assignment(assignments, users, projects, tasks, body)
    return AssignmentRead.model_validate(assignment)


@router.delete("/{assignment_id}")
def delete_assignment(
    assignment_id: int,
    assignments: AssignmentRepository = Depends(get_assignment_repository),
    admin: User = Depends(require_admin),
):
    assignment_service.delete_assignment(assignments, assignment_id)
    return {"success": True}
