"""Assignment service — weekly (user, project, task?) suggestions curated by admins."""

from typing import List

import structlog
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConflictError, NotFoundError
from app.domain.models.weekly_assignment import WeeklyAssignment
from app.domain.repositories.assignment_repository import AssignmentRepository
from app.domain.repositories.catalog_repository import ProjectRepository, TaskRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.assignment import AssignmentCreate
from app.application.services.catalog_service import resolve_target

logger = structlog.get_logger(__name__)


def create_assignment(
    assignments: AssignmentRepository,
    users: UserRepository,
    projects: ProjectRepository,
    tasks: TaskRepository,
    body: AssignmentCreate,
) -> WeeklyAssignment:
    if not users.get_by_id(body.user_id):
        raise NotFoundError("User not found", {"user_id": body.user_id})
    resolve_target(projects, tasks, body.project_id, body.task_id)

    if assignments.find(body.user_id, body.project_id, body.task_id):
        raise ConflictError("Assignment already exists")

    try:
        assignment = assignments.create(body.model_dump())
    except IntegrityError as exc:
        raise ConflictError("Assignment already exists") from exc

    logger.info(
        "Assignment created",
        assignment_id=assignment.id,
        user_id=assignment.user_id,
        project_id=assignment.project_id,
        task_id=assignment.task_id,
    )
    return assignment


def list_for_user(assignments: AssignmentRepository, user_id: int) -> List[WeeklyAssignment]:
    return assignments.list_for_user(user_id)


def list_all(assignments: AssignmentRepository) -> List[WeeklyAssignment]:
    return assignments.list_all()


def delete_assignment(assignments: AssignmentRepository, assignment_id: int) -> None:
    if not assignments.delete(assignment_id):
        raise NotFoundError("Assignment not found", {"assignment_id": assignment_id})
    logger.info("Assignment deleted", assignment_id=assignment_id)
