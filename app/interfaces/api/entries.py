"""Time entry API routes — timer start/stop, manual entries, history."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.config import Settings
from app.core.timeutils import local_now
from app.application.services import entry_service
from app.domain.models.user import User
from app.domain.repositories.catalog_repository import ProjectRepository, TaskRepository
from app.domain.repositories.entry_repository import EntryRepository
from app.domain.schemas.entry import EntryRead, EntryUpdate, ManualEntryCreate, TimerStart
from app.interfaces.api.deps import get_current_user
from app.interfaces.deps import (
    get_app_settings,
    get_entry_repository,
    get_project_repository,
    get_task_repository,
)

router = APIRouter(prefix="/api/entries", tags=["Entries"])


@router.get("", response_model=List[EntryRead])
def list_entries(
    limit: Optional[int] = Query(None, ge=1),
    entries: EntryRepository = Depends(get_entry_repository),
    settings: Settings = Depends(get_app_settings),
    user: User = Depends(get_current_user),
):
    """The current user's closed entries, newest first."""
    cap = settings.ENTRIES_LIST_LIMIT
    limit = min(limit or cap, cap)
    return [EntryRead.model_validate(e) for e in entry_service.list_entries(entries, user.id, limit)]


@router.get("/active", response_model=Optional[EntryRead])
def active_entry(
    entries: EntryRepository = Depends(get_entry_repository),
    user: User = Depends(get_current_user),
):
    entry = entry_service.get_active_entry(entries, user.id)
    return EntryRead.model_validate(entry) if entry else None


@router.post("/start", response_model=EntryRead)
def start_timer(
    body: TimerStart,
    entries: EntryRepository = Depends(get_entry_repository),
    projects: ProjectRepository = Depends(get_project_repository),
    tasks: TaskRepository = Depends(get_task_repository),
    settings: Settings = Depends(get_app_settings),
    user: User = Depends(get_current_user),
):
    entry = entry_service.start_timer(
        entries, projects, tasks, user.id, body, now=local_now(settings.TIMEZONE)
    )
    return EntryRead.model_validate(entry)


@router.post("/stop", response_model=EntryRead)
def stop_timer(
    entries: EntryRepository = Depends(get_entry_repository),
    settings: Settings = Depends(get_app_settings),
    user: User = Depends(get_current_user),
):
    entry = entry_service.stop_timer(entries, user.id, now=local_now(settings.TIMEZONE))
    return EntryRead.model_validate(entry)


@router.post("/manual", response_model=EntryRead)
def manual_entry(
    body: ManualEntryCreate,
    entries: EntryRepository = Depends(get_entry_repository),
    projects: ProjectRepository = Depends(get_project_repository),
    tasks: TaskRepository = Depends(get_task_repository),
    settings: Settings = Depends(get_app_settings),
    user: User = Depends(get_current_user),
):
    entry = entry_service.create_manual_entry(
        entries,
        projects,
        tasks,
        user.id,
        body,
        timezone_name=settings.TIMEZONE,
        anchor_hour=settings.MANUAL_ENTRY_ANCHOR_HOUR,
    )
    return EntryRead.model_validate(entry)


@router.put("/{entry_id}", response_model=EntryRead)
def edit_entry(
    entry_id: int,
    body: EntryUpdate,
    entries: EntryRepository = Depends(get_entry_repository),
    projects: ProjectRepository = Depends(get_project_repository),
    tasks: TaskRepository = Depends(get_task_repository),
    settings: Settings = Depends(get_app_settings),
    user: User = Depends(get_current_user),
):
    entry = entry_service.edit_entry(
        entries, projects, tasks, entry_id, body, actor=user, timezone_name=settings.TIMEZONE
    )
    return EntryRead.model_validate(entry)


@router.delete("/{entry_id}")
def delete_entry(
    entry_id: int,
    entries: EntryRepository = Depends(get_entry_repository),
    user: User = Depends(get_current_user),
):
    entry_service.delete_entry(entries, entry_id, actor=user)
    return {"success": True}
