"""Entry service — timers and time entries.

Rules:
- A user has at most one open entry (end_time NULL) at any time.
- duration_seconds = floor(end_time - start_time) whenever an entry is closed,
  created closed, or edited.
- Manual {date, minutes} entries end at the configured anchor hour on that date.
"""

import math
from datetime import datetime, timedelta, time
from typing import List, Optional

import structlog
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from app.core.timeutils import to_naive_local
from app.domain.models.time_entry import TimeEntry
from app.domain.models.user import User
from app.domain.repositories.catalog_repository import ProjectRepository, TaskRepository
from app.domain.repositories.entry_repository import EntryRepository
from app.domain.schemas.entry import EntryUpdate, ManualEntryCreate, TimerStart
from app.application.services.catalog_service import resolve_target

logger = structlog.get_logger(__name__)


def elapsed_seconds(start: datetime, end: datetime) -> int:
    """Whole seconds between two instants, floored (negative spans stay negative)."""
    return math.floor((end - start).total_seconds())


def anchored_span(day, minutes: int, anchor_hour: int) -> tuple[datetime, datetime]:
    """(start, end) of a date+minutes entry: end at anchor_hour:00 on `day`."""
    end = datetime.combine(day, time(hour=anchor_hour))
    return end - timedelta(minutes=minutes), end


def get_active_entry(entries: EntryRepository, user_id: int) -> Optional[TimeEntry]:
    return entries.get_active(user_id)


def list_entries(entries: EntryRepository, user_id: int, limit: int = 50) -> List[TimeEntry]:
    return entries.list_closed(user_id, limit)


def start_timer(
    entries: EntryRepository,
    projects: ProjectRepository,
    tasks: TaskRepository,
    user_id: int,
    body: TimerStart,
    now: datetime,
) -> TimeEntry:
    """Open a new entry at `now`. Fails with ConflictError if one is already running."""
    resolve_target(projects, tasks, body.project_id, body.task_id)

    if entries.get_active(user_id):
        raise ConflictError("A timer is already running")

    try:
        entry = entries.create({
            "user_id": user_id,
            "project_id": body.project_id,
            "task_id": body.task_id,
            "start_time": now,
            "end_time": None,
            "duration_seconds": 0,
        })
    except IntegrityError as exc:
        # Lost the race against a concurrent start; the partial unique index held
        raise ConflictError("A timer is already running") from exc

    logger.info("Timer started", user_id=user_id, entry_id=entry.id, project_id=entry.project_id)
    return entry


def stop_timer(entries: EntryRepository, user_id: int, now: datetime) -> TimeEntry:
    """Close the running entry at `now` and store its duration."""
    active = entries.get_active(user_id, for_update=True)
    if not active:
        raise NotFoundError("No active timer")

    entry = entries.update(active, {
        "end_time": now,
        "duration_seconds": elapsed_seconds(active.start_time, now),
    })
    logger.info("Timer stopped", user_id=user_id, entry_id=entry.id, duration_seconds=entry.duration_seconds)
    return entry


def create_manual_entry(
    entries: EntryRepository,
    projects: ProjectRepository,
    tasks: TaskRepository,
    user_id: int,
    body: ManualEntryCreate,
    timezone_name: str,
    anchor_hour: int = 12,
) -> TimeEntry:
    """Insert an already closed entry from {start, end} or {date, minutes}."""
    resolve_target(projects, tasks, body.project_id, body.task_id)

    if body.is_span:
        start = to_naive_local(body.start, timezone_name)
        end = to_naive_local(body.end, timezone_name)
        duration = elapsed_seconds(start, end)
        if duration < 0:
            raise ValidationError("End time must be after start time")
    else:
        start, end = anchored_span(body.entry_date, body.minutes, anchor_hour)
        duration = body.minutes * 60

    entry = entries.create({
        "user_id": user_id,
        "project_id": body.project_id,
        "task_id": body.task_id,
        "start_time": start,
        "end_time": end,
        "duration_seconds": duration,
    })
    logger.info("Manual entry created", user_id=user_id, entry_id=entry.id, duration_seconds=duration)
    return entry


def _owned_entry(entries: EntryRepository, entry_id: int, actor: User) -> TimeEntry:
    entry = entries.get_by_id(entry_id)
    if not entry:
        raise NotFoundError("Entry not found", {"entry_id": entry_id})
    if entry.user_id != actor.id and not actor.is_admin:
        raise ForbiddenError("You can only modify your own entries")
    return entry


def edit_entry(
    entries: EntryRepository,
    projects: ProjectRepository,
    tasks: TaskRepository,
    entry_id: int,
    body: EntryUpdate,
    actor: User,
    timezone_name: str,
) -> TimeEntry:
    """Rewrite project/task/start/end in place and recompute the duration.

    end before start is stored as given, with a negative duration.
    """
    entry = _owned_entry(entries, entry_id, actor)
    resolve_target(projects, tasks, body.project_id, body.task_id)

    start = to_naive_local(body.start, timezone_name)
    end = to_naive_local(body.end, timezone_name)
    entry = entries.update(entry, {
        "project_id": body.project_id,
        "task_id": body.task_id,
        "start_time": start,
        "end_time": end,
        "duration_seconds": elapsed_seconds(start, end),
    })
    logger.info("Entry edited", entry_id=entry.id, edited_by=actor.id, duration_seconds=entry.duration_seconds)
    return entry


def delete_entry(entries: EntryRepository, entry_id: int, actor: User) -> None:
    _owned_entry(entries, entry_id, actor)
    entries.delete(entry_id)
    logger.info("Entry deleted", entry_id=entry_id, deleted_by=actor.id)
