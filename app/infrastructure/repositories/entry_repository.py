"""
SQLAlchemy Implementation of the Time Entry Repository.
"""

from typing import List, Optional

from app.core.timeutils import day_start, next_day_start
from app.domain.models.project import Project
from app.domain.models.task import Task
from app.domain.models.time_entry import TimeEntry
from app.domain.models.user import User
from app.domain.repositories.entry_repository import EntryRepository
from app.domain.schemas.analytics import AnalyticsFilter, EntrySpan
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyEntryRepository(SQLAlchemyRepository[TimeEntry], EntryRepository):
    """TimeEntry repository implementation using SQLAlchemy."""

    def get_active(self, user_id: int, for_update: bool = False) -> Optional[TimeEntry]:
        query = self.db.query(TimeEntry).filter(
            TimeEntry.user_id == user_id,
            TimeEntry.end_time.is_(None),
        )
        if for_update:
            # lock only the entry row, not the outer-joined project/task
            query = query.with_for_update(of=TimeEntry)
        return query.order_by(TimeEntry.start_time.desc()).first()

    def list_closed(self, user_id: int, limit: int = 50) -> List[TimeEntry]:
        return (
            self.db.query(TimeEntry)
            .filter(
                TimeEntry.user_id == user_id,
                TimeEntry.end_time.isnot(None),
            )
            .order_by(TimeEntry.start_time.desc(), TimeEntry.id.desc())
            .limit(limit)
            .all()
        )

    def get_spans(self, filters: AnalyticsFilter) -> List[EntrySpan]:
        query = (
            self.db.query(
                User.id.label("user_id"),
                User.name.label("user_name"),
                Project.id.label("project_id"),
                Project.name.label("project_name"),
                Project.color.label("color"),
                Task.id.label("task_id"),
                Task.name.label("task_name"),
                TimeEntry.start_time,
                TimeEntry.end_time,
            )
            .select_from(TimeEntry)
            .join(User, TimeEntry.user_id == User.id)
            .join(Project, TimeEntry.project_id == Project.id)
            .outerjoin(Task, TimeEntry.task_id == Task.id)
            .filter(TimeEntry.end_time.isnot(None))
        )

        # Date bounds always apply to start_time; date_end covers its whole day
        if filters.date_start:
            query = query.filter(TimeEntry.start_time >= day_start(filters.date_start))
        if filters.date_end:
            query = query.filter(TimeEntry.start_time < next_day_start(filters.date_end))
        if filters.project_ids:
            query = query.filter(TimeEntry.project_id.in_(filters.project_ids))

        return [EntrySpan.model_validate(row._asdict()) for row in query.all()]
