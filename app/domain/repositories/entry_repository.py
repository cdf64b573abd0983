"""
Time Entry Repository Interface.
"""

from typing import List, Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.time_entry import TimeEntry
from app.domain.schemas.analytics import AnalyticsFilter, EntrySpan


class EntryRepository(BaseRepository[TimeEntry]):
    """Interface for TimeEntry-specific operations."""

    def get_active(self, user_id: int, for_update: bool = False) -> Optional[TimeEntry]:
        """The user's open entry (end_time NULL), if any."""
        ...

    def list_closed(self, user_id: int, limit: int = 50) -> List[TimeEntry]:
        """Closed entries of the user, newest start_time first."""
        ...

    def get_spans(self, filters: AnalyticsFilter) -> List[EntrySpan]:
        """Closed entries joined with user/project/task names, filtered on start_time and project."""
        ...
