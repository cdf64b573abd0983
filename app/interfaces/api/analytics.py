"""Analytics API routes — admin-only hours aggregation."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.core.exceptions import ValidationError
from app.application.services import analytics_service
from app.domain.repositories.entry_repository import EntryRepository
from app.domain.schemas.analytics import AnalyticsFilter, AnalyticsRow, AnalyticsSummary
from app.interfaces.api.deps import require_admin
from app.interfaces.deps import get_entry_repository

# admin check runs before the query parameters are parsed
router = APIRouter(prefix="/api/analytics", tags=["Analytics"], dependencies=[Depends(require_admin)])


def parse_project_ids(raw: Optional[List[str]]) -> Optional[List[int]]:
    """Accept `projectIds=1,2` as well as `projectIds=1&projectIds=2`."""
    if not raw:
        return None
    ids = []
    for chunk in raw:
        for part in chunk.split(","):
            part = part.strip()
            if not part:
                continue
            try:
                ids.append(int(part))
            except ValueError:
                raise ValidationError("projectIds must be integers", {"value": part})
    return ids or None


def get_filters(
    start: Optional[date] = None,
    end: Optional[date] = None,
    project_ids: Optional[List[str]] = Query(None, alias="projectIds"),
) -> AnalyticsFilter:
    if start and end and end < start:
        raise ValidationError("end must not be before start")
    return AnalyticsFilter(date_start=start, date_end=end, project_ids=parse_project_ids(project_ids))


@router.get("", response_model=List[AnalyticsRow])
def analytics(
    filters: AnalyticsFilter = Depends(get_filters),
    entries: EntryRepository = Depends(get_entry_repository),
):
    return analytics_service.get_analytics(entries, filters)


@router.get("/summary", response_model=AnalyticsSummary)
def analytics_summary(
    filters: AnalyticsFilter = Depends(get_filters),
    entries: EntryRepository = Depends(get_entry_repository),
):
    return analytics_service.get_summary(entries, filters)
