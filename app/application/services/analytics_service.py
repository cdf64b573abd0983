"""Analytics service — hours per (user, project, task) over closed entries.

Hours come from end_time - start_time of each entry, never from the stored
duration_seconds column, so corrected timestamps are what gets reported.
"""

from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Tuple

from app.domain.repositories.entry_repository import EntryRepository
from app.domain.schemas.analytics import (
    AnalyticsFilter,
    AnalyticsRow,
    AnalyticsSummary,
    EntrySpan,
    ProjectTotal,
    UserTotal,
)

TWO_PLACES = Decimal("0.01")
SECONDS_PER_HOUR = Decimal(3600)


def to_hours(span: timedelta) -> float:
    """timedelta -> hours, rounded half-up to 2 decimals."""
    seconds = Decimal(span.days * 86400 + span.seconds) + Decimal(span.microseconds) / Decimal(10**6)
    return float((seconds / SECONDS_PER_HOUR).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


GroupKey = Tuple[int, int, Optional[int]]


def aggregate(spans: List[EntrySpan]) -> List[AnalyticsRow]:
    """One row per distinct (user, project, task) with summed hours, largest first."""
    groups: Dict[GroupKey, Tuple[EntrySpan, timedelta]] = {}
    for span in spans:
        key = (span.user_id, span.project_id, span.task_id)
        first, total = groups.get(key, (span, timedelta(0)))
        groups[key] = (first, total + (span.end_time - span.start_time))

    rows = [
        AnalyticsRow(
            user_id=first.user_id,
            user_name=first.user_name,
            project_id=first.project_id,
            project_name=first.project_name,
            color=first.color,
            task_id=first.task_id,
            task_name=first.task_name,
            hours=to_hours(total),
        )
        for first, total in groups.values()
    ]
    rows.sort(key=lambda r: (-r.hours, r.user_name, r.project_name, r.task_name or ""))
    return rows


def get_analytics(entries: EntryRepository, filters: AnalyticsFilter) -> List[AnalyticsRow]:
    return aggregate(entries.get_spans(filters))


def get_summary(entries: EntryRepository, filters: AnalyticsFilter) -> AnalyticsSummary:
    """Rows plus per-project and per-user totals for dashboard charts.

    Totals are summed from the raw spans and rounded once.
    """
    spans = entries.get_spans(filters)

    by_project: Dict[int, Tuple[EntrySpan, timedelta]] = {}
    by_user: Dict[int, Tuple[EntrySpan, timedelta]] = {}
    grand_total = timedelta(0)
    for span in spans:
        duration = span.end_time - span.start_time
        grand_total += duration
        first, total = by_project.get(span.project_id, (span, timedelta(0)))
        by_project[span.project_id] = (first, total + duration)
        first, total = by_user.get(span.user_id, (span, timedelta(0)))
        by_user[span.user_id] = (first, total + duration)

    project_totals = [
        ProjectTotal(
            project_id=first.project_id,
            project_name=first.project_name,
            color=first.color,
            hours=to_hours(total),
        )
        for first, total in by_project.values()
    ]
    project_totals.sort(key=lambda p: (-p.hours, p.project_name))

    user_totals = [
        UserTotal(user_id=first.user_id, user_name=first.user_name, hours=to_hours(total))
        for first, total in by_user.values()
    ]
    user_totals.sort(key=lambda u: (-u.hours, u.user_name))

    return AnalyticsSummary(
        rows=aggregate(spans),
        by_project=project_totals,
        by_user=user_totals,
        total_hours=to_hours(grand_total),
    )
