"""Pydantic schemas for analytics aggregation."""

from pydantic import BaseModel
from datetime import date, datetime
from typing import Optional


class AnalyticsFilter(BaseModel):
    date_start: Optional[date] = None
    date_end: Optional[date] = None
    project_ids: Optional[list[int]] = None


class EntrySpan(BaseModel):
    """One closed entry joined with the names analytics reports on."""

    user_id: int
    user_name: str
    project_id: int
    project_name: str
    color: Optional[str] = None
    task_id: Optional[int] = None
    task_name: Optional[str] = None
    start_time: datetime
    end_time: datetime


class AnalyticsRow(BaseModel):
    user_id: int
    user_name: str
    project_id: int
    project_name: str
    color: Optional[str] = None
    task_id: Optional[int] = None
    task_name: Optional[str] = None
    hours: float


class ProjectTotal(BaseModel):
    project_id: int
    project_name: str
    color: Optional[str] = None
    hours: float


class UserTotal(BaseModel):
    user_id: int
    user_name: str
    hours: float


class AnalyticsSummary(BaseModel):
    rows: list[AnalyticsRow]
    by_project: list[ProjectTotal]
    by_user: list[UserTotal]
    total_hours: float
