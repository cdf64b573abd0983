"""Pydantic schemas for time entries."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel

MAX_MANUAL_MINUTES = 24 * 60


class CamelModel(BaseModel):
    """Request body accepting the client's camelCase keys (snake_case also works)."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class TimerStart(CamelModel):
    project_id: int
    task_id: Optional[int] = None


class ManualEntryCreate(CamelModel):
    """Either {start, end} or {date, minutes}; exactly one of the two shapes."""

    project_id: int
    task_id: Optional[int] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    entry_date: Optional[date] = Field(None, alias="date")
    minutes: Optional[int] = Field(None, ge=1, le=MAX_MANUAL_MINUTES)

    @model_validator(mode="after")
    def check_shape(self):
        span = self.start is not None or self.end is not None
        quantity = self.entry_date is not None or self.minutes is not None
        if span == quantity:
            raise ValueError("provide either start/end or date/minutes")
        if span and (self.start is None or self.end is None):
            raise ValueError("start and end are both required")
        if quantity and (self.entry_date is None or self.minutes is None):
            raise ValueError("date and minutes are both required")
        return self

    @property
    def is_span(self) -> bool:
        return self.start is not None


class EntryUpdate(CamelModel):
    project_id: int
    task_id: Optional[int] = None
    start: datetime
    end: datetime


class EntryRead(BaseModel):
    id: int
    user_id: int
    project_id: int
    task_id: Optional[int] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    duration_seconds: int
    project_name: Optional[str] = None
    project_color: Optional[str] = None
    task_name: Optional[str] = None

    model_config = {"from_attributes": True}
