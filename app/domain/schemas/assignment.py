"""Pydantic schemas for weekly assignments."""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional


class AssignmentCreate(BaseModel):
    user_id: int
    project_id: int
    task_id: Optional[int] = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class AssignmentRead(BaseModel):
    id: int
    user_id: int
    user_name: Optional[str] = None
    project_id: int
    project_name: Optional[str] = None
    project_color: Optional[str] = None
    task_id: Optional[int] = None
    task_name: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
