"""Pydantic schemas for the project/task catalog."""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from app.domain.models.project import DEFAULT_PROJECT_COLOR


class ProjectCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    color: str = Field(DEFAULT_PROJECT_COLOR, max_length=20)


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    color: Optional[str] = Field(None, max_length=20)


class ProjectRead(BaseModel):
    id: int
    name: str
    color: str
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class TaskCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    project_id: int = Field(alias="projectId")

    model_config = {"populate_by_name": True}


class TaskRead(BaseModel):
    id: int
    name: str
    project_id: int

    model_config = {"from_attributes": True}


class CatalogRead(BaseModel):
    projects: list[ProjectRead]
    tasks: list[TaskRead]
