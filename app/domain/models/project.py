"""Project domain model — maps to the 'projects' table."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func

from app.infrastructure.database import Base

DEFAULT_PROJECT_COLOR = "#3b82f6"


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    color = Column(String(20), nullable=False, default=DEFAULT_PROJECT_COLOR)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self):
        return f"<Project {self.id} - {self.name}>"
