"""TimeEntry domain model — maps to the 'time_entries' table.

An entry with end_time NULL is a running timer. The partial unique index
keeps at most one of those per user, whatever the application layer does.
"""

from sqlalchemy import Column, Integer, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.domain.models.project import Project
from app.domain.models.task import Task


class TimeEntry(Base):
    __tablename__ = "time_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="SET NULL"), nullable=True)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=True)
    duration_seconds = Column(Integer, nullable=False, default=0)

    project = relationship(Project, lazy="joined")
    task = relationship(Task, lazy="joined")

    __table_args__ = (
        Index(
            "uq_time_entries_one_active_per_user",
            user_id,
            unique=True,
            sqlite_where=end_time.is_(None),
            postgresql_where=end_time.is_(None),
        ),
    )

    @property
    def is_active(self) -> bool:
        return self.end_time is None

    @property
    def project_name(self):
        return self.project.name if self.project else None

    @property
    def project_color(self):
        return self.project.color if self.project else None

    @property
    def task_name(self):
        return self.task.name if self.task else None

    def __repr__(self):
        return f"<TimeEntry {self.id} user={self.user_id} active={self.is_active}>"
