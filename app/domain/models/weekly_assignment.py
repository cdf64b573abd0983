"""WeeklyAssignment domain model — admin-curated (user, project, task?) suggestions."""

from sqlalchemy import Column, Integer, DateTime, ForeignKey, Index, func
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.domain.models.project import Project
from app.domain.models.task import Task
from app.domain.models.user import User


class WeeklyAssignment(Base):
    __tablename__ = "weekly_assignments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship(User, lazy="joined")
    project = relationship(Project, lazy="joined")
    task = relationship(Task, lazy="joined")

    # NULL task_id is a key of its own: (u, p, NULL) may exist once
    __table_args__ = (
        Index(
            "uq_weekly_assignments_tuple",
            user_id,
            project_id,
            func.coalesce(task_id, 0),
            unique=True,
        ),
    )

    @property
    def user_name(self):
        return self.user.name if self.user else None

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
        return f"<WeeklyAssignment user={self.user_id} project={self.project_id} task={self.task_id}>"
