"""Task domain model — a named sub-item of exactly one project."""

from sqlalchemy import Column, Integer, String, ForeignKey

from app.infrastructure.database import Base


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)

    def __repr__(self):
        return f"<Task {self.id} - {self.name} (project {self.project_id})>"
