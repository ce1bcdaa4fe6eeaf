"""SQLAlchemy model for projects, the top-level unit on the schedule."""

from __future__ import annotations

from sqlalchemy import Column, Date, Integer, Text
from sqlalchemy.orm import relationship

from ..core.status import TaskStatus
from ..db.session import Base
from ..services.schedule import sorted_tasks

UNNAMED_PROJECT = "Unnamed Project"


class Project(Base):
    """A named date range with a schedule status and its own tasks."""

    __tablename__ = "projects"
    __allow_unmapped__ = True

    id = Column(Integer, primary_key=True, index=True)
    name = Column(Text, nullable=True)
    start_date = Column(Date, nullable=True, index=True)
    end_date = Column(Date, nullable=True)
    status = Column(Integer, nullable=False, default=int(TaskStatus.ON_TIME))
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    tasks = relationship(
        "Task",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="Task.id",
    )

    @property
    def task_status(self) -> TaskStatus:
        return TaskStatus.from_stored(self.status)

    @task_status.setter
    def task_status(self, value: TaskStatus) -> None:
        self.status = int(value)

    @property
    def display_name(self) -> str:
        return self.name or UNNAMED_PROJECT

    @property
    def tasks_sorted(self) -> list:
        return sorted_tasks(self.tasks)

    def add_task(self, task) -> None:
        self.tasks.append(task)

    def __repr__(self) -> str:
        return f"<Project id={self.id} name={self.name!r}>"


# Registers the Task mapper so the relationship above resolves on import.
from .task import Task  # noqa: E402,F401

__all__ = ["Project", "UNNAMED_PROJECT"]
