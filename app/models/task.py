from __future__ import annotations

from sqlalchemy import Column, Date, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from ..core.status import TaskStatus
from ..db.session import Base

UNNAMED_TASK = "Unnamed Task"


def _short_date(value) -> str:
    # M/D/YY, the short style of the date pickers
    return f"{value.month}/{value.day}/{value.strftime('%y')}"


class Task(Base):
    __tablename__ = "tasks"
    __allow_unmapped__ = True

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(Text, nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    status = Column(Integer, nullable=False, default=int(TaskStatus.ON_TIME))
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    project = relationship("Project", back_populates="tasks")

    @property
    def task_status(self) -> TaskStatus:
        return TaskStatus.from_stored(self.status)

    @task_status.setter
    def task_status(self, value: TaskStatus) -> None:
        self.status = int(value)

    @property
    def display_name(self) -> str:
        return self.name or UNNAMED_TASK

    @property
    def start_date_string(self) -> str:
        if self.start_date is None:
            return "No start date"
        return _short_date(self.start_date)

    @property
    def end_date_string(self) -> str:
        if self.end_date is None:
            return "No end date"
        return _short_date(self.end_date)

    def __repr__(self) -> str:
        return f"<Task id={self.id} project_id={self.project_id} name={self.name!r}>"


__all__ = ["Task", "UNNAMED_TASK"]
