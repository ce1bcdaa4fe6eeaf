"""Pydantic schemas that describe project payloads for the API."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from ..core.status import TaskStatus, normalize_status
from .task import TaskOut


class ProjectBase(BaseModel):
    name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: int = Field(default=int(TaskStatus.ON_TIME))

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, value):
        return normalize_status(value)


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[int] = None

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, value):
        return None if value is None else normalize_status(value)


class ProjectOut(ProjectBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: str
    updated_at: str
    task_count: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status_label(self) -> str:
        return TaskStatus.from_stored(self.status).label

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status_color(self) -> str:
        return TaskStatus.from_stored(self.status).color


class ProjectDetail(ProjectOut):
    tasks: list[TaskOut] = Field(default_factory=list)
