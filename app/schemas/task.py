"""Pydantic schemas for tasks nested under a project."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from ..core.status import TaskStatus, normalize_status


class TaskBase(BaseModel):
    name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: int = Field(default=int(TaskStatus.ON_TIME))

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, value):
        return normalize_status(value)


class TaskCreate(TaskBase):
    pass


class TaskUpdate(BaseModel):
    name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[int] = None

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, value):
        return None if value is None else normalize_status(value)


class TaskOut(TaskBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    created_at: str
    updated_at: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status_label(self) -> str:
        return TaskStatus.from_stored(self.status).label

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status_color(self) -> str:
        return TaskStatus.from_stored(self.status).color
