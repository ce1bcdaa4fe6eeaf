"""CRUD helpers for projects."""

from __future__ import annotations

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..core.status import TaskStatus
from ..models.project import Project
from ..services.schedule import projects_on_date
from ._fields import apply_fields, utcnow

logger = logging.getLogger(__name__)


def list_projects(db: Session) -> list[Project]:
    # Missing start dates sort first on SQLite; id keeps ties deterministic.
    stmt = (
        select(Project)
        .options(selectinload(Project.tasks))
        .order_by(Project.start_date.asc(), Project.id.asc())
    )
    return list(db.execute(stmt).scalars().all())


def list_projects_on_date(db: Session, selected_date: date) -> list[Project]:
    return projects_on_date(selected_date, list_projects(db))


def get_project(db: Session, project_id: int) -> Project | None:
    stmt = select(Project).options(selectinload(Project.tasks)).where(Project.id == project_id)
    return db.execute(stmt).scalars().first()


def create_project(db: Session, payload: dict) -> Project:
    now = utcnow()
    project = Project(
        name=None,
        start_date=None,
        end_date=None,
        status=int(TaskStatus.ON_TIME),
        created_at=now,
        updated_at=now,
    )
    apply_fields(project, payload)
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info("project.created", extra={"extra_data": {"project_id": project.id}})
    return project


def update_project(db: Session, project: Project, payload: dict) -> Project:
    apply_fields(project, payload)
    project.updated_at = utcnow()
    db.commit()
    db.refresh(project)
    logger.info("project.updated", extra={"extra_data": {"project_id": project.id}})
    return project


def delete_project(db: Session, project: Project) -> None:
    # Tasks go with their project via the delete-orphan cascade.
    project_id = project.id
    task_count = len(project.tasks)
    db.delete(project)
    db.commit()
    logger.info(
        "project.deleted",
        extra={"extra_data": {"project_id": project_id, "task_count": task_count}},
    )
