"""CRUD helpers for the tasks nested under a project."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.status import TaskStatus
from ..models.project import Project
from ..models.task import Task
from ..services.schedule import sorted_tasks
from ._fields import apply_fields, utcnow

logger = logging.getLogger(__name__)


def list_project_tasks(db: Session, project_id: int) -> list[Task]:
    stmt = select(Task).where(Task.project_id == project_id).order_by(Task.id.asc())
    return sorted_tasks(db.execute(stmt).scalars().all())


def get_task(db: Session, task_id: int) -> Task | None:
    return db.get(Task, task_id)


def get_project_task(db: Session, project: Project, task_id: int) -> Task | None:
    """Fetch ``task_id`` only if it belongs to ``project``."""

    task = get_task(db, task_id)
    if task is None or task.project_id != project.id:
        return None
    return task


def create_task(db: Session, project: Project, payload: dict) -> Task:
    now = utcnow()
    task = Task(
        name=None,
        start_date=None,
        end_date=None,
        status=int(TaskStatus.ON_TIME),
        created_at=now,
        updated_at=now,
    )
    apply_fields(task, payload)
    project.add_task(task)
    db.commit()
    db.refresh(task)
    logger.info(
        "task.created",
        extra={"extra_data": {"project_id": project.id, "task_id": task.id}},
    )
    return task


def update_task(db: Session, task: Task, payload: dict) -> Task:
    apply_fields(task, payload)
    task.updated_at = utcnow()
    db.commit()
    db.refresh(task)
    logger.info("task.updated", extra={"extra_data": {"task_id": task.id}})
    return task


def delete_task(db: Session, task: Task) -> None:
    task_id = task.id
    project = task.project
    if project is not None and task in project.tasks:
        project.tasks.remove(task)
    else:
        db.delete(task)
    db.commit()
    logger.info("task.deleted", extra={"extra_data": {"task_id": task_id}})
