from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..crud.projects import (
    create_project,
    delete_project,
    get_project,
    list_projects,
    list_projects_on_date,
    update_project,
)
from ..crud.tasks import (
    create_task,
    delete_task,
    get_project_task,
    list_project_tasks,
    update_task,
)
from ..db.session import get_db
from ..models.project import Project
from ..schemas.project import ProjectCreate, ProjectDetail, ProjectOut, ProjectUpdate
from ..schemas.task import TaskCreate, TaskOut, TaskUpdate

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


def _project_to_schema(project: Project, *, include_tasks: bool = False) -> ProjectOut | ProjectDetail:
    base = ProjectOut.model_validate(project, from_attributes=True).model_copy(
        update={"task_count": len(project.tasks or [])}
    )
    if not include_tasks:
        return base
    detail = ProjectDetail(**base.model_dump(exclude={"status_label", "status_color"}))
    detail.tasks = [TaskOut.model_validate(task, from_attributes=True) for task in project.tasks_sorted]
    return detail


def _require_project(db: Session, project_id: int) -> Project:
    project = get_project(db, project_id)
    if not project:
        raise HTTPException(404, "Project not found")
    return project


@router.get("", response_model=list[ProjectOut])
def api_list_projects(on: Optional[date] = None, db: Session = Depends(get_db)):
    projects = list_projects_on_date(db, on) if on is not None else list_projects(db)
    return [_project_to_schema(project) for project in projects]


@router.post("", response_model=ProjectOut, status_code=201)
def api_create_project(payload: ProjectCreate, db: Session = Depends(get_db)):
    try:
        project = create_project(db, payload.model_dump(exclude_unset=True))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _project_to_schema(project)


@router.get("/{project_id}", response_model=ProjectDetail)
def api_get_project(project_id: int, db: Session = Depends(get_db)):
    project = _require_project(db, project_id)
    return _project_to_schema(project, include_tasks=True)


@router.patch("/{project_id}", response_model=ProjectOut)
def api_update_project(project_id: int, payload: ProjectUpdate, db: Session = Depends(get_db)):
    project = _require_project(db, project_id)
    try:
        updated = update_project(db, project, payload.model_dump(exclude_unset=True))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _project_to_schema(updated)


@router.delete("/{project_id}")
def api_delete_project(project_id: int, db: Session = Depends(get_db)):
    project = _require_project(db, project_id)
    delete_project(db, project)
    return {"status": "deleted"}


@router.get("/{project_id}/tasks", response_model=list[TaskOut])
def api_list_project_tasks(project_id: int, db: Session = Depends(get_db)):
    project = _require_project(db, project_id)
    return [TaskOut.model_validate(task, from_attributes=True) for task in list_project_tasks(db, project.id)]


@router.post("/{project_id}/tasks", response_model=TaskOut, status_code=201)
def api_create_project_task(project_id: int, payload: TaskCreate, db: Session = Depends(get_db)):
    project = _require_project(db, project_id)
    try:
        task = create_task(db, project, payload.model_dump(exclude_unset=True))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return TaskOut.model_validate(task, from_attributes=True)


@router.patch("/{project_id}/tasks/{task_id}", response_model=TaskOut)
def api_update_project_task(project_id: int, task_id: int, payload: TaskUpdate, db: Session = Depends(get_db)):
    project = _require_project(db, project_id)
    task = get_project_task(db, project, task_id)
    if not task:
        raise HTTPException(404, "Task not found")
    try:
        updated = update_task(db, task, payload.model_dump(exclude_unset=True))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return TaskOut.model_validate(updated, from_attributes=True)


@router.delete("/{project_id}/tasks/{task_id}")
def api_delete_project_task(project_id: int, task_id: int, db: Session = Depends(get_db)):
    project = _require_project(db, project_id)
    task = get_project_task(db, project, task_id)
    if not task:
        raise HTTPException(404, "Task not found")
    delete_task(db, task)
    return {"status": "deleted"}
