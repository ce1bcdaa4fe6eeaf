"""Server-rendered pages: the dated project list and the project/task forms."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from ..core.jinja import get_templates, today
from ..crud.projects import (
    create_project,
    delete_project,
    get_project,
    list_projects_on_date,
    update_project,
)
from ..crud.tasks import create_task, delete_task, get_project_task, update_task
from ..db.session import get_db
from ..models.project import Project
from ..services.schedule import parse_date

templates = get_templates()

router = APIRouter()


def _form_payload(name: str, start_date: str, end_date: str, status: str | None = None) -> dict:
    payload = {"name": name, "start_date": start_date, "end_date": end_date}
    if status is not None:
        payload["status"] = status
    return payload


def _record_form(record) -> dict:
    return {
        "name": record.name or "",
        "start_date": record.start_date.isoformat() if record.start_date else "",
        "end_date": record.end_date.isoformat() if record.end_date else "",
        "status": str(record.task_status.value),
    }


def _load_project(db: Session, project_id: int) -> Project:
    project = get_project(db, project_id)
    if not project:
        raise HTTPException(404, "Project not found")
    return project


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=303)


@router.get("/", response_class=HTMLResponse)
def index_page(request: Request, date: str = "", db: Session = Depends(get_db)):
    error = ""
    try:
        selected = parse_date(date) or today()
    except ValueError as exc:
        selected = today()
        error = str(exc)
    projects = list_projects_on_date(db, selected)
    context = {"selected_date": selected, "projects": projects, "error": error}
    return templates.TemplateResponse(request, "index.html", context)


@router.get("/projects/new", response_class=HTMLResponse)
def new_project_page(request: Request):
    day = today().isoformat()
    form = {"name": "", "start_date": day, "end_date": day}
    return templates.TemplateResponse(request, "project_new.html", {"form": form, "error": ""})


@router.post("/projects/new", response_class=HTMLResponse)
def new_project_submit(
    request: Request,
    name: str = Form(""),
    start_date: str = Form(""),
    end_date: str = Form(""),
    db: Session = Depends(get_db),
):
    payload = _form_payload(name, start_date, end_date)
    try:
        project = create_project(db, payload)
    except ValueError as exc:
        context = {"form": payload, "error": str(exc)}
        return templates.TemplateResponse(request, "project_new.html", context, status_code=422)
    return _redirect(f"/?date={project.start_date.isoformat()}" if project.start_date else "/")


@router.get("/projects/{project_id}", response_class=HTMLResponse)
def project_detail_page(request: Request, project_id: int, db: Session = Depends(get_db)):
    project = _load_project(db, project_id)
    context = {"project": project, "form": _record_form(project), "error": ""}
    return templates.TemplateResponse(request, "project_detail.html", context)


@router.post("/projects/{project_id}", response_class=HTMLResponse)
def project_detail_submit(
    request: Request,
    project_id: int,
    name: str = Form(""),
    start_date: str = Form(""),
    end_date: str = Form(""),
    status: str = Form("0"),
    db: Session = Depends(get_db),
):
    project = _load_project(db, project_id)
    payload = _form_payload(name, start_date, end_date, status)
    try:
        update_project(db, project, payload)
    except ValueError as exc:
        context = {"project": project, "form": payload, "error": str(exc)}
        return templates.TemplateResponse(request, "project_detail.html", context, status_code=422)
    return _redirect(f"/projects/{project.id}")


@router.post("/projects/{project_id}/delete")
def project_delete(project_id: int, db: Session = Depends(get_db)):
    project = _load_project(db, project_id)
    delete_project(db, project)
    return _redirect("/")


@router.get("/projects/{project_id}/tasks/new", response_class=HTMLResponse)
def new_task_page(request: Request, project_id: int, db: Session = Depends(get_db)):
    project = _load_project(db, project_id)
    day = today().isoformat()
    form = {"name": "", "start_date": day, "end_date": day, "status": "0"}
    return templates.TemplateResponse(request, "task_new.html", {"project": project, "form": form, "error": ""})


@router.post("/projects/{project_id}/tasks/new", response_class=HTMLResponse)
def new_task_submit(
    request: Request,
    project_id: int,
    name: str = Form(""),
    start_date: str = Form(""),
    end_date: str = Form(""),
    status: str = Form("0"),
    db: Session = Depends(get_db),
):
    project = _load_project(db, project_id)
    payload = _form_payload(name, start_date, end_date, status)
    try:
        create_task(db, project, payload)
    except ValueError as exc:
        context = {"project": project, "form": payload, "error": str(exc)}
        return templates.TemplateResponse(request, "task_new.html", context, status_code=422)
    return _redirect(f"/projects/{project.id}")


@router.get("/projects/{project_id}/tasks/{task_id}", response_class=HTMLResponse)
def task_detail_page(request: Request, project_id: int, task_id: int, db: Session = Depends(get_db)):
    project = _load_project(db, project_id)
    task = get_project_task(db, project, task_id)
    if not task:
        raise HTTPException(404, "Task not found")
    context = {"project": project, "task": task, "form": _record_form(task), "error": ""}
    return templates.TemplateResponse(request, "task_detail.html", context)


@router.post("/projects/{project_id}/tasks/{task_id}", response_class=HTMLResponse)
def task_detail_submit(
    request: Request,
    project_id: int,
    task_id: int,
    name: str = Form(""),
    start_date: str = Form(""),
    end_date: str = Form(""),
    status: str = Form("0"),
    db: Session = Depends(get_db),
):
    project = _load_project(db, project_id)
    task = get_project_task(db, project, task_id)
    if not task:
        raise HTTPException(404, "Task not found")
    payload = _form_payload(name, start_date, end_date, status)
    try:
        update_task(db, task, payload)
    except ValueError as exc:
        context = {"project": project, "task": task, "form": payload, "error": str(exc)}
        return templates.TemplateResponse(request, "task_detail.html", context, status_code=422)
    return _redirect(f"/projects/{project.id}")


@router.post("/projects/{project_id}/tasks/{task_id}/delete")
def task_delete(project_id: int, task_id: int, db: Session = Depends(get_db)):
    project = _load_project(db, project_id)
    task = get_project_task(db, project, task_id)
    if not task:
        raise HTTPException(404, "Task not found")
    delete_task(db, task)
    return _redirect(f"/projects/{project.id}")
