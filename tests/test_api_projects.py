"""Tests for the JSON API and the server-rendered pages."""

import os
import sys
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep the app-level SQLite file out of the working tree.
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="projex-tests-"))

from app import create_app
from app.db.session import Base, get_db


@pytest.fixture()
def client():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    Base.metadata.create_all(bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    application = create_app(init_db=False)
    application.dependency_overrides[get_db] = override_get_db
    with TestClient(application) as test_client:
        yield test_client


def _create(client, **payload):
    response = client.post("/api/v1/projects", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_and_fetch_project(client):
    created = _create(client, name="Website", start_date="2024-01-01", end_date="2024-01-10", status=1)

    assert created["status"] == 1
    assert created["status_label"] == "Running Behind"
    assert created["status_color"] == "red"
    assert created["task_count"] == 0

    detail = client.get(f"/api/v1/projects/{created['id']}").json()
    assert detail["name"] == "Website"
    assert detail["tasks"] == []


def test_list_projects_filters_by_selected_date(client):
    january = _create(client, name="January", start_date="2024-01-01", end_date="2024-01-10")
    _create(client, name="Undated")

    def names_on(day):
        response = client.get("/api/v1/projects", params={"on": day})
        assert response.status_code == 200
        return [p["name"] for p in response.json()]

    assert names_on("2024-01-01") == ["January"]
    assert names_on("2024-01-10") == ["January"]
    assert names_on("2024-01-11") == []
    assert names_on("2023-12-31") == []
    assert {p["id"] for p in client.get("/api/v1/projects").json()} >= {january["id"]}
    assert len(client.get("/api/v1/projects").json()) == 2


def test_unknown_status_is_coerced_on_write(client):
    created = _create(client, name="Odd", status=17)
    assert created["status"] == 0
    assert created["status_label"] == "On Time"


def test_inverted_range_is_rejected(client):
    response = client.post(
        "/api/v1/projects",
        json={"name": "Backwards", "start_date": "2024-02-01", "end_date": "2024-01-01"},
    )
    assert response.status_code == 422
    assert response.json()["code"] == "http_error"
    assert "end_date" in response.json()["message"]


def test_malformed_payload_uses_error_envelope(client):
    response = client.post("/api/v1/projects", json={"start_date": "not-a-date"})
    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "validation_error"
    assert body["details"]["errors"]


def test_missing_project_is_404(client):
    response = client.get("/api/v1/projects/999")
    assert response.status_code == 404
    assert response.json() == {"code": "not_found", "message": "Project not found"}


def test_task_lifecycle(client):
    project = _create(client, name="Launch")
    base = f"/api/v1/projects/{project['id']}/tasks"

    for name in ("Banana", "apple", "Cherry"):
        assert client.post(base, json={"name": name}).status_code == 201

    names = [t["name"] for t in client.get(base).json()]
    assert names == ["Banana", "Cherry", "apple"]

    task_id = client.get(base).json()[0]["id"]
    patched = client.patch(f"{base}/{task_id}", json={"status": 2})
    assert patched.status_code == 200
    assert patched.json()["status_color"] == "green"

    assert client.delete(f"{base}/{task_id}").json() == {"status": "deleted"}
    assert [t["name"] for t in client.get(base).json()] == ["Cherry", "apple"]
    assert client.get(f"/api/v1/projects/{project['id']}").json()["task_count"] == 2


def test_task_from_other_project_is_404(client):
    first = _create(client, name="First")
    second = _create(client, name="Second")
    task = client.post(f"/api/v1/projects/{first['id']}/tasks", json={"name": "Mine"}).json()

    response = client.patch(f"/api/v1/projects/{second['id']}/tasks/{task['id']}", json={"name": "Stolen"})
    assert response.status_code == 404


def test_delete_project(client):
    project = _create(client, name="Gone")
    client.post(f"/api/v1/projects/{project['id']}/tasks", json={"name": "Child"})

    assert client.delete(f"/api/v1/projects/{project['id']}").json() == {"status": "deleted"}
    assert client.get(f"/api/v1/projects/{project['id']}").status_code == 404


def test_index_page_lists_projects_for_date(client):
    _create(client, name="Visible", start_date="2024-01-01", end_date="2024-01-10", status=2)
    _create(client, name="Hidden", start_date="2024-02-01", end_date="2024-02-10")

    response = client.get("/", params={"date": "2024-01-05"})
    assert response.status_code == 200
    assert "Visible" in response.text
    assert "status-green" in response.text
    assert "Hidden" not in response.text
    assert response.headers["X-Request-ID"]


def test_ui_forms_create_project_and_task(client):
    response = client.post(
        "/projects/new",
        data={"name": "From form", "start_date": "2024-05-01", "end_date": "2024-05-02"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/?date=2024-05-01"

    project_id = client.get("/api/v1/projects").json()[0]["id"]
    response = client.post(
        f"/projects/{project_id}/tasks/new",
        data={"name": "", "start_date": "", "end_date": "", "status": "1"},
        follow_redirects=False,
    )
    assert response.status_code == 303

    page = client.get(f"/projects/{project_id}")
    assert "Unnamed Task" in page.text
    assert "No start date - No end date" in page.text


def test_ui_form_rerenders_on_inverted_range(client):
    response = client.post(
        "/projects/new",
        data={"name": "Bad", "start_date": "2024-05-02", "end_date": "2024-05-01"},
    )
    assert response.status_code == 422
    assert "end_date must be on or after start_date" in response.text


def test_non_integer_status_reads_as_on_time(client):
    response = client.post(
        "/api/v1/projects",
        content='{"name": "Huge", "status": 1e400}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 201, response.text
    assert response.json()["status"] == 0

    assert _create(client, name="Fraction", status=1.7)["status"] == 0


def test_ui_project_edit_saves_and_shows_status(client):
    project = _create(client, name="Before", start_date="2024-01-01", end_date="2024-01-10")

    response = client.post(
        f"/projects/{project['id']}",
        data={"name": "After", "start_date": "2024-01-02", "end_date": "2024-01-12", "status": "2"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert response.headers["location"] == f"/projects/{project['id']}"

    saved = client.get(f"/api/v1/projects/{project['id']}").json()
    assert saved["name"] == "After"
    assert saved["end_date"] == "2024-01-12"
    assert saved["status_color"] == "green"

    listing = client.get("/", params={"date": "2024-01-11"})
    assert "After" in listing.text
    assert "status-green" in listing.text


def test_ui_project_edit_keeps_rejected_input(client):
    project = _create(client, name="Stored", start_date="2024-01-01", end_date="2024-01-10")

    response = client.post(
        f"/projects/{project['id']}",
        data={"name": "Typed name", "start_date": "2024-03-05", "end_date": "2024-03-01", "status": "1"},
    )
    assert response.status_code == 422
    assert "end_date must be on or after start_date" in response.text
    assert 'value="Typed name"' in response.text
    assert 'value="2024-03-05"' in response.text
    assert client.get(f"/api/v1/projects/{project['id']}").json()["name"] == "Stored"


def test_ui_task_edit_shows_status_in_task_list(client):
    project = _create(client, name="Parent")
    task = client.post(f"/api/v1/projects/{project['id']}/tasks", json={"name": "Paint"}).json()

    response = client.post(
        f"/projects/{project['id']}/tasks/{task['id']}",
        data={"name": "Paint walls", "start_date": "2024-04-01", "end_date": "2024-04-03", "status": "2"},
        follow_redirects=False,
    )
    assert response.status_code == 303

    page = client.get(f"/projects/{project['id']}")
    assert "Paint walls" in page.text
    assert "status-green" in page.text
    assert "4/1/24 - 4/3/24" in page.text

    rejected = client.post(
        f"/projects/{project['id']}/tasks/{task['id']}",
        data={"name": "Typed", "start_date": "2024-04-05", "end_date": "2024-04-01", "status": "0"},
    )
    assert rejected.status_code == 422
    assert 'value="Typed"' in rejected.text


def test_ui_deletes_task_then_project(client):
    project = _create(client, name="Doomed", start_date="2024-01-01", end_date="2024-01-10")
    task = client.post(f"/api/v1/projects/{project['id']}/tasks", json={"name": "Gone soon"}).json()

    response = client.post(f"/projects/{project['id']}/tasks/{task['id']}/delete", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == f"/projects/{project['id']}"
    assert client.get(f"/api/v1/projects/{project['id']}/tasks").json() == []

    response = client.post(f"/projects/{project['id']}/delete", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/"
    assert client.get(f"/api/v1/projects/{project['id']}").status_code == 404
    assert "Doomed" not in client.get("/", params={"date": "2024-01-05"}).text


def test_index_page_falls_back_to_today_on_bad_date(client):
    response = client.get("/", params={"date": "someday"})
    assert response.status_code == 200
    assert "invalid date" in response.text
    assert "No projects on this date." in response.text


def test_health_endpoint():
    from app.main import app as served_app

    with TestClient(served_app) as test_client:
        response = test_client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}
