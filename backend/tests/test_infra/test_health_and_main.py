"""Tests for health endpoint, main app, config and CORS."""

import os
import sys
from datetime import datetime, timezone

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from fastapi.testclient import TestClient

from taskmanager.api.health import VERSION, HealthStatus
from taskmanager.config import Settings
from taskmanager.main import create_app
from taskmanager.models.task import TaskInput
from taskmanager.services.task_service import TaskService


class BrokenService(TaskService):
    def get_tasks(self):
        raise RuntimeError("store unavailable")


# === HealthStatus Model Tests ===


def test_health_status_model():
    status = HealthStatus(
        status="ok",
        version="0.1.0",
        checks={"repository": {"status": "ok", "detail": "0 tasks"}},
        timestamp=datetime.now(timezone.utc),
    )
    assert status.status == "ok"
    assert "repository" in status.checks
    print("  PASS: health_status_model")


# === Health Endpoint Tests ===


def test_health_endpoint(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["version"] == VERSION
    assert data["checks"]["repository"] == {"status": "ok", "detail": "0 tasks"}
    assert "timestamp" in data


def test_health_reports_task_count(client, service):
    service.create_task(TaskInput(title="One"))
    service.create_task(TaskInput(title="Two"))
    data = client.get("/health").json()
    assert data["checks"]["repository"]["detail"] == "2 tasks"


def test_health_reports_repository_error(repository):
    client = TestClient(create_app(BrokenService(repository)))
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "error"
    assert data["checks"]["repository"]["status"] == "error"
    assert "store unavailable" in data["checks"]["repository"]["detail"]


# === Main App Tests ===


def test_root_endpoint(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"name": "TaskManager", "version": VERSION, "status": "running"}


def test_default_app_serves_tasks():
    from taskmanager.main import app

    client = TestClient(app)
    resp = client.get("/api/v1/tasks")
    assert resp.status_code == 200
    assert "count" in resp.json()


def test_lifespan_runs(service):
    with TestClient(create_app(service)) as client:
        assert client.get("/health").status_code == 200


def test_cors_headers(client):
    resp = client.options(
        "/api/v1/tasks",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "GET",
        },
    )
    assert resp.headers.get("access-control-allow-origin") == "http://localhost:3000"


def test_cors_origins_from_settings(service):
    app_settings = Settings(cors_origins="https://tasks.example.com, https://admin.example.com")
    client = TestClient(create_app(service, app_settings))
    resp = client.options(
        "/api/v1/tasks",
        headers={
            "Origin": "https://admin.example.com",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert resp.headers.get("access-control-allow-origin") == "https://admin.example.com"


# === Settings ===


def test_settings_defaults(monkeypatch):
    for name in ("HOST", "PORT", "LOG_LEVEL", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.host == "0.0.0.0"
    assert s.port == 8080
    assert s.log_level == "INFO"
    assert s.cors_origin_list() == ["http://localhost:3000"]


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("PORT", "9090")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    s = Settings(_env_file=None)
    assert s.port == 9090
    assert s.log_level == "DEBUG"


def test_cors_origin_list_skips_blanks():
    s = Settings(_env_file=None, cors_origins="a.example, ,b.example,")
    assert s.cors_origin_list() == ["a.example", "b.example"]
