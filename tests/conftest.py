# tests/conftest.py

from __future__ import annotations

import pytest

from taskmaster.app import create_app
from taskmaster.config import Config


class SQLiteConfig(Config):
    """In-memory SQLite; Flask-SQLAlchemy shares one connection across sessions for it."""

    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    ENABLE_DELETE_ALL = False
    LOG_LEVEL = "DEBUG"


@pytest.fixture()
def app():
    return create_app(SQLiteConfig)


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def login(client):
    """Resolve a username to its userId through the API."""

    def _login(username: str) -> int:
        resp = client.get("/api", query_string={"action": "getUserAndTasks", "username": username})
        assert resp.status_code == 200, resp.get_json()
        return resp.get_json()["userId"]

    return _login


@pytest.fixture()
def add_task(client):
    """Create a task through the API and return the task payload."""

    def _add(user_id: int, text: str, **extra) -> dict:
        resp = client.post("/api", json={"action": "addTask", "userId": user_id, "text": text, **extra})
        assert resp.status_code == 200, resp.get_json()
        return resp.get_json()["task"]

    return _add


@pytest.fixture()
def fetch_tasks(client):
    def _fetch(username: str) -> list[dict]:
        resp = client.get("/api", query_string={"action": "getUserAndTasks", "username": username})
        assert resp.status_code == 200, resp.get_json()
        return resp.get_json()["tasks"]

    return _fetch
