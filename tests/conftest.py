from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from task_api.main import create_app


@pytest.fixture()
def app(tmp_path: Path) -> FastAPI:
    """Fresh app backed by a throwaway SQLite file."""
    return create_app(database_url=f"sqlite:///{tmp_path / 'tasks.db'}")


@pytest.fixture()
def client(app: FastAPI):
    # Context manager form runs the lifespan (connection check + create tables)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def create_task(client: TestClient):
    """Helper that creates a task through the API and returns its JSON."""

    def _create(title: str = "Buy groceries", **fields) -> dict:
        response = client.post("/api/tasks", json={"title": title, **fields})
        assert response.status_code == 201, response.text
        return response.json()

    return _create
