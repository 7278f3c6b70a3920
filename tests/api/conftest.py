from typing import Generator
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.main import app as main_app
from src.tasks.dependencies import get_task_store
from src.tasks.store.postgres.store import PostgresTaskStore


@pytest.fixture
def test_app(task_store: PostgresTaskStore) -> Generator[FastAPI, None, None]:
    main_app.dependency_overrides[get_task_store] = lambda: task_store
    yield main_app
    main_app.dependency_overrides.clear()


@pytest.fixture
def test_client(test_app: FastAPI) -> TestClient:
    # Unhandled errors must come back as 500 responses instead of being re-raised
    return TestClient(test_app, raise_server_exceptions=False)
