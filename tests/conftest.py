from pathlib import Path
from typing import Generator
import pytest
from sqlalchemy import Engine, create_engine

from src.tasks.store.postgres.model import create_task_tables
from src.tasks.store.postgres.store import PostgresTaskStore


@pytest.fixture
def test_database_url(tmp_path: Path) -> str:
    db_path: Path = tmp_path / "test_tasks.db"
    return f"sqlite:///{db_path}"


@pytest.fixture
def database_engine(test_database_url: str) -> Generator[Engine, None, None]:
    engine = create_engine(test_database_url)
    create_task_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def task_store(database_engine: Engine) -> PostgresTaskStore:
    return PostgresTaskStore(engine=database_engine)
