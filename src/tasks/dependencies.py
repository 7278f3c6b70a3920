from fastapi import Depends
from sqlalchemy import Engine

from src.common.database import get_database_engine
from src.common.redis import RedisClient, get_redis_client
from src.config import Settings, get_settings
from src.tasks.service import TaskService
from src.tasks.store.backend import get_task_store_backend
from src.tasks.store.base import TaskStore


def get_task_store(
    redis_client: RedisClient | None = Depends(get_redis_client),
    database_engine: Engine | None = Depends(get_database_engine),
    settings: Settings = Depends(get_settings),
) -> TaskStore:
    return get_task_store_backend(
        settings, redis_client=redis_client, database_engine=database_engine
    )


def get_task_service(
    task_store: TaskStore = Depends(get_task_store),
) -> TaskService:
    return TaskService(task_store=task_store)
