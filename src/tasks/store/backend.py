from sqlalchemy import Engine

from src.config import Settings
from src.common.redis import RedisClient
from src.tasks.store.base import TaskStore
from src.tasks.store.postgres.store import PostgresTaskStore
from src.tasks.store.redis_store import RedisTaskStore


def get_task_store_backend(
    settings: Settings,
    *,
    redis_client: RedisClient | None = None,
    database_engine: Engine | None = None,
) -> TaskStore:
    if settings.TASK_STORE_BACKEND == "postgres":
        if database_engine is None:
            raise RuntimeError("Database engine has not been initialized")
        return PostgresTaskStore(engine=database_engine)
    elif settings.TASK_STORE_BACKEND == "redis":
        if redis_client is None:
            raise RuntimeError("Redis client has not been initialized")
        return RedisTaskStore(
            redis_client=redis_client,
            key_prefix=settings.TASK_STORE_NAMESPACE,
        )
    else:
        raise ValueError(
            f"Unsupported task store backend: {settings.TASK_STORE_BACKEND}"
        )
