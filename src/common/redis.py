import logging
from fastapi import Request
from redis import Redis
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)


RedisClient = Redis
if TYPE_CHECKING:
    RedisClient = Redis[str]  # type: ignore


def create_redis_client(redis_url: str) -> RedisClient:
    try:
        # decode_responses keeps hash fields as str for the task store
        return Redis.from_url(redis_url, decode_responses=True)
    except Exception as e:
        raise RuntimeError("Failed to create Redis client") from e


def close_redis_client(redis_client: RedisClient) -> None:
    try:
        redis_client.close()
    except Exception as e:
        logger.warning(f"Error while closing Redis client: {e}")


def get_redis_client(request: Request) -> RedisClient | None:
    return getattr(request.app.state, "redis_client", None)
