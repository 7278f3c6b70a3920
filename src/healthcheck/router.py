from typing import Any
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import Engine, text

from src.config import Settings, get_settings
from src.common.database import get_database_engine
from src.common.redis import RedisClient, get_redis_client

router = APIRouter()


@router.get(
    "/healthcheck",
    tags=["Healthcheck"],
    status_code=status.HTTP_200_OK,
    responses={
        200: {
            "description": "Healthcheck status",
            "content": {
                "application/json": {
                    "example": {
                        "api": {"status": "ok"},
                        "postgres": {"status": "ok"},
                    }
                }
            },
        },
        503: {
            "description": "Service unavailable",
            "content": {
                "application/json": {
                    "example": {
                        "api": {"status": "ok"},
                        "postgres": {
                            "status": "error",
                            "message": "Connection error or unexpected result",
                        },
                    }
                }
            },
        },
    },
)
def healthcheck(
    settings: Settings = Depends(get_settings),
    redis_client: RedisClient | None = Depends(get_redis_client),
    database_engine: Engine | None = Depends(get_database_engine),
) -> JSONResponse:
    backend = settings.TASK_STORE_BACKEND
    health_status: dict[str, Any] = {
        "api": {"status": "ok"},
        backend: {"status": "ok"},
    }
    has_error = False

    try:
        if backend == "redis":
            if redis_client is None:
                raise Exception("Redis client has not been initialized")
            redis_client.ping()
        else:
            if database_engine is None:
                raise Exception("Database engine has not been initialized")
            with database_engine.connect() as connection:
                result = connection.execute(text("SELECT 1")).scalar()
                if result != 1:
                    raise Exception("Postgres health check failed")
    except Exception as e:
        health_status[backend].update({"status": "error", "message": str(e)})
        has_error = True

    if has_error:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=health_status
        )

    return JSONResponse(status_code=status.HTTP_200_OK, content=health_status)
