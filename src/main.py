import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy.exc import OperationalError

from src.common.database import create_database_engine
from src.common.exceptions import (
    MalformedIdentifierException,
    ResourceNotFoundException,
    TaskValidationException,
    database_exception_handler,
    internal_error_response,
    malformed_identifier_handler,
    redis_connection_exception_handler,
    request_validation_handler,
    resource_not_found_handler,
    task_validation_handler,
    unexpected_exception_handler,
)
from src.common.redis import close_redis_client, create_redis_client
from src.config import get_settings
from src.healthcheck.router import router as health_router
from src.tasks.router import router as tasks_router
from src.tasks.store.postgres.model import create_task_tables

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.redis_client = None
    app.state.database_engine = None

    if settings.TASK_STORE_BACKEND == "redis":
        app.state.redis_client = create_redis_client(settings.REDIS_URL)
    else:
        app.state.database_engine = create_database_engine(settings.POSTGRES_URL)
        create_task_tables(app.state.database_engine)

    logger.info(f"Task store backend: {settings.TASK_STORE_BACKEND}")
    yield

    if app.state.redis_client is not None:
        close_redis_client(app.state.redis_client)
    if app.state.database_engine is not None:
        app.state.database_engine.dispose()


app = FastAPI(
    title=settings.API_NAME,
    summary=settings.API_SUMMARY,
    lifespan=lifespan,
    responses={**internal_error_response},
    version=settings.APP_VERSION,
)

if settings.CORS_ENABLED:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.exception_handler(RequestValidationError)(request_validation_handler)
app.exception_handler(ResourceNotFoundException)(resource_not_found_handler)
app.exception_handler(TaskValidationException)(task_validation_handler)
app.exception_handler(MalformedIdentifierException)(malformed_identifier_handler)
app.exception_handler(RedisConnectionError)(redis_connection_exception_handler)
app.exception_handler(OperationalError)(database_exception_handler)
app.exception_handler(Exception)(unexpected_exception_handler)


app.include_router(health_router)
app.include_router(tasks_router)
