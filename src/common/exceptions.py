from enum import Enum
import logging
from typing import Any
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy.exc import OperationalError

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class ResourceType(str, Enum):
    TASK = "Task"


# Exceptions
class ResourceNotFoundException(Exception):
    def __init__(self, resource_type: ResourceType, identifier: str):
        self.resource_type = resource_type.value
        self.identifier = identifier
        super().__init__(f"{self.resource_type} '{identifier}' not found")


class MalformedIdentifierException(Exception):
    def __init__(self, resource_type: ResourceType, identifier: str):
        self.resource_type = resource_type.value
        self.identifier = identifier
        super().__init__(
            f"'{identifier}' is not a valid {self.resource_type.lower()} identifier"
        )


class TaskValidationException(Exception):
    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Task validation failed: {'; '.join(errors)}")


# Exception handlers
def resource_not_found_handler(request: Request, exc: ResourceNotFoundException):
    logger.info(exc)
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"message": f"{exc.resource_type} not found"},
    )


def _internal_error() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": UNEXPECTED_ERROR_MESSAGE},
    )


# Validation and malformed identifier failures surface as 500, not 400.
def task_validation_handler(request: Request, exc: TaskValidationException):
    logger.error(exc)
    return _internal_error()


def malformed_identifier_handler(request: Request, exc: MalformedIdentifierException):
    logger.error(exc)
    return _internal_error()


def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.error(f"Invalid request to {request.url.path}: {exc.errors()}")
    return _internal_error()


def redis_connection_exception_handler(
    request: Request, exc: RedisConnectionError
):
    logger.error(f"Failed to connect to Redis: {exc}")
    return _internal_error()


def database_exception_handler(request: Request, exc: OperationalError):
    logger.error(f"Database operation failed: {exc}")
    return _internal_error()


def unexpected_exception_handler(request: Request, exc: Exception):
    logger.exception(exc)
    return _internal_error()


# Response definitions for OpenAPI documentation
ResponseDict = dict[int | str, dict[str, Any]]


def resource_not_found_response(
    resource_type: ResourceType,
) -> ResponseDict:
    return {
        404: {
            "description": f"{resource_type.value} not found",
            "content": {
                "application/json": {
                    "example": {"message": f"{resource_type.value} not found"}
                }
            },
        }
    }


internal_error_response: ResponseDict = {
    500: {
        "description": "Internal server error, including invalid input",
        "content": {
            "application/json": {"example": {"message": UNEXPECTED_ERROR_MESSAGE}}
        },
    }
}
