from fastapi import APIRouter, Depends, Query, status

from src.common.exceptions import (
    ResourceType,
    internal_error_response,
    resource_not_found_response,
)
from src.tasks.dependencies import get_task_service
from src.tasks.schemas import (
    MessageResponse,
    TaskCreate,
    TaskListResponse,
    TaskResponse,
    TaskUpdate,
)
from src.tasks.service import TaskService


router = APIRouter(
    prefix="/tasks",
    tags=["Tasks"],
    responses={**internal_error_response},
)


@router.get("", response_model_exclude_none=True)
def list_tasks(
    name: str | None = None,
    due_date_from: str | None = Query(
        default=None,
        alias="dueDateFrom",
        description="ISO-8601 date or date-time, inclusive",
    ),
    due_date_to: str | None = Query(
        default=None,
        alias="dueDateTo",
        description="ISO-8601 date or date-time, inclusive",
    ),
    task_service: TaskService = Depends(get_task_service),
) -> TaskListResponse:
    tasks = task_service.list_tasks(
        name=name, due_date_from=due_date_from, due_date_to=due_date_to
    )
    return TaskListResponse(tasks=tasks)


@router.get(
    "/{task_id}",
    response_model_exclude_none=True,
    responses={**resource_not_found_response(ResourceType.TASK)},
)
def get_task(
    task_id: str, task_service: TaskService = Depends(get_task_service)
) -> TaskResponse:
    return TaskResponse(task=task_service.get_task(task_id))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model_exclude_none=True,
)
def create_task(
    task_input: TaskCreate,
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return TaskResponse(task=task_service.create_task(task_input))


@router.put(
    "/{task_id}",
    response_model_exclude_none=True,
    responses={**resource_not_found_response(ResourceType.TASK)},
)
def update_task(
    task_id: str,
    updates: TaskUpdate,
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return TaskResponse(task=task_service.update_task(task_id, updates))


@router.delete(
    "/{task_id}",
    responses={**resource_not_found_response(ResourceType.TASK)},
)
def delete_task(
    task_id: str, task_service: TaskService = Depends(get_task_service)
) -> MessageResponse:
    task_service.delete_task(task_id)
    return MessageResponse(message="Task deleted successfully")
