from abc import ABC, abstractmethod
from datetime import datetime

from src.common.current_datetime import to_utc
from src.common.exceptions import TaskValidationException
from src.tasks.identifier import TaskId
from src.tasks.schemas import Task, TaskCreate, TaskFilters, TaskUpdate
from src.tasks.validation import validate_task_fields


class TaskStore(ABC):
    @abstractmethod
    def list_tasks(self, filters: TaskFilters) -> list[Task]:
        pass

    @abstractmethod
    def get_task(self, task_id: str) -> Task:
        pass

    @abstractmethod
    def create_task(self, task_input: TaskCreate) -> Task:
        pass

    @abstractmethod
    def update_task(self, task_id: str, updates: TaskUpdate) -> Task:
        pass

    @abstractmethod
    def delete_task(self, task_id: str) -> Task:
        pass


def build_new_task(task_input: TaskCreate, task_id: TaskId, timestamp: datetime) -> Task:
    result = validate_task_fields(task_input.name, task_input.description)
    if not result.is_valid:
        raise TaskValidationException(result.errors)

    return Task(
        id=task_id,
        name=result.name,
        description=result.description,
        due_date=to_utc(task_input.due_date) if task_input.due_date else None,
        completed=task_input.completed if task_input.completed is not None else False,
        created_at=timestamp,
        updated_at=timestamp,
    )


def apply_task_updates(task: Task, updates: TaskUpdate, timestamp: datetime) -> Task:
    """
    Merge the explicitly supplied fields of `updates` into `task`.

    Fields left out of the request body are untouched. An explicit null clears
    description and due_date; for name it fails validation like an empty name.
    """
    supplied = updates.model_fields_set

    name = updates.name if "name" in supplied else task.name
    description = (
        updates.description if "description" in supplied else task.description
    )

    result = validate_task_fields(name, description)
    if not result.is_valid:
        raise TaskValidationException(result.errors)

    due_date = task.due_date
    if "due_date" in supplied:
        due_date = to_utc(updates.due_date) if updates.due_date else None

    completed = task.completed
    if "completed" in supplied and updates.completed is not None:
        completed = updates.completed

    return task.model_copy(
        update={
            "name": result.name,
            "description": result.description,
            "due_date": due_date,
            "completed": completed,
            "updated_at": max(timestamp, task.updated_at),
        }
    )


def task_matches_filters(task: Task, filters: TaskFilters) -> bool:
    if filters.name and filters.name.lower() not in task.name.lower():
        return False

    if filters.due_date_from is not None or filters.due_date_to is not None:
        if task.due_date is None:
            return False
        if (
            filters.due_date_from is not None
            and task.due_date < to_utc(filters.due_date_from)
        ):
            return False
        if filters.due_date_to is not None and task.due_date > to_utc(
            filters.due_date_to
        ):
            return False

    return True
