from datetime import datetime

from src.common.current_datetime import to_utc
from src.tasks.schemas import Task, TaskCreate, TaskFilters, TaskUpdate
from src.tasks.store.base import TaskStore


def parse_query_datetime(value: str | None) -> datetime | None:
    """
    Parse an ISO-8601 date or date-time query value. Date-only and naive values
    are read as UTC. Unparsable values raise ValueError.
    """
    if not value:
        return None
    return to_utc(datetime.fromisoformat(value))


class TaskService:
    def __init__(self, task_store: TaskStore):
        self.task_store = task_store

    def list_tasks(
        self,
        name: str | None = None,
        due_date_from: str | None = None,
        due_date_to: str | None = None,
    ) -> list[Task]:
        filters = TaskFilters(
            name=name or None,
            due_date_from=parse_query_datetime(due_date_from),
            due_date_to=parse_query_datetime(due_date_to),
        )
        return self.task_store.list_tasks(filters)

    def get_task(self, task_id: str) -> Task:
        return self.task_store.get_task(task_id)

    def create_task(self, task_input: TaskCreate) -> Task:
        return self.task_store.create_task(task_input)

    def update_task(self, task_id: str, updates: TaskUpdate) -> Task:
        return self.task_store.update_task(task_id, updates)

    def delete_task(self, task_id: str) -> Task:
        return self.task_store.delete_task(task_id)
