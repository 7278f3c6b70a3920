import logging
from datetime import datetime
from typing import TypedDict

from redis.client import Pipeline

from src.common.current_datetime import get_current_datetime, to_utc
from src.common.exceptions import ResourceNotFoundException, ResourceType
from src.common.redis import RedisClient
from src.tasks.identifier import generate_task_id, parse_task_id
from src.tasks.schemas import Task, TaskCreate, TaskFilters, TaskUpdate
from src.tasks.store.base import (
    TaskStore,
    apply_task_updates,
    build_new_task,
    task_matches_filters,
)

logger = logging.getLogger(__name__)


class TaskMapping(TypedDict, total=False):
    id: str
    name: str
    description: str
    due_date: str
    completed: str
    created_at: str
    updated_at: str


class RedisTaskStore(TaskStore):
    """
    Tasks are stored as one hash per task under `{key_prefix}:{task_id}`.

    Insertion order is kept in the sorted set `{key_prefix}:index`, scored by an
    insertion counter. Listings sort by created_at, newest first, and fall back
    to insertion order for tasks created within the same clock tick.
    """

    def __init__(self, *, redis_client: RedisClient, key_prefix: str):
        self.client = redis_client
        self.key_prefix = key_prefix
        self.index_key = f"{key_prefix}:index"
        self.sequence_key = f"{key_prefix}:sequence"

    def _get_task_key(self, task_id: str) -> str:
        return f"{self.key_prefix}:{task_id}"

    def _serialize_task(self, task: Task) -> TaskMapping:
        mapping: TaskMapping = {
            "id": task.id,
            "name": task.name,
            "completed": "1" if task.completed else "0",
            "created_at": task.created_at.isoformat(),
            "updated_at": task.updated_at.isoformat(),
        }
        if task.description is not None:
            mapping["description"] = task.description
        if task.due_date is not None:
            mapping["due_date"] = task.due_date.isoformat()
        return mapping

    def _deserialize_task(self, mapping: dict[str, str]) -> Task:
        due_date = mapping.get("due_date")
        return Task(
            id=mapping["id"],
            name=mapping["name"],
            description=mapping.get("description"),
            due_date=to_utc(datetime.fromisoformat(due_date)) if due_date else None,
            completed=mapping["completed"] == "1",
            created_at=to_utc(datetime.fromisoformat(mapping["created_at"])),
            updated_at=to_utc(datetime.fromisoformat(mapping["updated_at"])),
        )

    def list_tasks(self, filters: TaskFilters) -> list[Task]:
        task_ids: list[str] = self.client.zrevrange(self.index_key, 0, -1)

        pipeline = self.client.pipeline()
        for task_id in task_ids:
            pipeline.hgetall(self._get_task_key(task_id))
        results = pipeline.execute()

        tasks = [self._deserialize_task(mapping) for mapping in results if mapping]
        # The index is in insertion order, newest first; the stable sort keeps that
        # order among tasks sharing a created_at
        tasks.sort(key=lambda task: task.created_at, reverse=True)
        return [task for task in tasks if task_matches_filters(task, filters)]

    def get_task(self, task_id: str) -> Task:
        task_id = parse_task_id(task_id)
        mapping = self.client.hgetall(self._get_task_key(task_id))

        if not mapping:
            raise ResourceNotFoundException(ResourceType.TASK, task_id)

        return self._deserialize_task(mapping)

    def create_task(self, task_input: TaskCreate) -> Task:
        task = build_new_task(task_input, generate_task_id(), get_current_datetime())

        sequence = self.client.incr(self.sequence_key)

        pipeline = self.client.pipeline()
        pipeline.hset(self._get_task_key(task.id), mapping=self._serialize_task(task))  # type: ignore
        pipeline.zadd(self.index_key, {task.id: sequence})
        pipeline.execute()

        logger.info(f"Created task '{task.id}'")
        return task

    def update_task(self, task_id: str, updates: TaskUpdate) -> Task:
        task_id = parse_task_id(task_id)
        task_key = self._get_task_key(task_id)

        # Runs under WATCH on the task key; redis-py retries it if the key changes
        # (e.g. a concurrent delete) before EXEC
        def _apply_update(pipeline: Pipeline) -> Task:
            mapping = pipeline.hgetall(task_key)
            if not mapping:
                raise ResourceNotFoundException(ResourceType.TASK, task_id)

            updated_task = apply_task_updates(
                self._deserialize_task(mapping), updates, get_current_datetime()
            )
            cleared_fields = [
                field
                for field, value in (
                    ("description", updated_task.description),
                    ("due_date", updated_task.due_date),
                )
                if value is None
            ]

            pipeline.multi()
            pipeline.hset(task_key, mapping=self._serialize_task(updated_task))  # type: ignore
            if cleared_fields:
                pipeline.hdel(task_key, *cleared_fields)
            return updated_task

        updated_task: Task = self.client.transaction(
            _apply_update, task_key, value_from_callable=True
        )

        logger.info(f"Updated task '{updated_task.id}'")
        return updated_task

    def delete_task(self, task_id: str) -> Task:
        task = self.get_task(task_id)

        pipeline = self.client.pipeline()
        pipeline.delete(self._get_task_key(task.id))
        pipeline.zrem(self.index_key, task.id)
        pipeline.execute()

        logger.info(f"Deleted task '{task.id}'")
        return task
