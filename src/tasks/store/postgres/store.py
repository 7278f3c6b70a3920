import logging
from sqlalchemy import Engine
from sqlalchemy.orm import sessionmaker

from src.common.current_datetime import get_current_datetime, to_utc
from src.common.exceptions import ResourceNotFoundException, ResourceType
from src.tasks.identifier import generate_task_id, parse_task_id
from src.tasks.schemas import Task, TaskCreate, TaskFilters, TaskUpdate
from src.tasks.store.base import TaskStore, apply_task_updates, build_new_task
from src.tasks.store.postgres.model import TaskModel

logger = logging.getLogger(__name__)

LIKE_ESCAPE_CHAR = "\\"


def escape_like(value: str) -> str:
    return (
        value.replace(LIKE_ESCAPE_CHAR, LIKE_ESCAPE_CHAR * 2)
        .replace("%", f"{LIKE_ESCAPE_CHAR}%")
        .replace("_", f"{LIKE_ESCAPE_CHAR}_")
    )


class PostgresTaskStore(TaskStore):
    def __init__(self, engine: Engine):
        self.engine = engine
        self.Session = sessionmaker(bind=self.engine)

    def _to_task(self, model: TaskModel) -> Task:
        # SQLite hands back naive datetimes; everything is stored as UTC
        return Task(
            id=model.id,
            name=model.name,
            description=model.description,
            due_date=to_utc(model.due_date) if model.due_date else None,
            completed=model.completed,
            created_at=to_utc(model.created_at),
            updated_at=to_utc(model.updated_at),
        )

    def list_tasks(self, filters: TaskFilters) -> list[Task]:
        with self.Session() as session:
            query = session.query(TaskModel)

            if filters.name:
                query = query.filter(
                    TaskModel.name.ilike(
                        f"%{escape_like(filters.name)}%", escape=LIKE_ESCAPE_CHAR
                    )
                )
            if filters.due_date_from is not None:
                query = query.filter(TaskModel.due_date >= to_utc(filters.due_date_from))
            if filters.due_date_to is not None:
                query = query.filter(TaskModel.due_date <= to_utc(filters.due_date_to))

            models = query.order_by(
                TaskModel.created_at.desc(), TaskModel.seq.desc()
            ).all()

            return [self._to_task(model) for model in models]

    def get_task(self, task_id: str) -> Task:
        task_id = parse_task_id(task_id)

        with self.Session() as session:
            model = session.query(TaskModel).filter_by(id=task_id).first()

            if not model:
                raise ResourceNotFoundException(ResourceType.TASK, task_id)

            return self._to_task(model)

    def create_task(self, task_input: TaskCreate) -> Task:
        task = build_new_task(task_input, generate_task_id(), get_current_datetime())

        with self.Session() as session:
            session.add(
                TaskModel(
                    id=task.id,
                    name=task.name,
                    description=task.description,
                    due_date=task.due_date,
                    completed=task.completed,
                    created_at=task.created_at,
                    updated_at=task.updated_at,
                )
            )
            session.commit()

        logger.info(f"Created task '{task.id}'")
        return task

    def update_task(self, task_id: str, updates: TaskUpdate) -> Task:
        task_id = parse_task_id(task_id)

        with self.Session() as session:
            model = session.query(TaskModel).filter_by(id=task_id).first()

            if not model:
                raise ResourceNotFoundException(ResourceType.TASK, task_id)

            updated_task = apply_task_updates(
                self._to_task(model), updates, get_current_datetime()
            )

            model.name = updated_task.name
            model.description = updated_task.description
            model.due_date = updated_task.due_date
            model.completed = updated_task.completed
            model.updated_at = updated_task.updated_at
            session.commit()

        logger.info(f"Updated task '{task_id}'")
        return updated_task

    def delete_task(self, task_id: str) -> Task:
        task_id = parse_task_id(task_id)

        with self.Session() as session:
            model = session.query(TaskModel).filter_by(id=task_id).first()

            if not model:
                raise ResourceNotFoundException(ResourceType.TASK, task_id)

            task = self._to_task(model)
            session.delete(model)
            session.commit()

        logger.info(f"Deleted task '{task_id}'")
        return task
