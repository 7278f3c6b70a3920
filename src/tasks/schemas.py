from datetime import datetime
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Task(CamelModel):
    id: str
    name: str
    description: str | None = None
    due_date: datetime | None = None
    completed: bool = False
    created_at: datetime
    updated_at: datetime


class TaskCreate(CamelModel):
    # name is checked by the store so a missing name fails like any other invalid value
    name: str | None = None
    description: str | None = None
    due_date: datetime | None = None
    completed: bool | None = None


class TaskUpdate(CamelModel):
    name: str | None = None
    description: str | None = None
    due_date: datetime | None = None
    completed: bool | None = None


class TaskFilters(BaseModel):
    name: str | None = None
    due_date_from: datetime | None = None
    due_date_to: datetime | None = None


class TaskResponse(BaseModel):
    task: Task


class TaskListResponse(BaseModel):
    tasks: list[Task]


class MessageResponse(BaseModel):
    message: str
