from datetime import datetime
from sqlalchemy import Boolean, DateTime, Engine, Integer, String, Text
from sqlalchemy.orm import declarative_base, Mapped, mapped_column

from src.config import get_settings
from src.tasks.validation import DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH


settings = get_settings()

Base = declarative_base()


class TaskModel(Base):
    __tablename__ = settings.TASK_STORE_NAMESPACE

    # Insertion order, used to break created_at ties when listing
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(32), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(
        Text(DESCRIPTION_MAX_LENGTH), nullable=True
    )
    due_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    def __init__(
        self,
        id: str,
        name: str,
        created_at: datetime,
        updated_at: datetime,
        description: str | None = None,
        due_date: datetime | None = None,
        completed: bool = False,
    ):
        self.id = id
        self.name = name
        self.description = description
        self.due_date = due_date
        self.completed = completed
        self.created_at = created_at
        self.updated_at = updated_at


def create_task_tables(engine: Engine) -> None:
    Base.metadata.create_all(engine)
