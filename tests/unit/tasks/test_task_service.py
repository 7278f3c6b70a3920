from datetime import datetime, timedelta, timezone
from unittest.mock import Mock
import pytest
from pytest_mock import MockerFixture

from src.tasks.schemas import TaskCreate, TaskFilters, TaskUpdate
from src.tasks.service import TaskService, parse_query_datetime
from src.tasks.store.base import TaskStore

TASK_ID = "0123456789abcdef0123456789abcdef"


@pytest.fixture
def mock_task_store(mocker: MockerFixture) -> Mock:
    return mocker.Mock(spec=TaskStore)


@pytest.fixture
def task_service(mock_task_store: Mock) -> TaskService:
    return TaskService(task_store=mock_task_store)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2025-11-01T00:00:00Z", datetime(2025, 11, 1, tzinfo=timezone.utc)),
        ("2025-11-15", datetime(2025, 11, 15, tzinfo=timezone.utc)),
        ("2025-11-30T23:59:59", datetime(2025, 11, 30, 23, 59, 59, tzinfo=timezone.utc)),
        (
            "2025-11-01T02:00:00+02:00",
            datetime(2025, 11, 1, tzinfo=timezone.utc),
        ),
    ],
)
def test_parse_query_datetime(value: str, expected: datetime) -> None:
    parsed = parse_query_datetime(value)

    assert parsed == expected
    assert parsed is not None and parsed.utcoffset() == timedelta(0)


@pytest.mark.parametrize("value", [None, ""])
def test_parse_query_datetime_absent(value: str | None) -> None:
    assert parse_query_datetime(value) is None


def test_parse_query_datetime_invalid() -> None:
    with pytest.raises(ValueError):
        parse_query_datetime("not-a-date")


def test_list_tasks_builds_filters(
    task_service: TaskService, mock_task_store: Mock
) -> None:
    mock_task_store.list_tasks.return_value = []

    result = task_service.list_tasks(
        name="project",
        due_date_from="2025-11-01T00:00:00Z",
        due_date_to="2025-11-30T23:59:59Z",
    )

    assert result == []
    mock_task_store.list_tasks.assert_called_once_with(
        TaskFilters(
            name="project",
            due_date_from=datetime(2025, 11, 1, tzinfo=timezone.utc),
            due_date_to=datetime(2025, 11, 30, 23, 59, 59, tzinfo=timezone.utc),
        )
    )


def test_list_tasks_treats_empty_values_as_absent(
    task_service: TaskService, mock_task_store: Mock
) -> None:
    task_service.list_tasks(name="", due_date_from="", due_date_to=None)

    mock_task_store.list_tasks.assert_called_once_with(TaskFilters())


def test_list_tasks_invalid_date_does_not_reach_store(
    task_service: TaskService, mock_task_store: Mock
) -> None:
    with pytest.raises(ValueError):
        task_service.list_tasks(due_date_from="yesterday")

    mock_task_store.list_tasks.assert_not_called()


def test_operations_delegate_to_store(
    task_service: TaskService, mock_task_store: Mock
) -> None:
    task_input = TaskCreate(name="Task")
    updates = TaskUpdate(completed=True)

    assert task_service.get_task(TASK_ID) is mock_task_store.get_task.return_value
    assert (
        task_service.create_task(task_input)
        is mock_task_store.create_task.return_value
    )
    assert (
        task_service.update_task(TASK_ID, updates)
        is mock_task_store.update_task.return_value
    )
    assert (
        task_service.delete_task(TASK_ID) is mock_task_store.delete_task.return_value
    )

    mock_task_store.get_task.assert_called_once_with(TASK_ID)
    mock_task_store.create_task.assert_called_once_with(task_input)
    mock_task_store.update_task.assert_called_once_with(TASK_ID, updates)
    mock_task_store.delete_task.assert_called_once_with(TASK_ID)
