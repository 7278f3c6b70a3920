import pytest

from src.common.exceptions import MalformedIdentifierException
from src.tasks.identifier import TASK_ID_PATTERN, generate_task_id, parse_task_id


def test_generated_ids_are_well_formed_and_unique() -> None:
    ids = {generate_task_id() for _ in range(100)}

    assert len(ids) == 100
    assert all(TASK_ID_PATTERN.fullmatch(task_id) for task_id in ids)


def test_parse_task_id_normalizes_case() -> None:
    assert parse_task_id("ABCDEF0123456789ABCDEF0123456789") == (
        "abcdef0123456789abcdef0123456789"
    )


@pytest.mark.parametrize(
    "value",
    [
        "",
        "invalid-id",
        "abcdef0123456789abcdef012345678",  # 31 chars
        "abcdef0123456789abcdef01234567890",  # 33 chars
        "ghijkl0123456789abcdef0123456789",
        "507f1f77bcf86cd799439011",
    ],
)
def test_parse_task_id_rejects_malformed_values(value: str) -> None:
    with pytest.raises(MalformedIdentifierException) as exc_info:
        parse_task_id(value)

    assert exc_info.value.identifier == value
    assert exc_info.value.resource_type == "Task"
