import re
from typing import NewType
from uuid import uuid4

from src.common.exceptions import MalformedIdentifierException, ResourceType

TaskId = NewType("TaskId", str)

TASK_ID_PATTERN = re.compile(r"[0-9a-f]{32}")


def generate_task_id() -> TaskId:
    return TaskId(uuid4().hex)


def parse_task_id(value: str) -> TaskId:
    """
    Validate the textual form of a task identifier: 32 hexadecimal characters.
    Upper-case input is accepted and normalized to lower case.

    Raises MalformedIdentifierException rather than a not-found error, so callers
    can tell a bad identifier apart from a missing record.
    """
    normalized = value.lower()
    if not TASK_ID_PATTERN.fullmatch(normalized):
        raise MalformedIdentifierException(ResourceType.TASK, value)
    return TaskId(normalized)
