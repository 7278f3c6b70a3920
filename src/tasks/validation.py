from dataclasses import dataclass, field

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


@dataclass
class ValidationResult:
    name: str | None
    description: str | None
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate_task_fields(name: str | None, description: str | None) -> ValidationResult:
    """
    Trim and check the free-text task fields.

    The returned result carries the trimmed values, which are what gets stored.
    """
    errors: list[str] = []

    trimmed_name = name.strip() if name is not None else None
    trimmed_description = description.strip() if description is not None else None

    if not trimmed_name:
        errors.append("Task name is required")
    elif len(trimmed_name) > NAME_MAX_LENGTH:
        errors.append(f"Task name cannot exceed {NAME_MAX_LENGTH} characters")

    if (
        trimmed_description is not None
        and len(trimmed_description) > DESCRIPTION_MAX_LENGTH
    ):
        errors.append(f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters")

    return ValidationResult(
        name=trimmed_name, description=trimmed_description, errors=errors
    )
