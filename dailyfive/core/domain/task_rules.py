"""
Task Rules - catalog validation and assignment state rules.

AICODE-NOTE: Pure functions without DB access.
Validation is used by the admin catalog endpoint and the seed script.
"""

import math
from dataclasses import dataclass
from typing import Any, Literal

TaskCategory = Literal["learn", "move", "reflect", "fun", "skill", "challenge"]

VALID_CATEGORIES: tuple[str, ...] = (
    "learn",
    "move",
    "reflect",
    "fun",
    "skill",
    "challenge",
)
CHALLENGE_TYPE = "challenge"

DESCRIPTION_MAX_LENGTH = 120
DURATION_MIN = 30
DURATION_MAX = 120
DIFFICULTY_MIN = 1
DIFFICULTY_MAX = 5
TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100

DAILY_BUNDLE_SIZE = 5


@dataclass(frozen=True)
class ValidationError:
    field: str
    message: str


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_title(title: Any) -> list[ValidationError]:
    if not isinstance(title, str) or not title.strip():
        return [ValidationError("title", "Title is required")]
    if len(title) < TITLE_MIN_LENGTH:
        return [
            ValidationError(
                "title", f"Title must be at least {TITLE_MIN_LENGTH} characters"
            )
        ]
    if len(title) > TITLE_MAX_LENGTH:
        return [
            ValidationError(
                "title", f"Title must be at most {TITLE_MAX_LENGTH} characters"
            )
        ]
    return []


def validate_description(description: Any) -> list[ValidationError]:
    if not isinstance(description, str) or not description.strip():
        return [ValidationError("description", "Description is required")]
    if len(description) > DESCRIPTION_MAX_LENGTH:
        return [
            ValidationError(
                "description",
                f"Description must be {DESCRIPTION_MAX_LENGTH} characters or less "
                f"(currently {len(description)})",
            )
        ]
    return []


def validate_duration(duration_seconds: Any) -> list[ValidationError]:
    if not _is_number(duration_seconds) or math.isnan(duration_seconds):
        return [
            ValidationError("duration_seconds", "Duration must be a valid number")
        ]
    if duration_seconds < DURATION_MIN:
        return [
            ValidationError(
                "duration_seconds", f"Duration must be at least {DURATION_MIN} seconds"
            )
        ]
    if duration_seconds > DURATION_MAX:
        return [
            ValidationError(
                "duration_seconds", f"Duration must be at most {DURATION_MAX} seconds"
            )
        ]
    return []


def validate_difficulty(difficulty: Any) -> list[ValidationError]:
    if not _is_number(difficulty):
        return [ValidationError("difficulty", "Difficulty must be a valid number")]
    if difficulty not in range(DIFFICULTY_MIN, DIFFICULTY_MAX + 1):
        return [
            ValidationError(
                "difficulty",
                f"Difficulty must be between {DIFFICULTY_MIN} and {DIFFICULTY_MAX}",
            )
        ]
    return []


def _validate_enum(field: str, value: Any) -> list[ValidationError]:
    label = field.capitalize()
    if not isinstance(value, str) or not value.strip():
        return [ValidationError(field, f"{label} is required")]
    if value not in VALID_CATEGORIES:
        return [
            ValidationError(
                field, f"{label} must be one of: {', '.join(VALID_CATEGORIES)}"
            )
        ]
    return []


def validate_category(category: Any) -> list[ValidationError]:
    return _validate_enum("category", category)


def validate_type(task_type: Any) -> list[ValidationError]:
    return _validate_enum("type", task_type)


def validate_tags(tags: Any) -> list[ValidationError]:
    if not isinstance(tags, list):
        return [ValidationError("tags", "Tags must be an array")]
    if not tags:
        return [ValidationError("tags", "At least one tag is required")]
    if any(not isinstance(tag, str) or not tag.strip() for tag in tags):
        return [ValidationError("tags", "All tags must be non-empty strings")]
    return []


_FIELD_VALIDATORS = {
    "title": validate_title,
    "description": validate_description,
    "duration_seconds": validate_duration,
    "difficulty": validate_difficulty,
    "type": validate_type,
    "category": validate_category,
    "tags": validate_tags,
}

REQUIRED_FIELDS: tuple[str, ...] = (
    "title",
    "description",
    "category",
    "duration_seconds",
    "tags",
    "difficulty",
    "type",
)


def validate_task(data: dict[str, Any]) -> list[ValidationError]:
    """Validate the fields present in `data`; absent fields are not checked."""
    errors: list[ValidationError] = []
    for field, validator in _FIELD_VALIDATORS.items():
        if data.get(field) is not None:
            errors.extend(validator(data[field]))

    task_type, category = data.get("type"), data.get("category")
    if task_type and category and task_type != category:
        errors.append(ValidationError("type", "Type must match category"))

    return errors


def validate_task_for_creation(data: dict[str, Any]) -> list[ValidationError]:
    """All required fields present, then full validation."""
    errors = [
        ValidationError(field, f"{field} is required")
        for field in REQUIRED_FIELDS
        if data.get(field) is None
    ]
    errors.extend(validate_task(data))
    return errors


def sanitize_task_data(data: dict[str, Any]) -> dict[str, Any]:
    """Trim strings, round numbers, drop blank tags."""
    sanitized: dict[str, Any] = {}

    for field in ("title", "description", "affiliate_link"):
        if isinstance(data.get(field), str) and data[field]:
            sanitized[field] = data[field].strip()

    for field in ("category", "type"):
        if data.get(field):
            sanitized[field] = data[field]

    for field in ("duration_seconds", "difficulty"):
        if _is_number(data.get(field)):
            sanitized[field] = round(data[field])

    if isinstance(data.get("tags"), list):
        sanitized["tags"] = [
            tag.strip() for tag in data["tags"] if isinstance(tag, str) and tag.strip()
        ]

    return sanitized


def format_validation_errors(errors: list[ValidationError]) -> str:
    if not errors:
        return ""
    if len(errors) == 1:
        return errors[0].message
    return "\n".join(f"• {error.message}" for error in errors)


def can_complete_assignment(completed: bool) -> bool:
    """Assignments go pending -> completed exactly once."""
    return not completed


def is_bundle_complete(completed_flags: list[bool]) -> bool:
    """The day counts only when exactly 5 assignments exist and all are done."""
    return len(completed_flags) == DAILY_BUNDLE_SIZE and all(completed_flags)
