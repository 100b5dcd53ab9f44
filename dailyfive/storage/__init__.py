"""Storage layer - dumb CRUD repositories without business logic."""

from . import assignment_repo, badge_repo, completion_repo, task_repo, user_repo

__all__ = [
    "assignment_repo",
    "badge_repo",
    "completion_repo",
    "task_repo",
    "user_repo",
]
