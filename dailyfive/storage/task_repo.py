"""
Task Repository - catalog queries for the Task model.

AICODE-NOTE: Data access only. Which tasks are picked is decided by
core/use_cases/select_daily_tasks.py.
Tag overlap is filtered in Python: tags is a JSON column and the catalog is
small, so this stays portable between SQLite and PostgreSQL.
"""

from datetime import datetime
from typing import Any, Optional

from tortoise.expressions import F
from tortoise.functions import Count

from dailyfive.database.models import Completion, Task


async def list_tasks(exclude_ids: set[int] | None = None) -> list[Task]:
    """All catalog tasks except the excluded ids."""
    query = Task.all()
    if exclude_ids:
        query = query.exclude(id__in=list(exclude_ids))
    return await query.order_by("id")


async def list_tasks_by_tags(
    tags: list[str], exclude_ids: set[int] | None = None
) -> list[Task]:
    """Tasks whose tags intersect `tags`."""
    wanted = set(tags)
    if not wanted:
        return []
    tasks = await list_tasks(exclude_ids)
    return [task for task in tasks if wanted.intersection(task.tags or [])]


async def list_tasks_by_type(
    task_type: str, exclude_ids: set[int] | None = None
) -> list[Task]:
    query = Task.filter(type=task_type)
    if exclude_ids:
        query = query.exclude(id__in=list(exclude_ids))
    return await query.order_by("id")


async def list_top_by_completion_count(
    exclude_ids: set[int] | None = None, limit: int = 1
) -> list[Task]:
    query = Task.all()
    if exclude_ids:
        query = query.exclude(id__in=list(exclude_ids))
    return await query.order_by("-completion_count", "id").limit(limit)


async def count_window_completions(
    since: datetime, exclude_ids: set[int] | None = None
) -> dict[int, int]:
    """Completions per task id recorded since `since`."""
    query = Completion.filter(completed_at__gte=since)
    if exclude_ids:
        query = query.exclude(task_id__in=list(exclude_ids))
    rows = (
        await query.annotate(window_count=Count("id"))
        .group_by("task_id")
        .values("task_id", "window_count")
    )
    return {row["task_id"]: row["window_count"] for row in rows}


async def create_task(data: dict[str, Any]) -> Task:
    return await Task.create(**data)


async def get_task_by_title(title: str) -> Optional[Task]:
    return await Task.filter(title=title).first()


async def increment_completion_count(task_id: int) -> None:
    await Task.filter(id=task_id).update(completion_count=F("completion_count") + 1)
