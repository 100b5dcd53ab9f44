"""
Completion Repository - append-only completion log.

AICODE-NOTE: Records are never updated after insert.
"""

from datetime import datetime

from dailyfive.database.models import Completion
from dailyfive.storage import task_repo


async def record_completion(
    user_id: int,
    task_id: int,
    completed_at: datetime,
    coins_earned: int,
    streak_at_completion: int,
) -> Completion:
    """Append a completion and bump the task's lifetime counter."""
    completion = await Completion.create(
        user_id=user_id,
        task_id=task_id,
        completed_at=completed_at,
        coins_earned=coins_earned,
        streak_at_completion=streak_at_completion,
    )
    await task_repo.increment_completion_count(task_id)
    return completion


async def count_for_user(user_id: int) -> int:
    return await Completion.filter(user_id=user_id).count()


async def list_for_user(user_id: int, limit: int = 20) -> list[Completion]:
    """Newest first, with task prefetched."""
    return (
        await Completion.filter(user_id=user_id)
        .prefetch_related("task")
        .order_by("-completed_at", "-id")
        .limit(limit)
    )
