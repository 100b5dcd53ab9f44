"""
DailyAssignment Repository - CRUD for the daily_user_tasks table.

AICODE-NOTE: Data access only, NO business logic.
"""

from datetime import date, datetime
from typing import Optional

from tortoise.transactions import in_transaction

from dailyfive.database.models import DailyAssignment, Task


async def has_assignments(user_id: int, assigned_date: date) -> bool:
    """Was the bundle for this date already generated?"""
    return await DailyAssignment.filter(
        user_id=user_id, assigned_date=assigned_date
    ).exists()


async def insert_batch(
    user_id: int, tasks: list[Task], assigned_date: date
) -> list[DailyAssignment]:
    """Insert all assignments of a bundle in one transaction."""
    async with in_transaction() as connection:
        assignments = [
            DailyAssignment(user_id=user_id, task_id=task.id, assigned_date=assigned_date)
            for task in tasks
        ]
        await DailyAssignment.bulk_create(assignments, using_db=connection)
    return await list_for_day(user_id, assigned_date)


async def get_assignment(
    user_id: int, task_id: int, assigned_date: date
) -> Optional[DailyAssignment]:
    """Assignment with its task prefetched."""
    return (
        await DailyAssignment.filter(
            user_id=user_id, task_id=task_id, assigned_date=assigned_date
        )
        .prefetch_related("task")
        .first()
    )


async def list_for_day(user_id: int, assigned_date: date) -> list[DailyAssignment]:
    return (
        await DailyAssignment.filter(user_id=user_id, assigned_date=assigned_date)
        .prefetch_related("task")
        .order_by("id")
    )


async def mark_completed(
    assignment_id: int, completed_at: datetime, coins_earned: int
) -> bool:
    """
    Flip a pending assignment to completed.

    Conditional on completed=False, so a second call updates nothing and
    returns False.
    """
    updated = await DailyAssignment.filter(id=assignment_id, completed=False).update(
        completed=True, completed_at=completed_at, coins_earned=coins_earned
    )
    return updated > 0


async def count_completed_for_day(user_id: int, assigned_date: date) -> int:
    return await DailyAssignment.filter(
        user_id=user_id, assigned_date=assigned_date, completed=True
    ).count()
