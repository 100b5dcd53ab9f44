"""
Get Daily Bundle Use Case - fetch today's assignments or generate them.

AICODE-NOTE: Generation happens at most once per (user, date). The 5
assignments are inserted in one transaction; the unique constraint on
(user, task, assigned_date) turns a concurrent second generation into an
IntegrityError, in which case the stored bundle is returned.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from tortoise.exceptions import IntegrityError

from dailyfive.core.domain.selection_rules import SelectionSource
from dailyfive.core.use_cases.select_daily_tasks import SelectDailyTasksUseCase
from dailyfive.database.models import DailyAssignment, Task
from dailyfive.storage import assignment_repo

logger = logging.getLogger(__name__)


@dataclass
class DailyBundleResult:
    success: bool
    bundle_date: date | None = None
    assignments: list[DailyAssignment] = field(default_factory=list)
    generated: bool = False
    breakdown: dict[SelectionSource, list[Task]] | None = None
    error_message: str = ""


class GetDailyBundleUseCase:
    """Use-case behind GET /api/tasks/daily."""

    def __init__(self, selector: SelectDailyTasksUseCase | None = None):
        self._selector = selector or SelectDailyTasksUseCase()

    async def execute(
        self,
        user_id: int,
        bundle_date: date | None = None,
        now: datetime | None = None,
    ) -> DailyBundleResult:
        if now is None:
            now = datetime.now(timezone.utc)
        if bundle_date is None:
            bundle_date = now.date()

        if await assignment_repo.has_assignments(user_id, bundle_date):
            return await self._existing(user_id, bundle_date)

        selection = await self._selector.execute(user_id, bundle_date, now=now)
        if not selection.tasks:
            return DailyBundleResult(
                success=False,
                bundle_date=bundle_date,
                error_message="No tasks available in catalog",
            )

        try:
            assignments = await assignment_repo.insert_batch(
                user_id, selection.tasks, bundle_date
            )
        except IntegrityError:
            logger.warning(
                f"Bundle for user {user_id} on {bundle_date} generated concurrently"
            )
            return await self._existing(user_id, bundle_date)
        except Exception as e:
            logger.error(f"Error storing task assignments for user {user_id}: {e}")
            return DailyBundleResult(
                success=False,
                bundle_date=bundle_date,
                error_message="Failed to store task assignments",
            )

        logger.info(
            f"Generated bundle for user {user_id} on {bundle_date}: "
            f"{[task.id for task in selection.tasks]}"
        )

        return DailyBundleResult(
            success=True,
            bundle_date=bundle_date,
            assignments=assignments,
            generated=True,
            breakdown=selection.breakdown,
        )

    async def _existing(self, user_id: int, bundle_date: date) -> DailyBundleResult:
        assignments = await assignment_repo.list_for_day(user_id, bundle_date)
        return DailyBundleResult(
            success=True,
            bundle_date=bundle_date,
            assignments=assignments,
            generated=False,
        )
