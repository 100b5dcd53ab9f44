"""
Select Daily Tasks Use Case - compose the 5-task daily bundle.

AICODE-NOTE: Ordered strategy list (interest_based -> random -> trending ->
challenge). Each strategy may return fewer tasks than its quota; the
composition step backfills with random tasks (attributed to "random") and
caps the bundle at 5. A running exclusion set keeps ids unique.

Callers check that no bundle exists for (user, date) and persist the result
(see get_daily_bundle.py). This use-case never writes.
"""

import logging
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone

from dailyfive.core.domain.selection_rules import (
    SELECTION_PLAN,
    TRENDING_WINDOW_DAYS,
    SelectionSource,
    pick_random,
    rank_trending,
    without_excluded,
)
from dailyfive.core.domain.task_rules import CHALLENGE_TYPE, DAILY_BUNDLE_SIZE
from dailyfive.database.models import Task
from dailyfive.storage import task_repo, user_repo

logger = logging.getLogger(__name__)


@dataclass
class TaskSelectionResult:
    """Selected bundle with provenance per source."""

    tasks: list[Task]
    breakdown: dict[SelectionSource, list[Task]] = field(default_factory=dict)


Strategy = Callable[[int, set[int]], Awaitable[list[Task]]]


class SelectDailyTasksUseCase:
    """Use-case for picking today's five tasks."""

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    async def execute(
        self,
        user_id: int,
        selection_date: date | None = None,
        now: datetime | None = None,
    ) -> TaskSelectionResult:
        """
        Select the bundle for a user.

        Args:
            user_id: User ID
            selection_date: Bundle date (for logs, default today)
            now: Reference time for the trending window (for tests)

        Returns:
            TaskSelectionResult with up to 5 distinct tasks
        """
        if now is None:
            now = datetime.now(timezone.utc)
        if selection_date is None:
            selection_date = now.date()

        interests = await self._load_interests(user_id)

        strategies: dict[SelectionSource, Strategy] = {
            "interest_based": lambda count, excluded: self.select_interest_based(
                interests, count, excluded
            ),
            "random": self.select_random,
            "trending": lambda count, excluded: self.select_trending(
                count, excluded, now
            ),
            "challenge": self.select_challenge,
        }

        selected_ids: set[int] = set()
        breakdown: dict[SelectionSource, list[Task]] = {}

        for source, quota in SELECTION_PLAN:
            picked = await strategies[source](quota, selected_ids)
            picked = without_excluded(picked, selected_ids)[:quota]
            breakdown[source] = picked
            selected_ids.update(task.id for task in picked)

        tasks = [task for source, _ in SELECTION_PLAN for task in breakdown[source]]

        if len(tasks) < DAILY_BUNDLE_SIZE:
            needed = DAILY_BUNDLE_SIZE - len(tasks)
            filler = await self.select_random(needed, selected_ids)
            tasks.extend(filler)
            breakdown["random"].extend(filler)
            selected_ids.update(task.id for task in filler)
            if len(tasks) < DAILY_BUNDLE_SIZE:
                logger.warning(
                    f"Catalog too small for user {user_id} on {selection_date}: "
                    f"only {len(tasks)} tasks selected"
                )

        logger.info(
            f"Selected {len(tasks[:DAILY_BUNDLE_SIZE])} tasks for user {user_id} "
            f"on {selection_date}: "
            + ", ".join(f"{s}={len(t)}" for s, t in breakdown.items())
        )

        return TaskSelectionResult(tasks=tasks[:DAILY_BUNDLE_SIZE], breakdown=breakdown)

    async def _load_interests(self, user_id: int) -> list[str]:
        try:
            user = await user_repo.get_user(user_id)
        except Exception as e:
            logger.error(f"Failed to load interests for user {user_id}: {e}")
            return []
        if user is None:
            return []
        return list(user.interests or [])

    async def select_interest_based(
        self, interests: list[str], count: int, exclude_ids: set[int]
    ) -> list[Task]:
        """
        Tasks whose tags overlap the user's interests.

        No interests -> the quota goes to random selection.
        Fewer matches than `count` -> return what exists (backfill covers it).
        """
        if not interests:
            return await self.select_random(count, exclude_ids)

        try:
            matches = await task_repo.list_tasks_by_tags(interests, exclude_ids)
        except Exception as e:
            logger.error(f"Error selecting interest-based tasks: {e}")
            return await self.select_random(count, exclude_ids)

        return pick_random(matches, count, exclude_ids, self._rng)

    async def select_random(self, count: int, exclude_ids: set[int]) -> list[Task]:
        """Uniformly random tasks from the whole catalog."""
        try:
            candidates = await task_repo.list_tasks(exclude_ids)
        except Exception as e:
            logger.error(f"Error selecting random tasks: {e}")
            return []
        return pick_random(candidates, count, exclude_ids, self._rng)

    async def select_trending(
        self, count: int, exclude_ids: set[int], now: datetime
    ) -> list[Task]:
        """
        Most completed tasks over the trailing window.

        Without window data, rank by lifetime completion_count.
        Query failure -> random selection.
        """
        since = now - timedelta(days=TRENDING_WINDOW_DAYS)
        try:
            window_counts = await task_repo.count_window_completions(
                since, exclude_ids
            )
            if not window_counts:
                return await task_repo.list_top_by_completion_count(
                    exclude_ids, limit=count
                )
            candidates = await task_repo.list_tasks(exclude_ids)
        except Exception as e:
            logger.error(f"Error selecting trending tasks: {e}")
            return await self.select_random(count, exclude_ids)

        return rank_trending(candidates, window_counts, exclude_ids)[:count]

    async def select_challenge(self, count: int, exclude_ids: set[int]) -> list[Task]:
        """Random tasks of type 'challenge'."""
        try:
            candidates = await task_repo.list_tasks_by_type(CHALLENGE_TYPE, exclude_ids)
        except Exception as e:
            logger.error(f"Error selecting challenge tasks: {e}")
            return []
        return pick_random(candidates, count, exclude_ids, self._rng)
