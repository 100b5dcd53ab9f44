"""
Complete Task Use Case - task completion and reward pipeline.

AICODE-NOTE: Use-case combines repositories + domain rules.
Order matters:
1. find pending assignment     (fatal)
2. already completed guard     (fatal)
3. coins from difficulty       (fatal)
4. mark assignment completed   (fatal, authoritative write)
5. credit coins + XP           (best effort)
6. full bundle check           (best effort)
7. streak transition if full   (best effort)
8. completion record           (best effort)
9. badges                      (best effort)

AICODE-NOTE: Steps 5-9 only log on failure. A completion can therefore be
marked done while a reward write failed; see DESIGN.md (open question).
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from dailyfive.core.domain.errors import InvalidDifficulty
from dailyfive.core.domain.rewards import coins_for_difficulty, xp_for_coins
from dailyfive.core.domain.streak_rules import advance_streak
from dailyfive.core.domain.task_rules import can_complete_assignment, is_bundle_complete
from dailyfive.core.use_cases.award_badges import BadgeEngine
from dailyfive.storage import assignment_repo, completion_repo, user_repo

logger = logging.getLogger(__name__)

NOT_ASSIGNED = "not_assigned"
ALREADY_COMPLETED = "already_completed"
INVALID_DIFFICULTY = "invalid_difficulty"
UPDATE_FAILED = "update_failed"
INTERNAL_ERROR = "internal_error"


@dataclass
class CompletionResult:
    """Result of completing a task."""

    success: bool
    coins_earned: int = 0
    xp_gained: int = 0
    streak_updated: bool = False
    new_streak: int = 0
    all_tasks_completed: bool = False
    new_badges: list[str] = field(default_factory=list)
    error_code: str = ""
    error_message: str = ""


def _failure(code: str, message: str) -> CompletionResult:
    return CompletionResult(success=False, error_code=code, error_message=message)


class CompleteTaskUseCase:
    """Use-case for completing one assignment."""

    def __init__(self, badge_engine: BadgeEngine | None = None):
        self._badges = badge_engine or BadgeEngine()

    async def execute(
        self,
        user_id: int,
        task_id: int,
        assigned_date: date | None = None,
        now: datetime | None = None,
    ) -> CompletionResult:
        """
        Complete a task from the user's bundle.

        Args:
            user_id: User ID
            task_id: Catalog task ID
            assigned_date: Bundle date (default: today in UTC)
            now: Completion time (for tests, default: now in UTC)

        Returns:
            CompletionResult with rewards or an error code
        """
        if now is None:
            now = datetime.now(timezone.utc)
        if assigned_date is None:
            assigned_date = now.date()

        try:
            return await self._execute(user_id, task_id, assigned_date, now)
        except Exception as e:
            logger.exception(f"Error completing task {task_id} for user {user_id}: {e}")
            return _failure(INTERNAL_ERROR, "An unexpected error occurred")

    async def _execute(
        self, user_id: int, task_id: int, assigned_date: date, now: datetime
    ) -> CompletionResult:
        # 1. Pending assignment for (user, task, date)
        assignment = await assignment_repo.get_assignment(
            user_id, task_id, assigned_date
        )
        if assignment is None:
            return _failure(NOT_ASSIGNED, "Task not found or not assigned to user")

        # 2. One-shot guard
        if not can_complete_assignment(assignment.completed):
            return _failure(ALREADY_COMPLETED, "Task already completed")

        # 3. Reward (domain)
        try:
            coins = coins_for_difficulty(assignment.task.difficulty)
        except InvalidDifficulty as e:
            return _failure(INVALID_DIFFICULTY, str(e))
        xp = xp_for_coins(coins)

        # 4. Authoritative completion write
        try:
            updated = await assignment_repo.mark_completed(assignment.id, now, coins)
        except Exception as e:
            logger.error(f"Error updating assignment {assignment.id}: {e}")
            return _failure(UPDATE_FAILED, "Failed to update task completion")
        if not updated:
            # Lost the race against a parallel completion of the same assignment
            return _failure(ALREADY_COMPLETED, "Task already completed")

        # 5. Credit coins + XP
        await self._apply_reward(user_id, coins, xp)

        # 6. Full bundle?
        all_completed = await self._is_day_complete(user_id, assigned_date)

        # 7. Streak only moves on a completed bundle
        streak_updated = False
        new_streak = await self._current_streak(user_id)
        if all_completed:
            streak = await self._advance_streak(user_id, now.date(), now)
            if streak is not None:
                new_streak = streak
                streak_updated = True

        # 8. Audit record with the resulting streak
        try:
            await completion_repo.record_completion(
                user_id=user_id,
                task_id=task_id,
                completed_at=now,
                coins_earned=coins,
                streak_at_completion=new_streak,
            )
        except Exception as e:
            logger.error(f"Error recording completion for user {user_id}: {e}")

        # 9. Badges
        try:
            new_badges = await self._badges.check_and_award_all(user_id)
        except Exception as e:
            logger.error(f"Error checking badges for user {user_id}: {e}")
            new_badges = []

        logger.info(
            f"Task {task_id} completed by user {user_id}: +{coins} coins, "
            f"all_completed={all_completed}, streak={new_streak}"
        )

        return CompletionResult(
            success=True,
            coins_earned=coins,
            xp_gained=xp,
            streak_updated=streak_updated,
            new_streak=new_streak,
            all_tasks_completed=all_completed,
            new_badges=new_badges,
        )

    async def _apply_reward(self, user_id: int, coins: int, xp: int) -> None:
        """Single mutation point for coins and XP."""
        try:
            await user_repo.add_rewards(user_id, coins=coins, xp=xp)
        except Exception as e:
            logger.error(f"Error crediting rewards to user {user_id}: {e}")

    async def _is_day_complete(self, user_id: int, assigned_date: date) -> bool:
        try:
            assignments = await assignment_repo.list_for_day(user_id, assigned_date)
        except Exception as e:
            logger.error(f"Error checking task completion for user {user_id}: {e}")
            return False
        return is_bundle_complete([a.completed for a in assignments])

    async def _current_streak(self, user_id: int) -> int:
        try:
            user = await user_repo.get_user(user_id)
        except Exception as e:
            logger.error(f"Error loading user {user_id}: {e}")
            return 0
        return user.streak if user else 0

    async def _advance_streak(
        self, user_id: int, today: date, now: datetime
    ) -> int | None:
        """Apply the streak transition. None when it could not be applied."""
        try:
            user = await user_repo.get_user(user_id)
            if user is None:
                logger.error(f"User {user_id} not found for streak update")
                return None

            update = advance_streak(
                current_streak=user.streak,
                last_completion_date=user.last_completion_date,
                last_completion_at=user.last_completion_at,
                today=today,
                now=now,
            )
            if update.changed:
                await user_repo.update_streak(
                    user_id,
                    streak=update.streak,
                    last_completion_date=update.last_completion_date,
                    last_completion_at=now,
                )
                logger.info(
                    f"Streak for user {user_id}: {user.streak} -> {update.streak}"
                    + (" (reset)" if update.reset else "")
                )
            return update.streak
        except Exception as e:
            logger.error(f"Error updating streak for user {user_id}: {e}")
            return None
