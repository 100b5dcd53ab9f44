"""
Reset Streaks Use Case - periodic sweep for broken streaks.

Users whose last completion is more than 24 hours old lose their streak
(streak = 0).
Run by services/scheduler.py and POST /api/cron/reset-streaks.
"""

import logging
from datetime import datetime, timezone

from dailyfive.core.domain.streak_rules import should_reset_streak
from dailyfive.storage import user_repo

logger = logging.getLogger(__name__)


async def reset_stale_streaks(now: datetime | None = None) -> int:
    """Returns the number of users whose streak was reset."""
    if now is None:
        now = datetime.now(timezone.utc)

    users = await user_repo.list_users_with_streak()
    reset_count = 0

    for user in users:
        last_completion = user.last_completion_at or user.last_completion_date
        if not should_reset_streak(last_completion, now):
            continue
        try:
            await user_repo.reset_streak(user.id)
            reset_count += 1
        except Exception as e:
            logger.error(f"Failed to reset streak for user {user.id}: {e}")

    logger.info(f"Streak sweep: {reset_count}/{len(users)} users reset")
    return reset_count
