"""
Badge Engine Use Case - evaluate and award badges.

AICODE-NOTE: Combines badge_rules (pure catalog) with stats lookups and
badge_repo. Awards are idempotent: one record per (user, badge).
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from tortoise.exceptions import IntegrityError

from dailyfive.core.domain.badge_rules import (
    BADGE_CATALOG,
    BadgeDefinition,
    BadgeStats,
    badge_progress,
    get_badge_definition,
)
from dailyfive.database.models import Badge
from dailyfive.storage import badge_repo, completion_repo, user_repo

logger = logging.getLogger(__name__)


@dataclass
class BadgeProgress:
    """Progress of one catalog badge for a user."""

    badge: BadgeDefinition
    earned: bool
    earned_at: datetime | None = None
    progress: float = 0.0
    progress_text: str = ""


class BadgeEngine:
    """Badge checks and awards for a user."""

    async def load_stats(self, user_id: int) -> BadgeStats:
        """Fresh stats from the store. Missing user gives zero stats."""
        user = await user_repo.get_user(user_id)
        if user is None:
            return BadgeStats()
        completions = await completion_repo.count_for_user(user_id)
        return BadgeStats(
            streak=user.streak,
            lifetime_coins=user.coins,
            lifetime_completions=completions,
        )

    async def check_earned(self, user_id: int, badge_name: str) -> bool:
        """Does the user currently satisfy the badge? Unknown names -> False."""
        badge = get_badge_definition(badge_name)
        if badge is None:
            return False
        return badge.is_earned(await self.load_stats(user_id))

    async def award(
        self, user_id: int, badge_name: str, stats: BadgeStats | None = None
    ) -> bool:
        """
        Award the badge if earned and not held yet.

        Returns True only when a new award record was created.
        """
        badge = get_badge_definition(badge_name)
        if badge is None:
            logger.error(f"Badge not found: {badge_name}")
            return False

        if await badge_repo.has_badge(user_id, badge_name):
            return False

        if stats is None:
            stats = await self.load_stats(user_id)
        if not badge.is_earned(stats):
            return False

        try:
            await badge_repo.create_award(user_id, badge.name, badge.description)
        except IntegrityError:
            # Concurrent award already inserted the row
            logger.info(f"Badge '{badge_name}' already awarded to user {user_id}")
            return False

        logger.info(f"Badge '{badge_name}' awarded to user {user_id}")
        return True

    async def check_and_award_all(self, user_id: int) -> list[str]:
        """Walk the catalog in order, return names awarded in this call."""
        stats = await self.load_stats(user_id)
        new_badges: list[str] = []
        for badge in BADGE_CATALOG:
            if await self.award(user_id, badge.name, stats=stats):
                new_badges.append(badge.name)
        return new_badges

    async def list_earned(self, user_id: int) -> list[Badge]:
        return await badge_repo.list_for_user(user_id)

    async def progress(self, user_id: int) -> list[BadgeProgress]:
        """
        Per-badge progress. Earned badges always report 100.

        Lookup failures degrade to zero progress instead of failing.
        """
        try:
            stats = await self.load_stats(user_id)
        except Exception as e:
            logger.error(f"Failed to load badge stats for user {user_id}: {e}")
            stats = BadgeStats()

        try:
            earned = {b.badge_name: b for b in await self.list_earned(user_id)}
        except Exception as e:
            logger.error(f"Failed to load badges for user {user_id}: {e}")
            earned = {}

        result: list[BadgeProgress] = []
        for badge in BADGE_CATALOG:
            percent, text = badge_progress(badge, stats)
            award = earned.get(badge.name)
            result.append(
                BadgeProgress(
                    badge=badge,
                    earned=award is not None,
                    earned_at=award.earned_at if award else None,
                    progress=100.0 if award else percent,
                    progress_text=text,
                )
            )
        return result
