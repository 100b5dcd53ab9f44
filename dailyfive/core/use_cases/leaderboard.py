"""
Leaderboard Use Case - global ranking by coins.

Rank of a user = 1 + number of users with strictly more coins.
Ties get no special treatment: the list is ordered by coins desc then id,
so tied users receive consecutive ranks in the list.
"""

import logging
from dataclasses import dataclass

from dailyfive.core.domain.levels import calculate_level
from dailyfive.storage import user_repo

logger = logging.getLogger(__name__)


@dataclass
class LeaderboardEntry:
    rank: int
    user_id: int
    name: str
    coins: int
    streak: int
    level: int
    avatar_url: str | None = None


async def get_global_leaderboard(limit: int = 100) -> list[LeaderboardEntry]:
    """Top `limit` users by coins with 1-based ranks."""
    try:
        users = await user_repo.list_top_by_coins(limit)
    except Exception as e:
        logger.error(f"Error fetching leaderboard: {e}")
        return []

    return [
        LeaderboardEntry(
            rank=index,
            user_id=user.id,
            name=user.name,
            coins=user.coins,
            streak=user.streak,
            level=calculate_level(user.xp),
            avatar_url=user.avatar_url,
        )
        for index, user in enumerate(users, start=1)
    ]


async def get_user_rank(user_id: int) -> int | None:
    """None when the user does not exist or the count query fails."""
    user = await user_repo.get_user(user_id)
    if user is None:
        return None

    try:
        ahead = await user_repo.count_with_more_coins(user.coins)
    except Exception as e:
        logger.error(f"Error fetching rank for user {user_id}: {e}")
        return None

    return ahead + 1
