"""
Reward Rules - coins and XP for a completed task.

AICODE-NOTE: Pure functions, no DB access.
XP awarded per completion equals coins awarded (1:1).
"""

from dailyfive.core.domain.errors import InvalidDifficulty

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5
COINS_PER_DIFFICULTY = 3


def coins_for_difficulty(difficulty: int) -> int:
    """
    Coins for completing a task of the given difficulty.

    Formula: coins = difficulty * 3 (3, 6, 9, 12, 15)

    Raises:
        InvalidDifficulty: difficulty outside 1-5
    """
    if (
        isinstance(difficulty, bool)
        or not isinstance(difficulty, int)
        or not MIN_DIFFICULTY <= difficulty <= MAX_DIFFICULTY
    ):
        raise InvalidDifficulty(difficulty)
    return difficulty * COINS_PER_DIFFICULTY


def xp_for_coins(coins: int) -> int:
    return coins
