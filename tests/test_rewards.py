import pytest

from dailyfive.core.domain.errors import InvalidDifficulty
from dailyfive.core.domain.rewards import coins_for_difficulty, xp_for_coins


@pytest.mark.parametrize(
    ("difficulty", "coins"), [(1, 3), (2, 6), (3, 9), (4, 12), (5, 15)]
)
def test_coins_for_difficulty(difficulty: int, coins: int) -> None:
    assert coins_for_difficulty(difficulty) == coins


@pytest.mark.parametrize("difficulty", [0, 6, -1, 2.5, "3", None, True])
def test_invalid_difficulty_rejected(difficulty) -> None:
    with pytest.raises(InvalidDifficulty) as exc_info:
        coins_for_difficulty(difficulty)

    assert exc_info.value.code == "invalid_difficulty"
    assert exc_info.value.difficulty == difficulty


def test_xp_equals_coins() -> None:
    assert xp_for_coins(12) == 12
    assert xp_for_coins(0) == 0
