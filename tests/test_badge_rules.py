import pytest

from dailyfive.core.domain.badge_rules import (
    BADGE_CATALOG,
    BadgeStats,
    badge_progress,
    get_badge_definition,
    is_badge_earned,
    newly_earned,
)


def test_catalog_order_and_icons() -> None:
    assert [(b.name, b.icon) for b in BADGE_CATALOG] == [
        ("3-Day Warrior", "🔥"),
        ("Week Champion", "👑"),
        ("Task Master", "⭐"),
        ("Coin Collector", "💰"),
    ]


@pytest.mark.parametrize(
    ("name", "stats", "earned"),
    [
        ("3-Day Warrior", BadgeStats(streak=3), True),
        ("3-Day Warrior", BadgeStats(streak=2), False),
        ("Week Champion", BadgeStats(streak=7), True),
        ("Week Champion", BadgeStats(streak=6), False),
        ("Task Master", BadgeStats(lifetime_completions=30), True),
        ("Task Master", BadgeStats(lifetime_completions=29), False),
        ("Coin Collector", BadgeStats(lifetime_coins=100), True),
        ("Coin Collector", BadgeStats(lifetime_coins=99), False),
        ("Unknown Badge", BadgeStats(streak=100), False),
    ],
)
def test_is_badge_earned(name: str, stats: BadgeStats, earned: bool) -> None:
    assert is_badge_earned(name, stats) is earned


def test_badge_progress_text_and_cap() -> None:
    warrior = get_badge_definition("3-Day Warrior")

    percent, text = badge_progress(warrior, BadgeStats(streak=2))
    assert percent == pytest.approx(66.666, rel=1e-3)
    assert text == "2/3 days"

    percent, text = badge_progress(warrior, BadgeStats(streak=10))
    assert percent == 100.0
    assert text == "10/3 days"


def test_newly_earned_skips_held_badges() -> None:
    stats = BadgeStats(streak=7, lifetime_coins=150, lifetime_completions=5)

    names = [b.name for b in newly_earned(stats, held={"3-Day Warrior"})]

    assert names == ["Week Champion", "Coin Collector"]
