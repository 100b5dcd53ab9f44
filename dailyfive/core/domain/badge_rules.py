"""
Badge Rules - declarative badge catalog.

AICODE-NOTE: Each badge is data + a pure predicate over BadgeStats.
No DB access here; the badge use-case loads stats and persists awards.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class BadgeStats:
    """Aggregate user stats the badge predicates look at."""

    streak: int = 0
    lifetime_coins: int = 0
    lifetime_completions: int = 0


@dataclass(frozen=True)
class BadgeDefinition:
    name: str
    description: str
    icon: str
    requirement: str
    # Stat the badge tracks and the value that earns it (drives progress)
    metric: str
    threshold: int
    unit: str

    def metric_value(self, stats: BadgeStats) -> int:
        return getattr(stats, self.metric)

    def is_earned(self, stats: BadgeStats) -> bool:
        return self.metric_value(stats) >= self.threshold


BADGE_CATALOG: tuple[BadgeDefinition, ...] = (
    BadgeDefinition(
        name="3-Day Warrior",
        description="Completed all tasks for 3 days in a row",
        icon="🔥",
        requirement="3-day streak",
        metric="streak",
        threshold=3,
        unit="days",
    ),
    BadgeDefinition(
        name="Week Champion",
        description="Completed all tasks for 7 days in a row",
        icon="👑",
        requirement="7-day streak",
        metric="streak",
        threshold=7,
        unit="days",
    ),
    BadgeDefinition(
        name="Task Master",
        description="Completed 30 tasks in total",
        icon="⭐",
        requirement="30 completions",
        metric="lifetime_completions",
        threshold=30,
        unit="tasks",
    ),
    BadgeDefinition(
        name="Coin Collector",
        description="Earned 100 coins in total",
        icon="💰",
        requirement="100 coins",
        metric="lifetime_coins",
        threshold=100,
        unit="coins",
    ),
)


def get_badge_definition(name: str) -> BadgeDefinition | None:
    return next((b for b in BADGE_CATALOG if b.name == name), None)


def is_badge_earned(name: str, stats: BadgeStats) -> bool:
    """Unknown badge names are never earned."""
    badge = get_badge_definition(name)
    if badge is None:
        return False
    return badge.is_earned(stats)


def badge_progress(badge: BadgeDefinition, stats: BadgeStats) -> tuple[float, str]:
    """Progress percentage (capped at 100) and text like '2/3 days'."""
    value = badge.metric_value(stats)
    percent = min(100.0, value * 100 / badge.threshold)
    return percent, f"{value}/{badge.threshold} {badge.unit}"


def newly_earned(
    stats: BadgeStats,
    held: set[str],
    catalog: tuple[BadgeDefinition, ...] = BADGE_CATALOG,
) -> list[BadgeDefinition]:
    """Catalog-ordered badges satisfied by stats and not held yet."""
    return [b for b in catalog if b.name not in held and b.is_earned(stats)]
