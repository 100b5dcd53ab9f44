"""
Level Rules - pure functions for level progression.

AICODE-NOTE: Pure functions without database access or side effects.
Level is never stored; it is always derived from accumulated XP.

Formula: level = floor(xp / 100) + 1
- 0-99 XP = Level 1
- 100-199 XP = Level 2
- 200-299 XP = Level 3
"""

from dataclasses import dataclass

XP_PER_LEVEL = 100


@dataclass(frozen=True)
class LevelInfo:
    """Level summary for display."""

    current_level: int
    current_xp: int
    xp_for_current_level: int
    xp_for_next_level: int
    xp_until_next_level: int
    progress_percentage: int


@dataclass(frozen=True)
class LevelMilestone:
    level: int
    title: str
    description: str


LEVEL_MILESTONES: tuple[LevelMilestone, ...] = (
    LevelMilestone(5, "Novice", "Completed your first week!"),
    LevelMilestone(10, "Apprentice", "Building strong habits!"),
    LevelMilestone(15, "Practitioner", "Consistency is key!"),
    LevelMilestone(20, "Expert", "You are unstoppable!"),
    LevelMilestone(25, "Master", "True dedication!"),
    LevelMilestone(30, "Legend", "An inspiration to all!"),
)


def calculate_level(xp: int) -> int:
    """Level for the given XP. Negative XP is clamped to level 1."""
    if xp < 0:
        return 1
    return xp // XP_PER_LEVEL + 1


def xp_floor(level: int) -> int:
    """XP at which the given level starts."""
    if level <= 1:
        return 0
    return (level - 1) * XP_PER_LEVEL


def xp_to_next(xp: int) -> int:
    """XP threshold of the next level."""
    return xp_floor(calculate_level(xp) + 1)


def xp_until_next(xp: int) -> int:
    """XP still missing to reach the next level."""
    return xp_to_next(xp) - xp


def progress_percent(xp: int) -> int:
    """
    Progress inside the current level, 0-100.

    At an exact level boundary this is 0 (start of the new level).
    """
    level = calculate_level(xp)
    floor = xp_floor(level)
    span = xp_floor(level + 1) - floor
    # half-up rounding (round() rounds half to even)
    return max(0, int((xp - floor) * 100 / span + 0.5))


def level_info(xp: int) -> LevelInfo:
    level = calculate_level(xp)
    return LevelInfo(
        current_level=level,
        current_xp=xp,
        xp_for_current_level=xp_floor(level),
        xp_for_next_level=xp_to_next(xp),
        xp_until_next_level=xp_until_next(xp),
        progress_percentage=progress_percent(xp),
    )


def get_milestone(level: int) -> LevelMilestone | None:
    return next((m for m in LEVEL_MILESTONES if m.level == level), None)


def is_milestone(level: int) -> bool:
    return get_milestone(level) is not None
