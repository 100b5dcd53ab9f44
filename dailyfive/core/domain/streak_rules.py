"""
Streak Rules - pure functions for the consecutive-day streak.

AICODE-NOTE: Pure functions, no DB access, no side effects.
The streak only moves when a day's full bundle is completed.

Reset rule is wall-clock elapsed time, not calendar days:
a completion at 23:59 followed by one at 00:05 next day does NOT reset
(elapsed < 24h) even though the date changed.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

STREAK_RESET_AFTER = timedelta(hours=24)


@dataclass(frozen=True)
class StreakUpdate:
    """Outcome of a day-completing event."""

    streak: int
    last_completion_date: date | None
    changed: bool
    reset: bool = False


def as_utc(value: datetime | date) -> datetime:
    """
    Normalize a timestamp to an aware UTC datetime.

    A bare date is taken as midnight UTC of that day, naive datetimes as UTC.
    """
    if not isinstance(value, datetime):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def should_reset_streak(
    last_completion: datetime | date | None, now: datetime
) -> bool:
    """More than 24 hours since the last completion. No history never resets."""
    if last_completion is None:
        return False
    return as_utc(now) - as_utc(last_completion) > STREAK_RESET_AFTER


def advance_streak(
    current_streak: int,
    last_completion_date: date | None,
    last_completion_at: datetime | None,
    today: date,
    now: datetime,
) -> StreakUpdate:
    """
    Streak transition when the whole bundle for `today` becomes complete.

    - more than 24h since last completion -> streak = 1
    - already advanced today -> unchanged
    - otherwise -> streak + 1 (first ever completion gives 1)
    """
    last_reference = last_completion_at or last_completion_date

    if should_reset_streak(last_reference, now):
        return StreakUpdate(
            streak=1, last_completion_date=today, changed=True, reset=True
        )

    if last_completion_date == today:
        return StreakUpdate(
            streak=current_streak,
            last_completion_date=last_completion_date,
            changed=False,
        )

    return StreakUpdate(
        streak=current_streak + 1, last_completion_date=today, changed=True
    )
