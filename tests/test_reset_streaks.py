from datetime import date, datetime, timedelta, timezone

import pytest

from dailyfive.core.use_cases.reset_streaks import reset_stale_streaks
from dailyfive.database.models import User

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_resets_only_stale_streaks(db) -> None:
    stale = await User.create(
        auth_id="stale", streak=4, last_completion_at=NOW - timedelta(hours=25)
    )
    fresh = await User.create(
        auth_id="fresh", streak=2, last_completion_at=NOW - timedelta(hours=2)
    )
    date_only = await User.create(
        auth_id="date-only", streak=1, last_completion_date=date(2026, 10, 16)
    )
    idle = await User.create(auth_id="idle", streak=0)

    reset = await reset_stale_streaks(now=NOW)

    assert reset == 2
    for u in (stale, fresh, date_only, idle):
        await u.refresh_from_db()
    assert stale.streak == 0
    assert fresh.streak == 2
    assert date_only.streak == 0
    assert idle.streak == 0


@pytest.mark.asyncio
async def test_streak_without_history_is_kept(db) -> None:
    user = await User.create(auth_id="legacy", streak=3)

    assert await reset_stale_streaks(now=NOW) == 0
    await user.refresh_from_db()
    assert user.streak == 3
