from datetime import datetime, timezone

import pytest

from dailyfive.core.use_cases.award_badges import BadgeEngine
from dailyfive.database.models import Badge, Completion, User
from dailyfive.storage import badge_repo, completion_repo


@pytest.mark.asyncio
async def test_award_is_idempotent(user) -> None:
    await User.filter(id=user.id).update(streak=3)
    engine = BadgeEngine()

    assert await engine.award(user.id, "3-Day Warrior")
    assert not await engine.award(user.id, "3-Day Warrior")
    assert await Badge.filter(user_id=user.id, badge_name="3-Day Warrior").count() == 1


@pytest.mark.asyncio
async def test_award_requires_predicate(user) -> None:
    await User.filter(id=user.id).update(streak=2)

    assert not await BadgeEngine().award(user.id, "3-Day Warrior")
    assert await Badge.filter(user_id=user.id).count() == 0


@pytest.mark.asyncio
async def test_unknown_badge_is_never_awarded(user) -> None:
    await User.filter(id=user.id).update(streak=50, coins=500)
    engine = BadgeEngine()

    assert not await engine.check_earned(user.id, "Made Up")
    assert not await engine.award(user.id, "Made Up")


@pytest.mark.asyncio
async def test_check_and_award_all_in_catalog_order(user) -> None:
    await User.filter(id=user.id).update(streak=7, coins=120)
    engine = BadgeEngine()

    first = await engine.check_and_award_all(user.id)
    second = await engine.check_and_award_all(user.id)

    assert first == ["3-Day Warrior", "Week Champion", "Coin Collector"]
    assert second == []


@pytest.mark.asyncio
async def test_task_master_counts_completions(user, make_task) -> None:
    task = await make_task()
    now = datetime(2026, 10, 18, tzinfo=timezone.utc)
    for _ in range(30):
        await Completion.create(user=user, task=task, completed_at=now, coins_earned=0)

    stats = await BadgeEngine().load_stats(user.id)

    assert stats.lifetime_completions == 30
    assert await BadgeEngine().check_earned(user.id, "Task Master")


@pytest.mark.asyncio
async def test_progress_reports_every_badge(user) -> None:
    await User.filter(id=user.id).update(streak=2, coins=50)
    engine = BadgeEngine()

    progress = {item.badge.name: item for item in await engine.progress(user.id)}

    assert list(progress) == [
        "3-Day Warrior",
        "Week Champion",
        "Task Master",
        "Coin Collector",
    ]
    assert progress["3-Day Warrior"].progress_text == "2/3 days"
    assert progress["Coin Collector"].progress == 50.0
    assert not progress["Coin Collector"].earned


@pytest.mark.asyncio
async def test_earned_badge_reports_full_progress(user) -> None:
    await User.filter(id=user.id).update(streak=3)
    engine = BadgeEngine()
    await engine.award(user.id, "3-Day Warrior")
    # Streak broke after the award
    await User.filter(id=user.id).update(streak=0)

    progress = {item.badge.name: item for item in await engine.progress(user.id)}

    assert progress["3-Day Warrior"].earned
    assert progress["3-Day Warrior"].progress == 100.0
    assert progress["3-Day Warrior"].earned_at is not None
    assert [b.badge_name for b in await engine.list_earned(user.id)] == [
        "3-Day Warrior"
    ]


async def _boom(*args, **kwargs):
    raise RuntimeError("lookup failed")


@pytest.mark.asyncio
async def test_progress_lookup_failure_gives_zero_progress(user, monkeypatch) -> None:
    await User.filter(id=user.id).update(streak=5, coins=80)
    monkeypatch.setattr(completion_repo, "count_for_user", _boom)
    monkeypatch.setattr(badge_repo, "list_for_user", _boom)

    progress = await BadgeEngine().progress(user.id)

    assert len(progress) == 4
    assert all(item.progress == 0.0 for item in progress)
    assert all(not item.earned for item in progress)
    assert progress[0].progress_text == "0/3 days"
