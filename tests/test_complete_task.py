from datetime import date, datetime, timedelta, timezone

import pytest

from dailyfive.core.use_cases.award_badges import BadgeEngine
from dailyfive.core.use_cases.complete_task import (
    ALREADY_COMPLETED,
    INVALID_DIFFICULTY,
    NOT_ASSIGNED,
    UPDATE_FAILED,
    CompleteTaskUseCase,
)
from dailyfive.database.models import Badge, Completion, DailyAssignment, Task, User
from dailyfive.storage import assignment_repo, user_repo

DAY = date(2026, 10, 18)
NOW = datetime(2026, 10, 18, 20, 0, tzinfo=timezone.utc)


async def _assign(user: User, tasks: list[Task], assigned_date: date = DAY) -> None:
    for task in tasks:
        await DailyAssignment.create(user=user, task=task, assigned_date=assigned_date)


async def _bundle(make_task, difficulties=(4, 1, 2, 3, 5)) -> list[Task]:
    return [await make_task(difficulty=d) for d in difficulties]


async def _complete_all(user: User, tasks: list[Task], day: date, now: datetime):
    use_case = CompleteTaskUseCase()
    result = None
    for task in tasks:
        result = await use_case.execute(user.id, task.id, day, now=now)
        assert result.success
    return result


@pytest.mark.asyncio
async def test_single_completion_rewards_without_streak(user, make_task) -> None:
    tasks = await _bundle(make_task)
    await _assign(user, tasks)

    result = await CompleteTaskUseCase().execute(user.id, tasks[0].id, DAY, now=NOW)

    assert result.success
    assert result.coins_earned == 12
    assert result.xp_gained == 12
    assert not result.all_tasks_completed
    assert not result.streak_updated
    assert result.new_streak == 0

    await user.refresh_from_db()
    assert user.coins == 12
    assert user.xp == 12
    assert user.streak == 0

    assignment = await DailyAssignment.get(user_id=user.id, task_id=tasks[0].id)
    assert assignment.completed
    assert assignment.coins_earned == 12
    assert assignment.completed_at is not None

    completion = await Completion.get(user_id=user.id, task_id=tasks[0].id)
    assert completion.coins_earned == 12
    assert completion.streak_at_completion == 0

    await tasks[0].refresh_from_db()
    assert tasks[0].completion_count == 1


@pytest.mark.asyncio
async def test_second_completion_is_rejected(user, make_task) -> None:
    tasks = await _bundle(make_task)
    await _assign(user, tasks)
    use_case = CompleteTaskUseCase()

    await use_case.execute(user.id, tasks[1].id, DAY, now=NOW)
    again = await use_case.execute(user.id, tasks[1].id, DAY, now=NOW)

    assert not again.success
    assert again.error_code == ALREADY_COMPLETED

    await user.refresh_from_db()
    assert user.coins == 3
    assert await Completion.filter(user_id=user.id).count() == 1


@pytest.mark.asyncio
async def test_unassigned_task(user, make_task) -> None:
    tasks = await _bundle(make_task)
    await _assign(user, tasks[:4])

    result = await CompleteTaskUseCase().execute(user.id, tasks[4].id, DAY, now=NOW)

    assert not result.success
    assert result.error_code == NOT_ASSIGNED
    await user.refresh_from_db()
    assert user.coins == 0


@pytest.mark.asyncio
async def test_other_date_is_not_assigned(user, make_task) -> None:
    tasks = await _bundle(make_task)
    await _assign(user, tasks)

    result = await CompleteTaskUseCase().execute(
        user.id, tasks[0].id, DAY + timedelta(days=1), now=NOW
    )

    assert result.error_code == NOT_ASSIGNED


@pytest.mark.asyncio
async def test_invalid_difficulty_leaves_assignment_pending(user, make_task) -> None:
    broken = await make_task(difficulty=9)
    await _assign(user, [broken])

    result = await CompleteTaskUseCase().execute(user.id, broken.id, DAY, now=NOW)

    assert result.error_code == INVALID_DIFFICULTY
    assignment = await DailyAssignment.get(user_id=user.id, task_id=broken.id)
    assert not assignment.completed


@pytest.mark.asyncio
async def test_four_of_five_does_not_move_streak(user, make_task) -> None:
    tasks = await _bundle(make_task)
    await _assign(user, tasks)

    result = await _complete_all(user, tasks[:4], DAY, NOW)

    assert not result.all_tasks_completed
    assert not result.streak_updated
    await user.refresh_from_db()
    assert user.streak == 0
    assert user.last_completion_date is None


@pytest.mark.asyncio
async def test_full_bundle_starts_streak(user, make_task) -> None:
    tasks = await _bundle(make_task)
    await _assign(user, tasks)

    result = await _complete_all(user, tasks, DAY, NOW)

    assert result.all_tasks_completed
    assert result.streak_updated
    assert result.new_streak == 1

    await user.refresh_from_db()
    assert user.streak == 1
    assert user.last_completion_date == DAY
    assert user.coins == 45
    assert user.xp == 45

    last = await Completion.get(user_id=user.id, task_id=tasks[-1].id)
    assert last.streak_at_completion == 1


@pytest.mark.asyncio
async def test_consecutive_days_increment_streak(user, make_task) -> None:
    day_one = await _bundle(make_task)
    day_two = await _bundle(make_task)
    await _assign(user, day_one, DAY)
    await _assign(user, day_two, DAY + timedelta(days=1))

    await _complete_all(user, day_one, DAY, NOW)
    result = await _complete_all(
        user, day_two, DAY + timedelta(days=1), NOW + timedelta(hours=14)
    )

    assert result.new_streak == 2
    await user.refresh_from_db()
    assert user.streak == 2
    assert user.last_completion_date == DAY + timedelta(days=1)


@pytest.mark.asyncio
async def test_gap_over_24h_resets_streak_to_one(user, make_task) -> None:
    day_one = await _bundle(make_task)
    day_three = await _bundle(make_task)
    await _assign(user, day_one, DAY)
    await _assign(user, day_three, DAY + timedelta(days=2))

    await _complete_all(user, day_one, DAY, NOW)
    await User.filter(id=user.id).update(streak=6)

    result = await _complete_all(
        user, day_three, DAY + timedelta(days=2), NOW + timedelta(days=2)
    )

    assert result.streak_updated
    assert result.new_streak == 1


@pytest.mark.asyncio
async def test_completion_awards_coin_collector(user, make_task) -> None:
    user.coins = 95
    await user.save()
    task = await make_task(difficulty=2)
    await _assign(user, [task])

    result = await CompleteTaskUseCase().execute(user.id, task.id, DAY, now=NOW)

    assert result.new_badges == ["Coin Collector"]
    assert await Badge.filter(user_id=user.id).count() == 1


@pytest.mark.asyncio
async def test_back_dated_bundle_does_not_advance_streak(user, make_task) -> None:
    today_tasks = await _bundle(make_task)
    yesterday_tasks = await _bundle(make_task)
    await _assign(user, today_tasks, DAY)
    await _assign(user, yesterday_tasks, DAY - timedelta(days=1))

    await _complete_all(user, today_tasks, DAY, NOW)
    result = await _complete_all(
        user, yesterday_tasks, DAY - timedelta(days=1), NOW + timedelta(minutes=1)
    )

    assert result.all_tasks_completed
    assert result.new_streak == 1
    await user.refresh_from_db()
    assert user.streak == 1
    assert user.last_completion_date == DAY


async def _boom(*args, **kwargs):
    raise RuntimeError("store unavailable")


@pytest.mark.asyncio
async def test_reward_failure_still_completes(user, make_task, monkeypatch) -> None:
    task = await make_task(difficulty=2)
    await _assign(user, [task])
    monkeypatch.setattr(user_repo, "add_rewards", _boom)

    result = await CompleteTaskUseCase().execute(user.id, task.id, DAY, now=NOW)

    assert result.success
    assert result.coins_earned == 6
    await user.refresh_from_db()
    assert user.coins == 0
    assignment = await DailyAssignment.get(user_id=user.id, task_id=task.id)
    assert assignment.completed
    assert await Completion.filter(user_id=user.id).count() == 1


@pytest.mark.asyncio
async def test_badge_failure_still_completes(user, make_task, monkeypatch) -> None:
    task = await make_task(difficulty=1)
    await _assign(user, [task])
    monkeypatch.setattr(BadgeEngine, "check_and_award_all", _boom)

    result = await CompleteTaskUseCase().execute(user.id, task.id, DAY, now=NOW)

    assert result.success
    assert result.new_badges == []


@pytest.mark.asyncio
async def test_failed_completion_write_aborts(user, make_task, monkeypatch) -> None:
    task = await make_task(difficulty=2)
    await _assign(user, [task])
    monkeypatch.setattr(assignment_repo, "mark_completed", _boom)

    result = await CompleteTaskUseCase().execute(user.id, task.id, DAY, now=NOW)

    assert not result.success
    assert result.error_code == UPDATE_FAILED
    await user.refresh_from_db()
    assert user.coins == 0
    assert user.xp == 0
    assert await Completion.filter(user_id=user.id).count() == 0
