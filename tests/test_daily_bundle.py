import random
from datetime import date, datetime, timezone

import pytest

from dailyfive.core.use_cases.get_daily_bundle import GetDailyBundleUseCase
from dailyfive.core.use_cases.select_daily_tasks import SelectDailyTasksUseCase
from dailyfive.database.models import DailyAssignment

NOW = datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc)


def _use_case() -> GetDailyBundleUseCase:
    return GetDailyBundleUseCase(SelectDailyTasksUseCase(rng=random.Random(5)))


@pytest.mark.asyncio
async def test_bundle_generated_once_per_day(user, make_task) -> None:
    for _ in range(8):
        await make_task()

    first = await _use_case().execute(user.id, now=NOW)
    second = await _use_case().execute(user.id, now=NOW)

    assert first.success and second.success
    assert first.generated
    assert not second.generated
    assert first.breakdown is not None
    assert second.breakdown is None
    assert len(first.assignments) == 5
    assert sorted(a.task_id for a in first.assignments) == sorted(
        a.task_id for a in second.assignments
    )
    assert await DailyAssignment.filter(user_id=user.id).count() == 5


@pytest.mark.asyncio
async def test_new_date_gets_new_bundle(user, make_task) -> None:
    for _ in range(8):
        await make_task()

    await _use_case().execute(user.id, bundle_date=date(2026, 10, 18), now=NOW)
    result = await _use_case().execute(user.id, bundle_date=date(2026, 10, 19), now=NOW)

    assert result.generated
    assert result.bundle_date == date(2026, 10, 19)
    assert await DailyAssignment.filter(user_id=user.id).count() == 10


@pytest.mark.asyncio
async def test_assignments_start_pending(user, make_task) -> None:
    for _ in range(5):
        await make_task()

    result = await _use_case().execute(user.id, now=NOW)

    assert all(not a.completed for a in result.assignments)
    assert all(a.coins_earned == 0 for a in result.assignments)
    assert all(a.assigned_date == NOW.date() for a in result.assignments)


@pytest.mark.asyncio
async def test_empty_catalog_is_a_failure(user) -> None:
    result = await _use_case().execute(user.id, now=NOW)

    assert not result.success
    assert result.error_message == "No tasks available in catalog"
