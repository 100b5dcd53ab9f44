"""
Scheduler Service - periodic streak sweep.

Uses APScheduler 4.x (AsyncScheduler) with an in-memory data store.
Production deployments call POST /api/cron/reset-streaks from an external
cron service instead.
"""

import logging

from apscheduler import AsyncScheduler, ConflictPolicy
from apscheduler.triggers.interval import IntervalTrigger

from dailyfive.config import config
from dailyfive.core.use_cases.reset_streaks import reset_stale_streaks

logger = logging.getLogger(__name__)

STREAK_SWEEP_ID = "reset_stale_streaks"

_scheduler: AsyncScheduler | None = None


async def _create_scheduler() -> AsyncScheduler | None:
    if config.is_production:
        logger.info("In-process scheduler disabled in production (external cron)")
        return None
    logger.info("Using in-memory scheduler (development mode)")
    return AsyncScheduler()


async def run_streak_sweep() -> None:
    """Scheduled job: reset streaks older than 24h."""
    try:
        reset = await reset_stale_streaks()
    except Exception as e:
        logger.error(f"Streak sweep failed: {e}")
        return
    if reset:
        logger.info(f"Scheduled streak sweep reset {reset} streaks")


async def start() -> None:
    """Start the scheduler (call on app startup)."""
    global _scheduler
    _scheduler = await _create_scheduler()

    if _scheduler is None:
        return

    await _scheduler.__aenter__()
    await _scheduler.add_schedule(
        run_streak_sweep,
        trigger=IntervalTrigger(minutes=config.STREAK_SWEEP_MINUTES),
        id=STREAK_SWEEP_ID,
        conflict_policy=ConflictPolicy.replace,
    )
    await _scheduler.start_in_background()
    logger.info(
        f"Scheduler started: streak sweep every {config.STREAK_SWEEP_MINUTES} min"
    )


async def stop() -> None:
    """Stop the scheduler (call on app shutdown)."""
    global _scheduler
    if _scheduler is not None:
        await _scheduler.__aexit__(None, None, None)
        _scheduler = None
    logger.info("Scheduler stopped")
