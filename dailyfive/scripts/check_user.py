"""
Inspect a player's stats, badges and today's bundle.

Usage:
    python -m dailyfive.scripts.check_user <auth_id>
"""

import asyncio
import sys
from datetime import datetime, timezone

from tortoise import Tortoise

from dailyfive.core.domain.levels import level_info
from dailyfive.database.config import TORTOISE_ORM
from dailyfive.storage import assignment_repo, badge_repo, completion_repo, user_repo


async def check_user(auth_id: str):
    await Tortoise.init(config=TORTOISE_ORM)

    try:
        user = await user_repo.get_user_by_auth_id(auth_id)

        if not user:
            print(f"❌ User {auth_id} not found.")
            return

        info = level_info(user.xp)
        print(f"👤 User: {user.name or '-'} ({user.email or 'no email'})")
        print(
            f"   ID: {user.id}, coins: {user.coins}, XP: {user.xp}, "
            f"level: {info.current_level} ({info.progress_percentage}%)"
        )
        print(f"   Streak: {user.streak}, last full day: {user.last_completion_date}")

        badges = await badge_repo.list_for_user(user.id)
        print(f"\n🏅 Badges: {len(badges)}")
        for badge in badges:
            print(f"   - {badge.badge_name} ({badge.earned_at:%Y-%m-%d})")

        today = datetime.now(timezone.utc).date()
        assignments = await assignment_repo.list_for_day(user.id, today)
        print(f"\n📋 Tasks for {today}: {len(assignments)}")
        for assignment in assignments:
            mark = "✅" if assignment.completed else "⬜"
            print(f"   {mark} {assignment.task.title} (difficulty {assignment.task.difficulty})")

        completions = await completion_repo.count_for_user(user.id)
        print(f"\n📊 Lifetime completions: {completions}")

    finally:
        await Tortoise.close_connections()


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python -m dailyfive.scripts.check_user <auth_id>")
        sys.exit(1)
    asyncio.run(check_user(sys.argv[1]))
