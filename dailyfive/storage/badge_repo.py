"""
Badge Repository - award records.

AICODE-NOTE: (user, badge_name) is unique in the DB, one award per badge.
"""

from dailyfive.database.models import Badge


async def has_badge(user_id: int, badge_name: str) -> bool:
    return await Badge.filter(user_id=user_id, badge_name=badge_name).exists()


async def create_award(user_id: int, badge_name: str, description: str) -> Badge:
    return await Badge.create(
        user_id=user_id, badge_name=badge_name, badge_description=description
    )


async def list_for_user(user_id: int) -> list[Badge]:
    """Earned badges, newest first."""
    return await Badge.filter(user_id=user_id).order_by("-earned_at", "-id")
