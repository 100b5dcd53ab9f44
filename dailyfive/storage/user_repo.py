"""
User Repository - CRUD operations for the User model.

AICODE-NOTE: Data access only, NO business logic.
Streak and level rules live in core/domain.
Coin/XP credits are atomic F() increments, never read-modify-write.
"""

from datetime import date, datetime
from typing import Optional

from tortoise.expressions import F

from dailyfive.database.models import User


async def get_user(user_id: int) -> Optional[User]:
    """Get user by primary key."""
    return await User.get_or_none(id=user_id)


async def get_user_by_auth_id(auth_id: str) -> Optional[User]:
    """Get user by identity provider subject."""
    return await User.get_or_none(auth_id=auth_id)


async def create_user(
    auth_id: str,
    email: str | None = None,
    name: str = "",
    interests: list[str] | None = None,
) -> User:
    return await User.create(
        auth_id=auth_id,
        email=email,
        name=name,
        interests=interests or [],
    )


async def update_profile(
    user: User,
    name: str | None = None,
    interests: list[str] | None = None,
    avatar_url: str | None = None,
) -> User:
    """Update only the given profile fields."""
    if name is not None:
        user.name = name
    if interests is not None:
        user.interests = interests
    if avatar_url is not None:
        user.avatar_url = avatar_url
    await user.save()
    return user


async def add_rewards(user_id: int, coins: int, xp: int) -> None:
    """Credit coins and XP in a single atomic UPDATE."""
    await User.filter(id=user_id).update(coins=F("coins") + coins, xp=F("xp") + xp)


async def update_streak(
    user_id: int,
    streak: int,
    last_completion_date: date | None,
    last_completion_at: datetime | None,
) -> None:
    await User.filter(id=user_id).update(
        streak=streak,
        last_completion_date=last_completion_date,
        last_completion_at=last_completion_at,
    )


async def list_users_with_streak() -> list[User]:
    """Users with an active streak (streak > 0)."""
    return await User.filter(streak__gt=0).all()


async def reset_streak(user_id: int) -> None:
    await User.filter(id=user_id).update(streak=0)


async def list_top_by_coins(limit: int) -> list[User]:
    """Users ordered by coins desc; id keeps ties stable."""
    return await User.all().order_by("-coins", "id").limit(limit)


async def count_with_more_coins(coins: int) -> int:
    return await User.filter(coins__gt=coins).count()
