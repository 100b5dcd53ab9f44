"""
Badges API router.

Endpoints:
- GET /api/badges - Earned badges (?progress=true for catalog progress)
"""

from fastapi import APIRouter, Depends, Query

from dailyfive.core.use_cases.award_badges import BadgeEngine
from dailyfive.database.models import User
from dailyfive.interfaces.api.auth import get_current_user
from dailyfive.interfaces.api.schemas import (
    BadgeProgressListResponse,
    BadgeProgressResponse,
    BadgesResponse,
    EarnedBadgeResponse,
)

router = APIRouter(prefix="/api", tags=["badges"])


@router.get("/badges", response_model=None)
async def get_badges(
    progress: bool = Query(default=False),
    user: User = Depends(get_current_user),
) -> BadgesResponse | BadgeProgressListResponse:
    engine = BadgeEngine()

    if progress:
        items = await engine.progress(user.id)
        return BadgeProgressListResponse(
            badges=[BadgeProgressResponse.model_validate(item) for item in items]
        )

    earned = await engine.list_earned(user.id)
    return BadgesResponse(
        badges=[EarnedBadgeResponse.model_validate(badge) for badge in earned]
    )
