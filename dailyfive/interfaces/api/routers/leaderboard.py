"""
Leaderboard API router.

Endpoints:
- GET /api/leaderboard - Top users by coins
- GET /api/leaderboard/me - Current user's rank
"""

from fastapi import APIRouter, Depends, Query

from dailyfive.config import config
from dailyfive.core.use_cases.leaderboard import get_global_leaderboard, get_user_rank
from dailyfive.database.models import User
from dailyfive.interfaces.api.auth import get_current_user
from dailyfive.interfaces.api.schemas import (
    LeaderboardEntryResponse,
    LeaderboardResponse,
    RankResponse,
)

router = APIRouter(prefix="/api", tags=["leaderboard"])


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def get_leaderboard(
    limit: int | None = Query(default=None, ge=1, le=500),
) -> LeaderboardResponse:
    """Public leaderboard, no auth required."""
    entries = await get_global_leaderboard(limit or config.LEADERBOARD_DEFAULT_LIMIT)
    return LeaderboardResponse(
        leaderboard=[LeaderboardEntryResponse.model_validate(e) for e in entries]
    )


@router.get("/leaderboard/me", response_model=RankResponse)
async def get_my_rank(user: User = Depends(get_current_user)) -> RankResponse:
    return RankResponse(rank=await get_user_rank(user.id))
