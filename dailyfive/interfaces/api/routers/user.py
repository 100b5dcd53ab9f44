"""
User API router.

Endpoints:
- GET /api/me - Current profile with level info and rank
- PATCH /api/me - Update name, interests, avatar
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from dailyfive.core.domain.levels import level_info
from dailyfive.core.use_cases.leaderboard import get_user_rank
from dailyfive.database.models import User
from dailyfive.interfaces.api.auth import (
    SessionIdentity,
    get_current_identity,
    get_current_user,
)
from dailyfive.interfaces.api.schemas import (
    LevelInfoResponse,
    MeResponse,
    UpdateProfileRequest,
    UserResponse,
)
from dailyfive.storage import assignment_repo, user_repo

router = APIRouter(prefix="/api", tags=["user"])


async def _build_me(user: User) -> MeResponse:
    return MeResponse(
        user=UserResponse.model_validate(user),
        level=LevelInfoResponse.model_validate(level_info(user.xp)),
        rank=await get_user_rank(user.id),
        completed_today=await assignment_repo.count_completed_for_day(
            user.id, datetime.now(timezone.utc).date()
        ),
    )


@router.get("/me", response_model=MeResponse)
async def get_me(
    identity: SessionIdentity = Depends(get_current_identity),
) -> MeResponse:
    """
    Get current user profile.

    Creates the user row on first call for a verified identity.
    """
    user = await user_repo.get_user_by_auth_id(identity.sub)

    if not user:
        user = await user_repo.create_user(
            auth_id=identity.sub,
            email=identity.email,
            name=identity.name or "",
        )

    return await _build_me(user)


@router.patch("/me", response_model=MeResponse)
async def update_me(
    request: UpdateProfileRequest,
    user: User = Depends(get_current_user),
) -> MeResponse:
    interests = None
    if request.interests is not None:
        # Trimmed, deduplicated, order kept
        interests = list(dict.fromkeys(t.strip() for t in request.interests if t.strip()))

    user = await user_repo.update_profile(
        user,
        name=request.name,
        interests=interests,
        avatar_url=request.avatar_url,
    )
    return await _build_me(user)
