"""History API endpoints."""

from fastapi import APIRouter, Depends, Query

from dailyfive.database.models import User
from dailyfive.interfaces.api import schemas
from dailyfive.interfaces.api.auth import get_current_user
from dailyfive.storage import completion_repo

router = APIRouter(prefix="/api", tags=["history"])


@router.get("/history", response_model=schemas.HistoryResponse)
async def get_history(
    user: User = Depends(get_current_user),
    limit: int = Query(default=20, ge=1, le=100, description="Max items to return"),
):
    """Get user's most recent completions, newest first."""
    completions = await completion_repo.list_for_user(user.id, limit=limit)

    return schemas.HistoryResponse(
        completions=[
            schemas.CompletionHistoryItem(
                id=completion.id,
                task_id=completion.task_id,
                task_title=completion.task.title,
                completed_at=completion.completed_at,
                coins_earned=completion.coins_earned,
                streak_at_completion=completion.streak_at_completion,
            )
            for completion in completions
        ]
    )
