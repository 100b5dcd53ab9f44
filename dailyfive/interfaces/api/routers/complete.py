"""
Completion API router.

Endpoints:
- POST /api/complete - Complete a task from today's bundle
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from dailyfive.core.use_cases import complete_task as completion
from dailyfive.core.use_cases.complete_task import CompleteTaskUseCase
from dailyfive.database.models import User
from dailyfive.interfaces.api.auth import get_current_user
from dailyfive.interfaces.api.schemas import CompleteTaskRequest, CompleteTaskResponse

router = APIRouter(prefix="/api", tags=["completion"])
logger = logging.getLogger(__name__)

_ERROR_STATUS = {
    completion.NOT_ASSIGNED: status.HTTP_404_NOT_FOUND,
    completion.ALREADY_COMPLETED: status.HTTP_409_CONFLICT,
    completion.INVALID_DIFFICULTY: status.HTTP_400_BAD_REQUEST,
    completion.UPDATE_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    completion.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@router.post("/complete", response_model=CompleteTaskResponse)
async def complete_task(
    request: CompleteTaskRequest,
    user: User = Depends(get_current_user),
) -> CompleteTaskResponse:
    """
    Complete a task.

    Awards coins and XP; updates the streak when all 5 tasks are done.
    """
    use_case = CompleteTaskUseCase()
    result = await use_case.execute(
        user_id=user.id, task_id=request.task_id, assigned_date=request.date
    )

    if not result.success:
        raise HTTPException(
            status_code=_ERROR_STATUS.get(
                result.error_code, status.HTTP_400_BAD_REQUEST
            ),
            detail=result.error_message or "Failed to complete task",
        )

    logger.info(
        f"Task {request.task_id} completed via API by user {user.id}: "
        f"+{result.coins_earned} coins"
    )

    return CompleteTaskResponse(
        success=True,
        coins_earned=result.coins_earned,
        xp_gained=result.xp_gained,
        streak_updated=result.streak_updated,
        new_streak=result.new_streak,
        all_tasks_completed=result.all_tasks_completed,
        new_badges=result.new_badges or None,
        message=(
            "🎉 All tasks completed! Streak updated!"
            if result.all_tasks_completed
            else "✅ Task completed!"
        ),
    )
