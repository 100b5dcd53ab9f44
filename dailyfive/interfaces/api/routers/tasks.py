"""
Tasks API router.

Endpoints:
- GET /api/tasks/daily - Get or generate the day's 5 tasks
- POST /api/tasks - Create a catalog task (admin)
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from dailyfive.core.domain.task_rules import (
    format_validation_errors,
    sanitize_task_data,
    validate_task_for_creation,
)
from dailyfive.core.use_cases.get_daily_bundle import GetDailyBundleUseCase
from dailyfive.database.models import DailyAssignment, User
from dailyfive.interfaces.api.auth import get_current_user
from dailyfive.interfaces.api.schemas import (
    CreateTaskRequest,
    DailyTaskResponse,
    DailyTasksResponse,
    TaskResponse,
)
from dailyfive.storage import task_repo

router = APIRouter(prefix="/api", tags=["tasks"])
logger = logging.getLogger(__name__)


def _daily_task(assignment: DailyAssignment) -> DailyTaskResponse:
    task = TaskResponse.model_validate(assignment.task)
    return DailyTaskResponse(
        **task.model_dump(),
        completed=assignment.completed,
        completed_at=assignment.completed_at,
        coins_earned=assignment.coins_earned,
    )


@router.get("/tasks/daily", response_model=DailyTasksResponse)
async def get_daily_tasks(
    bundle_date: date | None = Query(default=None, alias="date"),
    user: User = Depends(get_current_user),
) -> DailyTasksResponse:
    """
    Get the user's tasks for a date (default today).

    Generates and stores the bundle on the first request of the day.
    """
    use_case = GetDailyBundleUseCase()
    result = await use_case.execute(user_id=user.id, bundle_date=bundle_date)

    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=result.error_message,
        )

    breakdown = None
    if result.breakdown is not None:
        breakdown = {
            source: [TaskResponse.model_validate(task) for task in tasks]
            for source, tasks in result.breakdown.items()
        }

    return DailyTasksResponse(
        tasks=[_daily_task(a) for a in result.assignments],
        date=result.bundle_date,
        generated=result.generated,
        breakdown=breakdown,
    )


@router.post(
    "/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED
)
async def create_task(
    request: CreateTaskRequest,
    user: User = Depends(get_current_user),
) -> TaskResponse:
    """Add a task to the catalog. Admins only."""
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )

    data = sanitize_task_data(request.model_dump())
    errors = validate_task_for_creation(data)
    if errors:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=format_validation_errors(errors),
        )

    task = await task_repo.create_task(data)
    logger.info(f"Task {task.id} '{task.title}' created by user {user.id}")

    return TaskResponse.model_validate(task)
