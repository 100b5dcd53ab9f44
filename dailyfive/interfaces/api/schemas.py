"""
Pydantic schemas for API requests and responses.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

# ============ User Schemas ============


class LevelInfoResponse(BaseModel):
    """Derived level progress."""

    model_config = ConfigDict(from_attributes=True)

    current_level: int
    current_xp: int
    xp_for_current_level: int
    xp_for_next_level: int
    xp_until_next_level: int
    progress_percentage: int


class UserResponse(BaseModel):
    """User profile response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str | None = None
    name: str
    avatar_url: str | None = None
    interests: list[str]
    is_admin: bool

    # Gamification
    coins: int
    xp: int
    streak: int
    last_completion_date: dt.date | None = None


class MeResponse(BaseModel):
    """Profile with derived stats."""

    user: UserResponse
    level: LevelInfoResponse
    rank: int | None = None
    completed_today: int


class UpdateProfileRequest(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    interests: list[str] | None = None
    avatar_url: str | None = Field(default=None, max_length=500)


# ============ Task Schemas ============


class TaskResponse(BaseModel):
    """Catalog task."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    category: str
    type: str
    difficulty: int
    duration_seconds: int
    tags: list[str]
    completion_count: int
    affiliate_link: str | None = None


class DailyTaskResponse(TaskResponse):
    """Task with the user's completion state for the day."""

    completed: bool = False
    completed_at: dt.datetime | None = None
    coins_earned: int = 0


class DailyTasksResponse(BaseModel):
    tasks: list[DailyTaskResponse]
    date: dt.date
    generated: bool
    # Only present when the bundle was generated by this request
    breakdown: dict[str, list[TaskResponse]] | None = None


class CreateTaskRequest(BaseModel):
    """Admin: new catalog task. Range checks run in task_rules."""

    title: str
    description: str
    category: str
    type: str
    difficulty: int
    duration_seconds: int
    tags: list[str]
    affiliate_link: str | None = None


# ============ Completion Schemas ============


class CompleteTaskRequest(BaseModel):
    task_id: int
    date: dt.date | None = None


class CompleteTaskResponse(BaseModel):
    """Response after completing a task."""

    success: bool
    coins_earned: int
    xp_gained: int
    streak_updated: bool
    new_streak: int
    all_tasks_completed: bool
    new_badges: list[str] | None = None
    message: str


class CompletionHistoryItem(BaseModel):
    id: int
    task_id: int
    task_title: str
    completed_at: dt.datetime
    coins_earned: int
    streak_at_completion: int


class HistoryResponse(BaseModel):
    completions: list[CompletionHistoryItem]


# ============ Badge Schemas ============


class BadgeDefinitionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    description: str
    icon: str
    requirement: str


class EarnedBadgeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    badge_name: str
    badge_description: str
    earned_at: dt.datetime


class BadgeProgressResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    badge: BadgeDefinitionResponse
    earned: bool
    earned_at: dt.datetime | None = None
    progress: float
    progress_text: str


class BadgesResponse(BaseModel):
    badges: list[EarnedBadgeResponse]


class BadgeProgressListResponse(BaseModel):
    badges: list[BadgeProgressResponse]


# ============ Leaderboard Schemas ============


class LeaderboardEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    rank: int
    user_id: int
    name: str
    coins: int
    streak: int
    level: int
    avatar_url: str | None = None


class LeaderboardResponse(BaseModel):
    leaderboard: list[LeaderboardEntryResponse]


class RankResponse(BaseModel):
    rank: int | None = None
