"""
Database models for Daily Five.

Structure:
- User: player profile and cumulative stats (coins, xp, streak)
- Task: catalog entry (micro-task 30-120 seconds)
- DailyAssignment: task assigned to a user for a date (5 per day)
- Completion: append-only log of successful completions
- Badge: badge awarded to a user (once per badge)
"""

from tortoise import fields, models


class User(models.Model):
    """Player."""

    id = fields.IntField(primary_key=True)
    # Subject of the external identity provider
    auth_id = fields.CharField(max_length=64, unique=True, db_index=True)
    email = fields.CharField(max_length=255, null=True)
    name = fields.CharField(max_length=255, default="")
    avatar_url = fields.CharField(max_length=500, null=True)
    is_admin = fields.BooleanField(default=False)

    # Stats (level is derived from xp, never stored)
    coins = fields.IntField(default=0)
    xp = fields.IntField(default=0)
    streak = fields.IntField(default=0)
    last_completion_date = fields.DateField(null=True)
    # Timestamp of the last day-completing event (24h streak rule)
    last_completion_at = fields.DatetimeField(null=True)

    # Topic tags, matched against Task.tags
    interests: list[str] = fields.JSONField(default=list)

    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    assignments: fields.ReverseRelation["DailyAssignment"]
    completions: fields.ReverseRelation["Completion"]
    badges: fields.ReverseRelation["Badge"]

    class Meta:
        table = "users"


class Task(models.Model):
    """Catalog micro-task."""

    id = fields.IntField(primary_key=True)
    title = fields.CharField(max_length=100)
    description = fields.CharField(max_length=120)

    # learn, move, reflect, fun, skill, challenge (type always equals category)
    category = fields.CharField(max_length=20)
    type = fields.CharField(max_length=20)

    difficulty = fields.IntField(default=1)  # 1-5
    duration_seconds = fields.IntField(default=60)  # 30-120

    tags: list[str] = fields.JSONField(default=list)

    # Lifetime completions (all users)
    completion_count = fields.IntField(default=0)

    affiliate_link = fields.CharField(max_length=500, null=True)

    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "tasks"


class DailyAssignment(models.Model):
    """
    Task assigned to a user for one date.
    Goes pending -> completed exactly once.
    """

    id = fields.IntField(primary_key=True)
    user: fields.ForeignKeyRelation[User] = fields.ForeignKeyField(
        "models.User", related_name="assignments", on_delete=fields.CASCADE
    )
    user_id: int  # AICODE-NOTE: MyPy hint for FK (Tortoise auto-creates this)
    task: fields.ForeignKeyRelation[Task] = fields.ForeignKeyField(
        "models.Task", related_name="assignments", on_delete=fields.CASCADE
    )
    task_id: int

    assigned_date = fields.DateField(db_index=True)

    completed = fields.BooleanField(default=False)
    completed_at = fields.DatetimeField(null=True)
    coins_earned = fields.IntField(default=0)

    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "daily_user_tasks"
        unique_together = (("user", "task", "assigned_date"),)


class Completion(models.Model):
    """Completion audit record. Never updated."""

    id = fields.IntField(primary_key=True)
    user: fields.ForeignKeyRelation[User] = fields.ForeignKeyField(
        "models.User", related_name="completions", on_delete=fields.CASCADE
    )
    user_id: int
    task: fields.ForeignKeyRelation[Task] = fields.ForeignKeyField(
        "models.Task", related_name="completions", on_delete=fields.CASCADE
    )
    task_id: int

    completed_at = fields.DatetimeField(db_index=True)
    coins_earned = fields.IntField(default=0)
    # Streak value right after this completion was processed
    streak_at_completion = fields.IntField(default=0)

    class Meta:
        table = "completions"


class Badge(models.Model):
    """Badge awarded to a user."""

    id = fields.IntField(primary_key=True)
    user: fields.ForeignKeyRelation[User] = fields.ForeignKeyField(
        "models.User", related_name="badges", on_delete=fields.CASCADE
    )
    user_id: int

    badge_name = fields.CharField(max_length=50)
    badge_description = fields.CharField(max_length=255, default="")
    earned_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "badges"
        unique_together = (("user", "badge_name"),)
