from tortoise import BaseDBAsyncClient

RUN_IN_TRANSACTION = True


async def upgrade(db: BaseDBAsyncClient) -> str:
    return """
        CREATE TABLE IF NOT EXISTS "users" (
    "id" SERIAL NOT NULL PRIMARY KEY,
    "auth_id" VARCHAR(64) NOT NULL UNIQUE,
    "email" VARCHAR(255),
    "name" VARCHAR(255) NOT NULL DEFAULT '',
    "avatar_url" VARCHAR(500),
    "is_admin" BOOL NOT NULL DEFAULT False,
    "coins" INT NOT NULL DEFAULT 0,
    "xp" INT NOT NULL DEFAULT 0,
    "streak" INT NOT NULL DEFAULT 0,
    "last_completion_date" DATE,
    "last_completion_at" TIMESTAMPTZ,
    "interests" JSONB NOT NULL,
    "created_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "updated_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
);
CREATE INDEX IF NOT EXISTS "idx_users_auth_id_5b1c2e" ON "users" ("auth_id");
COMMENT ON TABLE "users" IS 'Player.';
CREATE TABLE IF NOT EXISTS "tasks" (
    "id" SERIAL NOT NULL PRIMARY KEY,
    "title" VARCHAR(100) NOT NULL,
    "description" VARCHAR(120) NOT NULL,
    "category" VARCHAR(20) NOT NULL,
    "type" VARCHAR(20) NOT NULL,
    "difficulty" INT NOT NULL DEFAULT 1,
    "duration_seconds" INT NOT NULL DEFAULT 60,
    "tags" JSONB NOT NULL,
    "completion_count" INT NOT NULL DEFAULT 0,
    "affiliate_link" VARCHAR(500),
    "created_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
);
COMMENT ON TABLE "tasks" IS 'Catalog micro-task.';
CREATE TABLE IF NOT EXISTS "daily_user_tasks" (
    "id" SERIAL NOT NULL PRIMARY KEY,
    "assigned_date" DATE NOT NULL,
    "completed" BOOL NOT NULL DEFAULT False,
    "completed_at" TIMESTAMPTZ,
    "coins_earned" INT NOT NULL DEFAULT 0,
    "created_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "task_id" INT NOT NULL REFERENCES "tasks" ("id") ON DELETE CASCADE,
    "user_id" INT NOT NULL REFERENCES "users" ("id") ON DELETE CASCADE,
    CONSTRAINT "uid_daily_user__user_id_8c0f4a" UNIQUE ("user_id", "task_id", "assigned_date")
);
CREATE INDEX IF NOT EXISTS "idx_daily_user__assigne_3f9d61" ON "daily_user_tasks" ("assigned_date");
COMMENT ON TABLE "daily_user_tasks" IS 'Task assigned to a user for one date.';
CREATE TABLE IF NOT EXISTS "completions" (
    "id" SERIAL NOT NULL PRIMARY KEY,
    "completed_at" TIMESTAMPTZ NOT NULL,
    "coins_earned" INT NOT NULL DEFAULT 0,
    "streak_at_completion" INT NOT NULL DEFAULT 0,
    "task_id" INT NOT NULL REFERENCES "tasks" ("id") ON DELETE CASCADE,
    "user_id" INT NOT NULL REFERENCES "users" ("id") ON DELETE CASCADE
);
CREATE INDEX IF NOT EXISTS "idx_completions_complet_a41e07" ON "completions" ("completed_at");
COMMENT ON TABLE "completions" IS 'Completion audit record. Never updated.';
CREATE TABLE IF NOT EXISTS "badges" (
    "id" SERIAL NOT NULL PRIMARY KEY,
    "badge_name" VARCHAR(50) NOT NULL,
    "badge_description" VARCHAR(255) NOT NULL DEFAULT '',
    "earned_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "user_id" INT NOT NULL REFERENCES "users" ("id") ON DELETE CASCADE,
    CONSTRAINT "uid_badges_user_id_e2b7c9" UNIQUE ("user_id", "badge_name")
);
COMMENT ON TABLE "badges" IS 'Badge awarded to a user.';
CREATE TABLE IF NOT EXISTS "aerich" (
    "id" SERIAL NOT NULL PRIMARY KEY,
    "version" VARCHAR(255) NOT NULL,
    "app" VARCHAR(100) NOT NULL,
    "content" JSONB NOT NULL
);"""


async def downgrade(db: BaseDBAsyncClient) -> str:
    return """
        DROP TABLE IF EXISTS "badges";
        DROP TABLE IF EXISTS "completions";
        DROP TABLE IF EXISTS "daily_user_tasks";
        DROP TABLE IF EXISTS "tasks";
        DROP TABLE IF EXISTS "users";"""
