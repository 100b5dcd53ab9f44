import os
import sys

os.environ.setdefault("SESSION_SECRET", "test-secret")

import pytest_asyncio
from tortoise import Tortoise

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest_asyncio.fixture(scope="function")
async def db() -> None:
    """Lightweight in-memory DB per test."""
    await Tortoise.init(
        db_url="sqlite://:memory:", modules={"models": ["dailyfive.database.models"]}
    )
    await Tortoise.generate_schemas()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def user(db):
    """Create a test user."""
    from dailyfive.database.models import User

    user = await User.create(auth_id="auth-user-1", name="Test", email="test@example.com")
    return user


@pytest_asyncio.fixture
async def make_task(db):
    """Factory for catalog tasks with sane defaults."""
    from dailyfive.database.models import Task

    counter = {"n": 0}

    async def _make(**overrides) -> Task:
        counter["n"] += 1
        category = overrides.pop("category", "learn")
        data = {
            "title": f"Task {counter['n']}",
            "description": "Do a small thing.",
            "category": category,
            "type": category,
            "difficulty": 1,
            "duration_seconds": 60,
            "tags": ["general"],
        }
        data.update(overrides)
        return await Task.create(**data)

    return _make
