"""
Seed the task catalog with a starter set of micro-tasks.

Usage:
    python -m dailyfive.scripts.seed_tasks

Tasks whose title already exists are skipped, so the script can be re-run.
"""

import asyncio
import logging

from tortoise import Tortoise

from dailyfive.core.domain.task_rules import (
    format_validation_errors,
    sanitize_task_data,
    validate_task_for_creation,
)
from dailyfive.database.config import TORTOISE_ORM
from dailyfive.storage import task_repo

logger = logging.getLogger(__name__)


def _task(
    title: str,
    description: str,
    category: str,
    difficulty: int,
    duration_seconds: int,
    tags: list[str],
) -> dict:
    return {
        "title": title,
        "description": description,
        "category": category,
        "type": category,
        "difficulty": difficulty,
        "duration_seconds": duration_seconds,
        "tags": tags,
    }


STARTER_TASKS: list[dict] = [
    # learn
    _task("Learn a new word", "Look up one unfamiliar word and use it in a sentence.", "learn", 1, 60, ["language", "reading"]),
    _task("Capital city quiz", "Name the capitals of three countries you have never visited.", "learn", 2, 60, ["geography", "trivia"]),
    _task("One fact about space", "Read one short fact about the solar system.", "learn", 1, 45, ["science", "reading"]),
    # move
    _task("Ten squats", "Do ten slow squats with good form.", "move", 2, 60, ["fitness", "health"]),
    _task("Shoulder rolls", "Roll your shoulders backwards ten times, then forwards ten times.", "move", 1, 30, ["health", "posture"]),
    _task("Wall sit", "Hold a wall sit for as long as you can, up to one minute.", "move", 3, 90, ["fitness"]),
    # reflect
    _task("Three good things", "Write down three things that went well today.", "reflect", 1, 90, ["mindfulness", "journaling"]),
    _task("Box breathing", "Breathe in 4s, hold 4s, out 4s, hold 4s. Repeat four times.", "reflect", 1, 60, ["mindfulness", "health"]),
    _task("Name one worry", "Write one worry down and one small step you could take on it.", "reflect", 2, 120, ["journaling"]),
    # fun
    _task("Doodle a cat", "Draw a cat in under a minute. Any style counts.", "fun", 1, 60, ["art", "creativity"]),
    _task("Hum a song", "Hum the chorus of your favourite song from memory.", "fun", 1, 30, ["music"]),
    _task("Invent a word", "Make up a word and its definition.", "fun", 2, 60, ["language", "creativity"]),
    # skill
    _task("Tidy your desktop", "Delete or file five items on your computer desktop.", "skill", 2, 120, ["productivity"]),
    _task("Learn a shortcut", "Find one keyboard shortcut you don't know and try it three times.", "skill", 2, 60, ["productivity", "tech"]),
    _task("Tie a new knot", "Learn to tie a bowline knot using a shoelace.", "skill", 3, 120, ["crafts"]),
    # challenge
    _task("Plank challenge", "Hold a plank for a full minute without dropping your knees.", "challenge", 4, 90, ["fitness", "endurance"]),
    _task("Cold splash", "Splash cold water on your face for thirty seconds.", "challenge", 3, 45, ["health", "willpower"]),
    _task("Memory sprint", "Memorise a 10-digit number, wait one minute, then recite it.", "challenge", 4, 120, ["memory", "trivia"]),
    _task("One-handed note", "Write a short note using your non-dominant hand.", "challenge", 3, 90, ["creativity"]),
    _task("Burpee burst", "Do as many burpees as you can in sixty seconds.", "challenge", 5, 60, ["fitness", "endurance"]),
]


async def seed_tasks(tasks: list[dict] | None = None) -> int:
    """Insert starter tasks. Returns how many were created."""
    created = 0
    for raw in tasks if tasks is not None else STARTER_TASKS:
        data = sanitize_task_data(raw)
        errors = validate_task_for_creation(data)
        if errors:
            logger.warning(
                f"Skipping invalid task '{raw.get('title')}': "
                f"{format_validation_errors(errors)}"
            )
            continue

        if await task_repo.get_task_by_title(data["title"]):
            continue

        await task_repo.create_task(data)
        created += 1

    logger.info(f"Seeded {created} tasks")
    return created


async def main() -> None:
    await Tortoise.init(config=TORTOISE_ORM)
    try:
        await Tortoise.generate_schemas()
        created = await seed_tasks()
        print(f"✅ Created {created} tasks")
    finally:
        await Tortoise.close_connections()


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(main())
