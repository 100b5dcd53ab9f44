"""
Tortoise ORM config shared by the API, scripts and aerich.
SQLite in development, PostgreSQL in production.
"""

import logging

from dailyfive.config import config

logger = logging.getLogger(__name__)


def get_tortoise_db_url() -> str:
    """config.database_url with the postgres:// scheme Tortoise expects."""
    url = config.database_url
    if url.startswith("postgresql://"):
        url = "postgres://" + url.removeprefix("postgresql://")
    logger.info(f"Database backend: {url.split('://', 1)[0]}")
    return url


TORTOISE_ORM = {
    "connections": {"default": get_tortoise_db_url()},
    "apps": {
        "models": {
            "models": ["dailyfive.database.models", "aerich.models"],
            "default_connection": "default",
        },
    },
}
