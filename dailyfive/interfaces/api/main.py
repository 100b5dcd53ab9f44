"""
FastAPI application for the Daily Five web client.

Provides REST API endpoints for daily tasks, completion, badges and the
leaderboard.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from tortoise import Tortoise

from dailyfive.config import config
from dailyfive.database.config import TORTOISE_ORM
from dailyfive.interfaces.api.routers import (
    badges,
    complete,
    cron,
    history,
    leaderboard,
    tasks,
    user,
)
from dailyfive.services import scheduler

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await Tortoise.init(config=TORTOISE_ORM)
    if not config.is_production:
        # Production schema is managed by aerich migrations
        await Tortoise.generate_schemas()
    logger.info("Database initialized")

    await scheduler.start()
    try:
        yield
    finally:
        await scheduler.stop()
        await Tortoise.close_connections()
        logger.info("Database connections closed")


app = FastAPI(
    title="Daily Five API",
    description="REST API for the Daily Five web client",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# AICODE-NOTE: CORS origins include localhost for dev and FRONTEND_URL for production
cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

if config.FRONTEND_URL:
    frontend_url = config.FRONTEND_URL.rstrip("/")
    cors_origins.append(frontend_url)
    logger.info(f"Added frontend URL to CORS origins: {frontend_url}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_origin_regex=r"^https?://localhost:\d+$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(user.router)
app.include_router(tasks.router)
app.include_router(complete.router)
app.include_router(badges.router)
app.include_router(leaderboard.router)
app.include_router(history.router)
app.include_router(cron.router)


@app.get("/api/health")
async def api_health():
    """API health check endpoint."""
    return {"status": "ok", "service": "dailyfive-api"}
