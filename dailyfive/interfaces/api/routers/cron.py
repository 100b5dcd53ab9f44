"""
Cron API router (called by an external cron service in production).

Endpoints:
- POST /api/cron/reset-streaks?token=... - Reset streaks older than 24h
"""

import hmac
import logging

from fastapi import APIRouter, HTTPException, Query, status

from dailyfive.config import config
from dailyfive.core.use_cases.reset_streaks import reset_stale_streaks

router = APIRouter(prefix="/api/cron", tags=["cron"])
logger = logging.getLogger(__name__)


@router.post("/reset-streaks")
async def reset_streaks(token: str = Query(default="")) -> dict:
    if not config.CRON_TOKEN or not hmac.compare_digest(
        token, config.CRON_TOKEN.get_secret_value()
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized"
        )

    reset = await reset_stale_streaks()
    return {"status": "ok", "reset": reset}
