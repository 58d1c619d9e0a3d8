"""
Blog API: Liveness and Health Routes
=======================================

What:  `GET /` welcome message and `GET /health` dependency check.
Why:   `/` is the cheap liveness probe clients and uptime checkers hit;
       `/health` tells load balancers whether the database is reachable.
How:   `/health` runs `SELECT 1` on the engine and reports the result.
"""

import logging
import time

from fastapi import APIRouter
from sqlalchemy import text

from blog_api import __version__
from blog_api.schemas.post import HealthResponse, WelcomeResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get("/", response_model=WelcomeResponse, summary="Liveness check")
async def welcome() -> WelcomeResponse:
    return WelcomeResponse(message="Welcome to the Blog API")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Reports service status and database connectivity.",
)
async def health_check() -> HealthResponse:
    """
    Probe the database with a lightweight query.

    Returns:
        HealthResponse with status `healthy` when the database answers,
        `unhealthy` otherwise. The endpoint itself always answers 200.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        from blog_api.database import engine
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
