"""
MedMall Back Office - Health Check Route
=========================================

What:  Liveness/readiness probe for load balancers and container health checks.
How:   Runs `SELECT 1` on a request-scoped session and reports the result
       with the service version and uptime. No authentication.

Status levels:
    healthy:    database reachable
    unhealthy:  database unreachable; the response is still HTTP 200 so the
                body reaches the monitor, which decides what to do with it
"""

import logging
import time

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from medmall import __version__
from medmall.database import get_db_session
from medmall.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(db: AsyncSession = Depends(get_db_session)) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await db.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))
        await db.rollback()

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
