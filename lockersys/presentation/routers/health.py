from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request, Response
from sqlalchemy.exc import SQLAlchemyError

from lockersys.schemas.models import HealthStatus

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthStatus)
def get_health(request: Request, response: Response) -> HealthStatus:
    """
    Liveness probe. Also pings the database; an unreachable store is
    reported as 503 so orchestrators can tell the two apart.
    """
    try:
        request.app.state.database.ping()
    except SQLAlchemyError as e:
        logger.error("Health check database ping failed: %s", e)
        response.status_code = 503
        return HealthStatus(
            success=False,
            message="Locker System API is running, database unavailable",
            timestamp=datetime.now(timezone.utc),
            database="unavailable",
        )

    return HealthStatus(
        message="Locker System API is running",
        timestamp=datetime.now(timezone.utc),
        database="ok",
    )
