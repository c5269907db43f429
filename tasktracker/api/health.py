"""Health check endpoints for liveness and readiness probes."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ..config import Settings, get_settings
from ..database import ping

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(settings: Settings = Depends(get_settings)):
    """
    Liveness probe. Returns 200 OK if the process is serving requests.
    """
    return {
        "status": "OK",
        "environment": settings.env_name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/ready")
def readiness_check():
    """
    Readiness probe. Returns 200 OK once the database answers a trivial query.
    """
    try:
        ping()
    except SQLAlchemyError as e:
        logger.error(f"Readiness check failed: {e}")
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ready"}
