"""Health check: service status and database connectivity."""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(response: Response, db: Session = Depends(get_db)) -> HealthResponse:
    """
    Return service status and whether the database answers SELECT 1.
    Responds 503 when the database is unreachable so load balancers can react.
    """
    if check_db_connected(db):
        return HealthResponse(status="ok", environment=settings.APP_ENV, database="connected")

    logger.warning("Health check: database unreachable")
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(status="degraded", environment=settings.APP_ENV, database="disconnected")
