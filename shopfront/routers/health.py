"""
Health check router with database connectivity verification.
"""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopfront.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Basic health check - always returns OK."""
    return {"status": "ok"}


@router.get("/api/health")
def api_health_check(db: Session = Depends(get_db)):
    """
    Health check that also verifies the database answers.

    Returns 200 if the database is reachable, 503 otherwise.
    """
    health_status = {
        "status": "ok",
        "services": {}
    }

    try:
        db.execute(text("SELECT 1"))
        health_status["services"]["database"] = {"status": "ok"}
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        health_status["services"]["database"] = {"status": "error", "message": str(e)}
        health_status["status"] = "unhealthy"
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=health_status
        )

    return health_status
