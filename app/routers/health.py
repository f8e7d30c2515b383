# app/routers/health.py
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.database import get_session
from app.schemas.health import HealthRead

router = APIRouter(tags=["Health"])

logger = logging.getLogger(__name__)


@router.get("/health", response_model=HealthRead)
def health(session: Session = Depends(get_session)):
    """Liveness plus a database round-trip."""
    try:
        session.connection().execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError:
        logger.warning("Health check: database unreachable")
        database = "disconnected"
    return HealthRead(database=database)
