"""Liveness endpoint used by load balancers and deploy checks."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from alnet.infrastructure.database import get_db
from alnet.infrastructure.realtime import message_connections
from alnet.interfaces.api.schemas import HealthRead

router = APIRouter(tags=["health"])
logger = logging.getLogger(__name__)


@router.get("/health", response_model=HealthRead)
def health(db: Session = Depends(get_db)) -> HealthRead:
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        database = "unavailable"
    return HealthRead(
        status="ok" if database == "ok" else "degraded",
        database=database,
        online_users=len(message_connections.presence.online_users()),
    )
