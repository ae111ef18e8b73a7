from fastapi import FastAPI

from .connections import router as connections_router
from .health import router as health_router
from .messages import router as messages_router
from .notifications import router as notifications_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(health_router)
    app.include_router(connections_router)
    app.include_router(messages_router)
    app.include_router(notifications_router)
