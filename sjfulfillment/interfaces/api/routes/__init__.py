from fastapi import FastAPI

from .admin import router as admin_router
from .auth import router as auth_router
from .debug import router as debug_router
from .notifications import router as notifications_router
from .webhooks import router as webhooks_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(auth_router)
    app.include_router(notifications_router)
    app.include_router(webhooks_router)
    app.include_router(debug_router)
    app.include_router(admin_router)
