from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sjfulfillment.config import Settings, get_settings
from sjfulfillment.infrastructure.database import SessionLocal, engine, initialize_database
from sjfulfillment.infrastructure.log_config import configure_logging
from sjfulfillment.infrastructure.webhooks import build_webhook_queue
from sjfulfillment.interfaces.api.errors import register_exception_handlers
from sjfulfillment.interfaces.api.middleware import (
    RequestLoggingMiddleware,
    parse_suppression_rules,
)
from sjfulfillment.interfaces.api.routes import register_routes

WEBHOOK_DRAIN_TIMEOUT_SECONDS = 10.0


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and run the webhook worker for the life of the process."""

    initialize_database()
    queue = app.state.webhook_queue
    await queue.start()
    try:
        yield
    finally:
        await queue.stop(timeout=WEBHOOK_DRAIN_TIMEOUT_SECONDS)
        engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title="SJFulfillment Notifications", lifespan=lifespan)
    app.state.webhook_queue = build_webhook_queue(settings, SessionLocal)

    app.add_middleware(
        RequestLoggingMiddleware,
        rules=parse_suppression_rules(settings.log_suppressed_requests),
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    register_routes(app)
    return app


app = create_app()
