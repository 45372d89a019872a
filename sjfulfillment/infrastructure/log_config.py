"""Process-wide logging configuration."""

from __future__ import annotations

import logging

from sjfulfillment.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configure the root logger once at application start."""

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    logging.getLogger("sjfulfillment").setLevel(settings.log_level)
    # Access logging is done by RequestLoggingMiddleware with its own rules.
    logging.getLogger("uvicorn.access").disabled = True


__all__ = ["LOG_FORMAT", "configure_logging"]
