"""Request logging middleware with configurable suppression rules."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

access_logger = logging.getLogger("sjfulfillment.access")


@dataclass(frozen=True)
class SuppressionRule:
    """Request pattern that must not be written to the access log.

    ``status_code`` of ``None`` matches any status.
    """

    method: str
    path: str
    status_code: int | None = None

    @classmethod
    def parse(cls, raw: str) -> "SuppressionRule":
        """Build a rule from ``"METHOD /path [STATUS]"``."""

        parts = raw.split()
        if len(parts) not in (2, 3):
            raise ValueError(f"Invalid log suppression rule: {raw!r}")
        status_code = int(parts[2]) if len(parts) == 3 else None
        return cls(method=parts[0].upper(), path=parts[1], status_code=status_code)

    def matches(self, method: str, path: str, status_code: int) -> bool:
        if self.method != method.upper() or self.path != path:
            return False
        return self.status_code is None or self.status_code == status_code


def parse_suppression_rules(raw_rules: Iterable[str]) -> tuple[SuppressionRule, ...]:
    return tuple(SuppressionRule.parse(raw) for raw in raw_rules if raw.strip())


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Write one access log line per request unless a rule suppresses it."""

    def __init__(
        self,
        app,
        *,
        rules: Iterable[SuppressionRule] = (),
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(app)
        self._rules = tuple(rules)
        self._logger = logger or access_logger

    def is_suppressed(self, method: str, path: str, status_code: int) -> bool:
        return any(rule.matches(method, path, status_code) for rule in self._rules)

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        method = request.method
        path = request.url.path.rstrip("/") or "/"
        if not self.is_suppressed(method, path, response.status_code):
            self._logger.info(
                "%s %s %s %.1fms",
                method,
                path,
                response.status_code,
                (time.perf_counter() - started) * 1000,
            )
        return response


__all__ = [
    "RequestLoggingMiddleware",
    "SuppressionRule",
    "parse_suppression_rules",
]
