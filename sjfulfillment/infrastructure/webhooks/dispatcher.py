"""Deliver webhook payloads to merchant endpoints over HTTP."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any

import httpx
from anyio import CapacityLimiter, to_thread

from sjfulfillment.domain.entities import Webhook, WebhookDeliveryJob, WebhookDeliveryResult
from sjfulfillment.infrastructure.security import sign_webhook_payload
from sjfulfillment.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

ResultHandler = Callable[[WebhookDeliveryResult], None]

_LOGGED_RESPONSE_LENGTH = 200

DEFAULT_HANDLER_THREADS = 4


def build_event_payload(
    *,
    event: str,
    data: Any,
    merchant_id: int,
    timestamp: datetime | None = None,
) -> dict[str, Any]:
    """Return the envelope posted to every webhook endpoint."""

    moment = timestamp or now_in_app_timezone()
    return {
        "event": event,
        "data": data,
        "timestamp": moment.isoformat(),
        "merchantId": merchant_id,
    }


def serialize_payload(payload: dict[str, Any]) -> bytes:
    """Encode ``payload`` exactly as it is signed and sent."""

    return json.dumps(payload, separators=(",", ":"), default=str).encode("utf-8")


class WebhookDispatcher:
    """Post a :class:`WebhookDeliveryJob` to each of its registrations.

    Each registration is attempted once, concurrently with the others, and is
    bounded by ``timeout`` seconds. Failures are logged and reported as failed
    :class:`WebhookDeliveryResult` objects; they never propagate to the caller.
    Every result is passed to the registered result handlers, which is where
    persistence of delivery logs (or a retry policy) plugs in.
    """

    def __init__(
        self,
        *,
        timeout: float,
        user_agent: str,
        result_handlers: Iterable[ResultHandler] = (),
        transport: httpx.AsyncBaseTransport | None = None,
        handler_threads: int = DEFAULT_HANDLER_THREADS,
    ) -> None:
        self._timeout = timeout
        self._user_agent = user_agent
        self._result_handlers: list[ResultHandler] = list(result_handlers)
        self._transport = transport
        self._handler_threads = handler_threads
        self._limiter: CapacityLimiter | None = None
        self._limiter_loop: asyncio.AbstractEventLoop | None = None

    async def deliver(self, job: WebhookDeliveryJob) -> list[WebhookDeliveryResult]:
        """Deliver ``job`` to all of its registrations and return the outcomes."""

        if not job.webhooks:
            return []

        body = serialize_payload(job.payload)
        timestamp = str(job.payload.get("timestamp") or now_in_app_timezone().isoformat())

        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout), transport=self._transport
        ) as client:
            outcomes = await asyncio.gather(
                *(
                    self._deliver_one(client, webhook, job.event, body, timestamp)
                    for webhook in job.webhooks
                ),
                return_exceptions=True,
            )

        results: list[WebhookDeliveryResult] = []
        for webhook, outcome in zip(job.webhooks, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(
                    "Unexpected error delivering webhook %s to %s",
                    webhook.id,
                    webhook.url,
                    exc_info=outcome,
                )
                outcome = WebhookDeliveryResult(
                    webhook_id=webhook.id,
                    url=webhook.url,
                    event=job.event,
                    success=False,
                    attempted_at=now_in_app_timezone(),
                    error=str(outcome) or outcome.__class__.__name__,
                )
            results.append(outcome)
            await self._notify(outcome)

        delivered = sum(1 for result in results if result.success)
        logger.info(
            "Webhook event %s delivered to %d of %d endpoints",
            job.event,
            delivered,
            len(results),
        )
        return results

    async def _deliver_one(
        self,
        client: httpx.AsyncClient,
        webhook: Webhook,
        event: str,
        body: bytes,
        timestamp: str,
    ) -> WebhookDeliveryResult:
        headers = {
            "Content-Type": "application/json",
            "X-Webhook-Signature": sign_webhook_payload(body, webhook.secret),
            "X-Webhook-Event": event,
            "X-Webhook-Timestamp": timestamp,
            "User-Agent": self._user_agent,
        }
        attempted_at = now_in_app_timezone()
        started = time.perf_counter()

        def _failure(error: str) -> WebhookDeliveryResult:
            return WebhookDeliveryResult(
                webhook_id=webhook.id,
                url=webhook.url,
                event=event,
                success=False,
                attempted_at=attempted_at,
                error=error,
                duration_ms=(time.perf_counter() - started) * 1000,
            )

        try:
            # httpx timeouts apply per phase; wait_for bounds the whole request.
            response = await asyncio.wait_for(
                client.post(webhook.url, content=body, headers=headers),
                timeout=self._timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning(
                "Webhook %s to %s timed out after %.1fs",
                webhook.id,
                webhook.url,
                self._timeout,
            )
            return _failure(f"Timed out after {self._timeout:g}s")
        except httpx.HTTPError as exc:
            logger.warning(
                "Error sending webhook %s to %s: %s", webhook.id, webhook.url, exc
            )
            return _failure(str(exc) or exc.__class__.__name__)

        text = response.text
        success = response.is_success
        if not success:
            logger.error(
                "Webhook failed for %s: %s %s",
                webhook.url,
                response.status_code,
                text[:_LOGGED_RESPONSE_LENGTH],
            )

        return WebhookDeliveryResult(
            webhook_id=webhook.id,
            url=webhook.url,
            event=event,
            success=success,
            attempted_at=attempted_at,
            status_code=response.status_code,
            response_text=text,
            error=None if success else f"HTTP {response.status_code}: {text}",
            duration_ms=(time.perf_counter() - started) * 1000,
        )

    def _handler_limiter(self) -> CapacityLimiter:
        # Not the default limiter: sync routes that wait on ``deliver`` hold
        # tokens from it, so sharing it can starve the handlers they wait for.
        loop = asyncio.get_running_loop()
        if self._limiter is None or self._limiter_loop is not loop:
            self._limiter = CapacityLimiter(self._handler_threads)
            self._limiter_loop = loop
        return self._limiter

    async def _notify(self, result: WebhookDeliveryResult) -> None:
        # Handlers may block on the database, keep them off the event loop.
        limiter = self._handler_limiter()
        for handler in self._result_handlers:
            try:
                await to_thread.run_sync(handler, result, limiter=limiter)
            except Exception:
                logger.exception(
                    "Webhook result handler %r failed for webhook %s",
                    handler,
                    result.webhook_id,
                )


__all__ = [
    "ResultHandler",
    "WebhookDispatcher",
    "build_event_payload",
    "serialize_payload",
]
