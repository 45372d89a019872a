"""In-process queue that moves webhook delivery off the request path."""

from __future__ import annotations

import asyncio
import logging

from sjfulfillment.config import Settings
from sjfulfillment.domain.entities import WebhookDeliveryJob

from .dispatcher import WebhookDispatcher
from .recorder import DeliveryRecorder

logger = logging.getLogger(__name__)


class WebhookDeliveryQueue:
    """Hand webhook jobs to a worker task running on the application loop.

    ``enqueue`` is safe to call from the thread pool that runs synchronous
    route handlers and returns immediately. Each job is delivered by its own
    task so one slow merchant endpoint does not hold back other jobs.
    """

    def __init__(self, dispatcher: WebhookDispatcher) -> None:
        self._dispatcher = dispatcher
        self._queue: asyncio.Queue[WebhookDeliveryJob | None] | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._worker: asyncio.Task | None = None
        self._in_flight: set[asyncio.Task] = set()

    @property
    def dispatcher(self) -> WebhookDispatcher:
        return self._dispatcher

    @property
    def is_running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    async def start(self) -> None:
        if self.is_running:
            return
        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()
        self._worker = asyncio.create_task(self._run(), name="webhook-delivery-worker")
        logger.info("Webhook delivery worker started")

    async def stop(self, *, timeout: float | None = None) -> None:
        """Deliver what is already queued, then stop the worker."""

        if not self.is_running or self._queue is None or self._worker is None:
            return
        await self._queue.put(None)
        try:
            await asyncio.wait_for(asyncio.shield(self._worker), timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Webhook delivery worker did not drain in %ss; cancelling %d jobs",
                timeout,
                len(self._in_flight),
            )
            self._worker.cancel()
            for task in list(self._in_flight):
                task.cancel()
        self._worker = None
        self._queue = None
        self._loop = None
        logger.info("Webhook delivery worker stopped")

    async def join(self) -> None:
        """Wait until every job enqueued so far has been delivered."""

        if self._queue is not None:
            await self._queue.join()
        if self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    def enqueue(self, job: WebhookDeliveryJob) -> None:
        if not job.webhooks:
            return

        if self.is_running and self._loop is not None and self._queue is not None:
            if _current_loop() is self._loop:
                self._queue.put_nowait(job)
            else:
                self._loop.call_soon_threadsafe(self._queue.put_nowait, job)
            logger.debug(
                "Queued webhook event %s for %d endpoints", job.event, len(job.webhooks)
            )
            return

        loop = _current_loop()
        if loop is not None:
            self._track(loop.create_task(self._deliver(job)))
            return

        logger.warning(
            "Webhook delivery worker is not running; delivering %s inline", job.event
        )
        asyncio.run(self._deliver(job))

    async def _run(self) -> None:
        assert self._queue is not None
        while True:
            job = await self._queue.get()
            try:
                if job is None:
                    if self._in_flight:
                        await asyncio.gather(*list(self._in_flight), return_exceptions=True)
                    return
                self._track(asyncio.create_task(self._deliver(job)))
            finally:
                self._queue.task_done()

    async def _deliver(self, job: WebhookDeliveryJob) -> None:
        try:
            await self._dispatcher.deliver(job)
        except Exception:
            logger.exception("Webhook delivery job for event %s failed", job.event)

    def _track(self, task: asyncio.Task) -> None:
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)


def _current_loop() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def build_webhook_queue(settings: Settings, session_factory) -> WebhookDeliveryQueue:
    """Create the queue used by the application, recording every delivery."""

    dispatcher = WebhookDispatcher(
        timeout=settings.webhook_timeout_seconds,
        user_agent=settings.webhook_user_agent,
        result_handlers=[DeliveryRecorder(session_factory)],
    )
    return WebhookDeliveryQueue(dispatcher)


__all__ = ["WebhookDeliveryQueue", "build_webhook_queue"]
