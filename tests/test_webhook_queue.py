"""Tests for handing webhook jobs to the background worker."""

from __future__ import annotations

import asyncio
import threading

import httpx
from anyio import to_thread

from sjfulfillment.domain.entities import Webhook, WebhookDeliveryJob
from sjfulfillment.infrastructure.webhooks import (
    WebhookDeliveryQueue,
    WebhookDispatcher,
    build_event_payload,
)


def _job(event: str = "order.updated") -> WebhookDeliveryJob:
    return WebhookDeliveryJob(
        event=event,
        payload=build_event_payload(event=event, data={}, merchant_id=1),
        webhooks=[
            Webhook(
                id=1,
                merchant_id=1,
                name="hook",
                url="https://merchant.example.com/hook",
                secret="secret",
            )
        ],
    )


def _queue(requests: list[httpx.Request]) -> WebhookDeliveryQueue:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200)

    return WebhookDeliveryQueue(
        WebhookDispatcher(
            timeout=5,
            user_agent="test",
            transport=httpx.MockTransport(handler),
        )
    )


def test_worker_delivers_jobs_enqueued_on_the_loop() -> None:
    requests: list[httpx.Request] = []
    queue = _queue(requests)

    async def scenario() -> None:
        await queue.start()
        assert queue.is_running
        queue.enqueue(_job("order.created"))
        queue.enqueue(_job("order.delivered"))
        await queue.join()
        await queue.stop()

    asyncio.run(scenario())

    assert sorted(r.headers["X-Webhook-Event"] for r in requests) == [
        "order.created",
        "order.delivered",
    ]
    assert not queue.is_running


def test_enqueue_from_worker_thread() -> None:
    requests: list[httpx.Request] = []
    queue = _queue(requests)
    threads: list[str] = []

    def enqueue_from_thread() -> None:
        threads.append(threading.current_thread().name)
        queue.enqueue(_job())

    async def scenario() -> None:
        await queue.start()
        await to_thread.run_sync(enqueue_from_thread)
        await queue.stop(timeout=5)

    asyncio.run(scenario())

    assert threads and threads[0] != threading.main_thread().name
    assert len(requests) == 1


def test_stop_drains_pending_jobs() -> None:
    requests: list[httpx.Request] = []
    queue = _queue(requests)

    async def scenario() -> None:
        await queue.start()
        for _ in range(3):
            queue.enqueue(_job())
        await queue.stop(timeout=5)

    asyncio.run(scenario())

    assert len(requests) == 3


def test_enqueue_without_worker_delivers_inline() -> None:
    requests: list[httpx.Request] = []
    queue = _queue(requests)

    queue.enqueue(_job())

    assert len(requests) == 1


def test_job_without_webhooks_is_ignored() -> None:
    requests: list[httpx.Request] = []
    queue = _queue(requests)

    queue.enqueue(WebhookDeliveryJob(event="order.created", payload={}, webhooks=[]))

    assert requests == []
