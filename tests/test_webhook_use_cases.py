"""Tests for triggering webhooks and recording their delivery."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from sjfulfillment.application.use_cases.webhooks import (
    TEST_MESSAGE,
    send_test_webhook,
    trigger_webhooks,
)
from sjfulfillment.domain.entities import TEST_EVENT, UserRole, WebhookEvents
from sjfulfillment.domain.errors import AuthorizationError, NotFoundError
from sjfulfillment.infrastructure.database import SessionLocal
from sjfulfillment.infrastructure.repositories import WebhookRepository
from sjfulfillment.infrastructure.webhooks import DeliveryRecorder, WebhookDispatcher


def test_trigger_only_targets_active_matching_webhooks(
    db_session, make_merchant, make_webhook, recording_queue
) -> None:
    merchant = make_merchant()
    other = make_merchant("Other")
    active = make_webhook(merchant.id, events=[])
    make_webhook(merchant.id, is_active=False)
    make_webhook(merchant.id, events=[WebhookEvents.ORDER_CREATED])
    make_webhook(other.id)

    job = trigger_webhooks(
        db_session,
        merchant_id=merchant.id,
        event=TEST_EVENT,
        data={"hello": "world"},
        queue=recording_queue,
    )

    assert job is not None
    assert [webhook.id for webhook in job.webhooks] == [active.id]
    assert job.payload["event"] == TEST_EVENT
    assert job.payload["merchantId"] == merchant.id
    assert job.payload["data"] == {"hello": "world"}
    assert recording_queue.jobs == [job]


def test_trigger_without_matching_webhooks_returns_none(
    db_session, make_merchant, make_webhook, recording_queue
) -> None:
    merchant = make_merchant()
    make_webhook(merchant.id, events=[WebhookEvents.PAYMENT_RECEIVED])

    job = trigger_webhooks(
        db_session,
        merchant_id=merchant.id,
        event=WebhookEvents.ORDER_CREATED,
        data={},
        queue=recording_queue,
    )

    assert job is None
    assert recording_queue.jobs == []


class _ClosedLoopQueue:
    def enqueue(self, job) -> None:
        raise RuntimeError("Event loop is closed")


def test_queue_failure_does_not_reach_the_caller(
    db_session, make_merchant, make_webhook
) -> None:
    merchant = make_merchant()
    make_webhook(merchant.id)

    job = trigger_webhooks(
        db_session,
        merchant_id=merchant.id,
        event=WebhookEvents.ORDER_CREATED,
        data={"orderId": "SJF-1"},
        queue=_ClosedLoopQueue(),
    )

    assert job is None


def test_network_failure_does_not_reach_the_caller(
    db_session, make_merchant, make_webhook, recording_queue
) -> None:
    merchant = make_merchant()
    webhook = make_webhook(merchant.id)

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    dispatcher = WebhookDispatcher(
        timeout=5,
        user_agent="test",
        result_handlers=[DeliveryRecorder(SessionLocal)],
        transport=httpx.MockTransport(handler),
    )
    job = trigger_webhooks(
        db_session,
        merchant_id=merchant.id,
        event=TEST_EVENT,
        data={},
        queue=recording_queue,
    )

    results = asyncio.run(dispatcher.deliver(job))

    assert results[0].success is False
    db_session.expire_all()
    repository = WebhookRepository(db_session)
    stored = repository.get_for_merchant(webhook.id, merchant.id)
    assert stored.failure_count == 1
    assert stored.success_count == 0
    assert stored.last_triggered is not None
    (log,) = repository.list_logs(webhook.id)
    assert log.event == TEST_EVENT
    assert "unreachable" in log.error


def _deliver_with(status_code: int, requests: list[httpx.Request]):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code)

    dispatcher = WebhookDispatcher(
        timeout=5, user_agent="test", transport=httpx.MockTransport(handler)
    )
    return lambda job: asyncio.run(dispatcher.deliver(job))


def test_send_test_webhook(db_session, make_merchant, make_user, make_webhook) -> None:
    merchant = make_merchant()
    user = make_user(UserRole.MERCHANT_ADMIN, merchant_id=merchant.id)
    webhook = make_webhook(merchant.id, is_active=False, name="Staging")
    requests: list[httpx.Request] = []

    result = send_test_webhook(
        db_session,
        user=user,
        webhook_id=webhook.id,
        deliver=_deliver_with(200, requests),
    )

    assert result.success is True
    (request,) = requests
    body = json.loads(request.content)
    assert body["event"] == TEST_EVENT
    assert body["data"]["message"] == TEST_MESSAGE
    assert body["data"]["webhookId"] == webhook.id
    assert body["data"]["webhookName"] == "Staging"


def test_send_test_webhook_hides_other_merchants(
    db_session, make_merchant, make_user, make_webhook
) -> None:
    merchant = make_merchant()
    other = make_merchant("Other")
    user = make_user(UserRole.MERCHANT_ADMIN, merchant_id=merchant.id)
    foreign = make_webhook(other.id)

    with pytest.raises(NotFoundError):
        send_test_webhook(
            db_session, user=user, webhook_id=foreign.id, deliver=_deliver_with(200, [])
        )


def test_send_test_webhook_requires_merchant_admin(
    db_session, make_merchant, make_user, make_webhook
) -> None:
    merchant = make_merchant()
    staff = make_user(UserRole.MERCHANT_STAFF, merchant_id=merchant.id)
    webhook = make_webhook(merchant.id)

    with pytest.raises(AuthorizationError):
        send_test_webhook(
            db_session, user=staff, webhook_id=webhook.id, deliver=_deliver_with(200, [])
        )
