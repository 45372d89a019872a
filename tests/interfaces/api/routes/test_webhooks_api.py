"""Tests for the webhook test endpoint."""

from __future__ import annotations

import json

import httpx

from sjfulfillment.domain.entities import TEST_EVENT, UserRole
from sjfulfillment.infrastructure.database import SessionLocal
from sjfulfillment.infrastructure.repositories import WebhookRepository
from sjfulfillment.infrastructure.security import verify_webhook_signature


def test_send_test_webhook(
    client, auth_headers, make_merchant, make_user, make_webhook, webhook_server
) -> None:
    merchant = make_merchant()
    user = make_user(UserRole.MERCHANT_ADMIN, merchant_id=merchant.id)
    webhook = make_webhook(merchant.id, secret="s3cret")

    response = client.post(f"/webhooks/{webhook.id}/test", headers=auth_headers(user))

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Test webhook sent successfully"
    assert body["data"]["webhookId"] == webhook.id
    assert body["data"]["event"] == TEST_EVENT
    assert body["data"]["success"] is True
    assert body["data"]["statusCode"] == 200

    (request,) = webhook_server.requests
    assert request.headers["X-Webhook-Event"] == TEST_EVENT
    assert verify_webhook_signature(
        request.content, request.headers["X-Webhook-Signature"], "s3cret"
    )
    assert json.loads(request.content)["merchantId"] == merchant.id

    with SessionLocal() as session:
        stored = WebhookRepository(session).get_for_merchant(webhook.id, merchant.id)
        assert stored.success_count == 1
        assert len(WebhookRepository(session).list_logs(webhook.id)) == 1


def test_failed_delivery_is_reported_not_raised(
    client, auth_headers, make_merchant, make_user, make_webhook, webhook_server
) -> None:
    merchant = make_merchant()
    user = make_user(UserRole.MERCHANT_ADMIN, merchant_id=merchant.id)
    webhook = make_webhook(merchant.id)
    webhook_server.fail_with = httpx.ConnectError("connection refused")

    response = client.post(f"/webhooks/{webhook.id}/test", headers=auth_headers(user))

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Test webhook delivery failed"
    assert body["data"]["success"] is False
    assert body["data"]["statusCode"] is None


def test_other_merchants_webhook_is_not_found(
    client, auth_headers, make_merchant, make_user, make_webhook, webhook_server
) -> None:
    merchant = make_merchant()
    other = make_merchant("Other")
    user = make_user(UserRole.MERCHANT_ADMIN, merchant_id=merchant.id)
    foreign = make_webhook(other.id)

    response = client.post(f"/webhooks/{foreign.id}/test", headers=auth_headers(user))
    missing = client.post("/webhooks/9999/test", headers=auth_headers(user))

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Webhook not found"}
    assert missing.status_code == 404
    assert webhook_server.requests == []


def test_requires_merchant_admin(
    client, auth_headers, make_merchant, make_user, make_webhook
) -> None:
    merchant = make_merchant()
    staff = make_user(UserRole.MERCHANT_STAFF, merchant_id=merchant.id)
    webhook = make_webhook(merchant.id)

    response = client.post(f"/webhooks/{webhook.id}/test", headers=auth_headers(staff))

    assert response.status_code == 403
