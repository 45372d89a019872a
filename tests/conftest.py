"""Shared fixtures: a throwaway SQLite database, users and a mock webhook server."""

from __future__ import annotations

import os
import sys
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "sjfulfillment_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["APP_TIMEZONE"] = "UTC"

from sjfulfillment.config import get_settings  # noqa: E402

get_settings.cache_clear()

import httpx  # noqa: E402

from sjfulfillment.domain.entities import (  # noqa: E402
    Merchant,
    User,
    UserRole,
    Webhook,
    WebhookDeliveryJob,
)
from sjfulfillment.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from sjfulfillment.infrastructure.repositories import (  # noqa: E402
    MerchantRepository,
    RoleRepository,
    UserRepository,
    WebhookRepository,
)
from sjfulfillment.infrastructure.security import (  # noqa: E402
    create_access_token,
    get_password_hash,
    password_signature,
)

DEFAULT_PASSWORD = "StrongPass123"
_PASSWORD_HASH = get_password_hash(DEFAULT_PASSWORD)


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_merchant(db_session):
    def factory(business_name: str = "Acme Stores", *, is_active: bool = True) -> Merchant:
        return MerchantRepository(db_session).create(
            Merchant(id=None, business_name=business_name, is_active=is_active)
        )

    return factory


@pytest.fixture()
def make_user(db_session):
    counter = {"value": 0}

    def factory(
        role: UserRole = UserRole.MERCHANT_ADMIN,
        *,
        merchant_id: int | None = None,
        email: str | None = None,
        is_active: bool = True,
    ) -> User:
        counter["value"] += 1
        stored_role = RoleRepository(db_session).get_or_create(
            alias=role.value, name=role.value.replace("_", " ").title()
        )
        return UserRepository(db_session).create(
            User(
                id=None,
                role=stored_role,
                merchant_id=merchant_id,
                name=f"User {counter['value']}",
                email=email or f"user{counter['value']}@example.com",
                password=_PASSWORD_HASH,
                is_active=is_active,
            )
        )

    return factory


@pytest.fixture()
def make_webhook(db_session):
    def factory(
        merchant_id: int,
        *,
        url: str = "https://merchant.example.com/hooks",
        events: list[str] | None = None,
        is_active: bool = True,
        name: str = "Orders hook",
        secret: str = "whsec-test",
    ) -> Webhook:
        return WebhookRepository(db_session).create(
            Webhook(
                id=None,
                merchant_id=merchant_id,
                name=name,
                url=url,
                secret=secret,
                events=list(events or []),
                is_active=is_active,
            )
        )

    return factory


def _auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(
        {
            "sub": user.email,
            "role": user.role.alias,
            "pwd_sig": password_signature(user.password, user.is_active),
        }
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def auth_headers():
    """Return a helper that builds bearer headers for a user."""

    return _auth_headers


@dataclass
class RecordingQueue:
    """Stand-in delivery queue that keeps the jobs handed to it."""

    jobs: list[WebhookDeliveryJob] = field(default_factory=list)

    def enqueue(self, job: WebhookDeliveryJob) -> None:
        self.jobs.append(job)


@pytest.fixture()
def recording_queue() -> RecordingQueue:
    return RecordingQueue()


@dataclass
class MockWebhookServer:
    """Collect outbound webhook requests and answer with ``status_code``."""

    status_code: int = 200
    body: str = "ok"
    fail_with: Exception | None = None
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with
        return httpx.Response(self.status_code, text=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture()
def webhook_server() -> MockWebhookServer:
    return MockWebhookServer()


@pytest.fixture()
def app(webhook_server):
    """Application whose webhook deliveries go to ``webhook_server``."""

    from main import create_app
    from sjfulfillment.infrastructure.webhooks import (
        DeliveryRecorder,
        WebhookDeliveryQueue,
        WebhookDispatcher,
    )

    application = create_app()
    settings = get_settings()
    application.state.webhook_queue = WebhookDeliveryQueue(
        WebhookDispatcher(
            timeout=settings.webhook_timeout_seconds,
            user_agent=settings.webhook_user_agent,
            result_handlers=[DeliveryRecorder(SessionLocal)],
            transport=webhook_server.transport,
        )
    )
    return application


@pytest.fixture()
def client(app):
    from fastapi.testclient import TestClient

    with TestClient(app) as test_client:
        yield test_client
