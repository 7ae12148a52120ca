import asyncio

import pytest
from fastapi.testclient import TestClient

from main import app
from modules.auth.utils import hash_password
from modules.inquiries.store import InquiryStore, get_inquiry_store
from modules.ledger.store import LedgerStore, get_ledger_store
from modules.shared.config import Settings, get_settings
from modules.shared.email_service import EmailService, get_email_service
from modules.tickets.store import RequestStore, get_request_store
from modules.users.models import User
from modules.users.store import UserStore, get_user_store

PASSWORD = "secret123"
PASSWORD_HASH = hash_password(PASSWORD)


class RecordingEmailService(EmailService):
    """Captures outgoing mail instead of talking to SMTP"""

    def __init__(self):
        super().__init__(smtp_host=None)
        self.sent = []
        self.fail = False

    def send_email(self, to_email, subject, html):
        self.sent.append({"to": to_email, "subject": subject, "html": html})
        return not self.fail


def make_settings(tmp_path, **overrides) -> Settings:
    values = dict(
        app_env="test",
        data_dir=str(tmp_path),
        frontend_url="http://portal.test",
        jwt_secret="test-secret",
        log_level="INFO",
        seed_demo_users=False,
        expose_dev_tokens=False,
        smtp_host=None,
        smtp_port=587,
        smtp_user=None,
        smtp_pass=None,
        smtp_from=None,
    )
    values.update(overrides)
    return Settings(**values)


def make_user(**overrides) -> User:
    values = dict(
        id="user-001",
        username="alice",
        email="alice@example.com",
        password_hash=PASSWORD_HASH,
        role="user",
        full_name="Alice Example",
        designation="Employee",
        status="active",
        email_verified=True,
        created_at="2026-01-01T00:00:00.000Z",
    )
    values.update(overrides)
    return User(**values)


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path)


@pytest.fixture
def user_store(tmp_path):
    return UserStore(str(tmp_path / "users.json"))


@pytest.fixture
def request_store(tmp_path):
    return RequestStore(str(tmp_path / "requests.json"))


@pytest.fixture
def inquiry_store(tmp_path):
    return InquiryStore(str(tmp_path / "guest-inquiries.json"))


@pytest.fixture
def ledger_store(tmp_path):
    return LedgerStore(str(tmp_path / "company-ledger.json"))


@pytest.fixture
def email_service():
    return RecordingEmailService()


@pytest.fixture
def alice(user_store):
    return run(user_store.add_user(make_user()))


@pytest.fixture
def client(settings, user_store, request_store, inquiry_store, ledger_store, email_service):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_user_store] = lambda: user_store
    app.dependency_overrides[get_request_store] = lambda: request_store
    app.dependency_overrides[get_inquiry_store] = lambda: inquiry_store
    app.dependency_overrides[get_ledger_store] = lambda: ledger_store
    app.dependency_overrides[get_email_service] = lambda: email_service
    yield TestClient(app)
    app.dependency_overrides.clear()
