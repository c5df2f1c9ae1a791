import os
import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

# Settings are read once at import time; give them test values first.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SUPABASE_URL", "https://example.supabase.co")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from app.core.ai_client import ChatCompletionClient  # noqa: E402
from app.core.auth import get_current_user  # noqa: E402
from app.core.payments_client import StripePaymentsProvider  # noqa: E402
from app.core.storage_client import StorageProvider  # noqa: E402
from app.database import get_session  # noqa: E402
from app.main import app  # noqa: E402
from app.models.user import User  # noqa: E402

WEBHOOK_SECRET = "whsec_test_secret"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def payments():
    return StripePaymentsProvider("sk_test_dummy", WEBHOOK_SECRET)


@pytest.fixture
def chat_client():
    client = MagicMock(spec=ChatCompletionClient)
    client.generate_chat_response.return_value = "Hi! How can I help?"
    return client


@pytest.fixture
def storage():
    return MagicMock(spec=StorageProvider)


@pytest.fixture
def client(engine, session, payments, chat_client, storage):
    """
    TestClient wired to the in-memory database and fake providers.

    The lifespan is not run; app.state is filled in directly.
    """

    def override_session():
        yield session

    app.dependency_overrides[get_session] = override_session
    app.state.engine = engine
    app.state.payments = payments
    app.state.chat_client = chat_client
    app.state.storage = storage

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session):
    """Factory persisting users; created_at can be pinned for ordering."""

    def _make_user(
        email: str = "alice@example.com",
        name: str = "Alice",
        role: str = "user",
        created_at: datetime | None = None,
        **extra,
    ) -> User:
        user = User(
            id=uuid.uuid4(),
            email=email,
            name=name,
            role=role,
            created_at=created_at or datetime.now(timezone.utc),
            **extra,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def login():
    """Make every request act as the given user (None = guest)."""

    def _login(user: User | None) -> None:
        app.dependency_overrides[get_current_user] = lambda: user

    return _login


@pytest.fixture
def user(make_user, login):
    user = make_user()
    login(user)
    return user


@pytest.fixture
def admin(make_user, login):
    admin = make_user(
        email="admin@example.com",
        name="Admin",
        role="admin",
        created_at=datetime.now(timezone.utc) - timedelta(days=30),
    )
    login(admin)
    return admin
