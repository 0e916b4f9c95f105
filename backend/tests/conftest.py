"""Shared test fixtures for backend tests."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine, select

from app.core.database import get_session
from app.models.user import User
from app.services.llm.base import BaseLLMProvider, LLMResponse

# In-memory SQLite with StaticPool so all connections (including threads) share one DB
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


def get_test_session():
    with Session(test_engine) as session:
        yield session


class FakeProvider(BaseLLMProvider):
    """Completion provider that replays canned raw replies and records every request."""

    def __init__(self):
        self.replies: list[str | Exception] = []
        self.calls: list[dict] = []

    def reply_with(self, *replies: str | Exception) -> None:
        self.replies.extend(replies)

    async def generate_json(self, messages, system_instruction, response_schema):
        self.calls.append({
            "messages": list(messages),
            "system_instruction": system_instruction,
            "response_schema": response_schema,
        })
        reply = self.replies.pop(0) if self.replies else '{"message": "I hear you."}'
        if isinstance(reply, Exception):
            raise reply
        return LLMResponse(content=reply)


@pytest.fixture(autouse=True)
def setup_test_db():
    """Create all tables before each test, drop after."""
    import app.models  # noqa: F401 - register models
    SQLModel.metadata.create_all(test_engine)
    yield
    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture
def fake_llm():
    return FakeProvider()


@pytest.fixture
def client(fake_llm):
    """FastAPI TestClient with all external deps patched."""
    with (
        patch("app.core.database.engine", test_engine),
        patch("app.services.completion.get_llm_provider", return_value=fake_llm),
    ):
        from app.main import app

        # Use FastAPI's dependency override for get_session
        app.dependency_overrides[get_session] = get_test_session

        with TestClient(app) as c:
            yield c

        app.dependency_overrides.clear()


def register(client, email="a@x.com", password="pw123456", name="A") -> dict:
    """Register a user and return the Authorization header for them."""
    response = client.post(
        "/api/auth/register", json={"email": email, "password": password, "name": name}
    )
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


def user_id_for(headers: dict, client) -> int:
    return client.get("/api/auth/me", headers=headers).json()["id"]


def promote_to_admin(email: str) -> None:
    with Session(test_engine) as session:
        user = session.exec(select(User).where(User.email == email)).one()
        user.is_admin = True
        session.add(user)
        session.commit()


@pytest.fixture
def user_headers(client):
    return register(client)


@pytest.fixture
def admin_headers(client):
    headers = register(client, email="admin@x.com", name="Admin")
    promote_to_admin("admin@x.com")
    return headers


def create_category(client, admin_headers, name="General", redirectable=False, **extra) -> dict:
    body = {
        "name": name,
        "description": f"{name} conversations",
        "prompt": f"You are a supportive {name} companion.",
        "redirectableToOtherCategory": redirectable,
        **extra,
    }
    response = client.post("/api/categories/", json=body, headers=admin_headers)
    assert response.status_code == 201, response.text
    return response.json()


def create_session(client, headers, category_id) -> dict:
    response = client.post(
        "/sessions/", json={"conversationCategoryId": category_id}, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()
