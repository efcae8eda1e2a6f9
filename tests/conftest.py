import os

# Configure the app for tests before anything imports settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_SECURITY_EVENTS"] = "false"
os.environ["OPENAI_API_KEY"] = ""

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.core.database import Base, SessionLocal, engine
from app.main import app
from app.services.ai_service import AISuggestionService, get_ai_service


class FakeOpenAI:
    """Stands in for openai.OpenAI; only the Responses API is used."""

    def __init__(self, output_text="", error=None):
        self.output_text = output_text
        self.error = error
        self.prompts = []
        self.responses = SimpleNamespace(create=self._create)

    def _create(self, model, input):
        self.prompts.append(input)
        if self.error:
            raise self.error
        return SimpleNamespace(output_text=self.output_text)


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def login_as():
    """Register a user with the given role and return a client holding its session."""

    def _login(role="parent", email=None, password="secret1", name=None):
        session_client = TestClient(app)
        resp = session_client.post(
            "/api/auth/register",
            json={
                "email": email or f"{role}@family.com",
                "password": password,
                "name": name or role.title(),
                "role": role,
            },
        )
        assert resp.status_code == 201, resp.text
        session_client.user = resp.json()
        return session_client

    return _login


@pytest.fixture
def fake_ai():
    """Route AI calls through a FakeOpenAI whose output each test sets."""
    fake = FakeOpenAI()
    app.dependency_overrides[get_ai_service] = lambda: AISuggestionService(client=fake, model="test-model")
    return fake
