import os

# Settings are read once at import time, so configure them before importing src
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret")
os.environ.setdefault("GNEWS_API_KEY", "test-gnews-key")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "text")

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeProvider:
    """httpx.MockTransport handler that replays queued responses and records requests."""

    def __init__(self):
        self.requests = []
        self.responses = []
        self.default = httpx.Response(200, json={"articles": []})

    def queue(self, *outcomes):
        self.responses.extend(outcomes)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.responses.pop(0) if self.responses else self.default
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def news_client(fake_provider):
    from src.services.news import GNewsClient

    return GNewsClient(
        api_key="test-gnews-key",
        base_url="https://gnews.test",
        transport=httpx.MockTransport(fake_provider),
    )


@pytest.fixture
def news_cache(fake_clock):
    from src.services.news import NewsCache

    return NewsCache(ttl_seconds=300, clock=fake_clock)


@pytest.fixture
def news_service(news_client, news_cache):
    from src.services.news import NewsService

    return NewsService(client=news_client, cache=news_cache)


@pytest.fixture
def sample_articles():
    return [
        {"title": "Markets rally", "url": "https://news.test/markets", "source": {"name": "Test Wire"}},
        {"title": "New comic lineup", "url": "https://news.test/comics", "source": {"name": "Test Wire"}},
    ]


@pytest.fixture
def test_db():
    from src.core.database import Base
    from src.models import user  # noqa: F401

    # Use in-memory SQLite for tests
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def user_repository(test_db):
    from src.repositories.user_repository import UserRepository

    return UserRepository(test_db)


@pytest.fixture
def existing_user(user_repository):
    from src.core.security import hash_password

    return user_repository.create(
        name="Clark Kent",
        email="clark@superman.com",
        password_hash=hash_password("Krypt()n8"),
        preferences=["movies", "comics"],
    )


@pytest.fixture
def auth_headers(existing_user):
    from src.core.security import create_access_token

    return {"Authorization": f"Bearer {create_access_token(existing_user.user_id)}"}


@pytest.fixture
async def async_client(test_db, news_service):
    from httpx import AsyncClient, ASGITransport
    from src.main import app
    from src.core.database import get_db
    from src.api.dependencies import get_news_service

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_news_service] = lambda: news_service

    # Use ASGITransport for direct app interaction
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
