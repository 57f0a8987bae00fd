"""
Shared fixtures: in-memory database, fake exchange-rate provider, test client.
"""
import httpx
import pytest
from fastapi.testclient import TestClient

from splitrip.core.config import Settings
from splitrip.db.session import build_engine, build_session_factory, init_db
from splitrip.main import create_app
from splitrip.models.user import User
from splitrip.services.fx_service import ExchangeRateClient


class FakeRateProvider:
    """Serves ExchangeRate-API v4 style responses from a dict."""

    def __init__(self):
        self.rates = {"USD": {"BRL": 5.0, "EUR": 0.9}, "EUR": {"BRL": 5.5}}
        self.down = False
        self.calls = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        currency = request.url.path.rstrip("/").split("/")[-1]
        self.calls.append(currency)
        if self.down:
            return httpx.Response(503, json={"error": "unavailable"})
        if currency not in self.rates:
            return httpx.Response(404, json={"result": "error", "error-type": "unsupported-code"})
        return httpx.Response(200, json={"base": currency, "rates": self.rates[currency]})


@pytest.fixture
def settings():
    return Settings(
        DATABASE_URL="sqlite://",
        SECRET_KEY="test-secret",
        BCRYPT_ROUNDS=4,
        SETTLEMENT_CURRENCY="BRL",
        FX_API_URL="https://fx.test/v4/latest",
        FX_TIMEOUT_SECONDS=1.0,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def rate_provider():
    return FakeRateProvider()


@pytest.fixture
def rate_client(settings, rate_provider):
    http_client = httpx.Client(transport=httpx.MockTransport(rate_provider.handler))
    yield ExchangeRateClient(settings, http_client=http_client)
    http_client.close()


@pytest.fixture
def db(settings):
    engine = build_engine(settings)
    init_db(engine)
    session = build_session_factory(engine)()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def make_user(db):
    def _make_user(email: str, **kwargs) -> User:
        user = User(email=email, hashed_password="not-a-real-hash", **kwargs)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def client(settings, rate_client):
    app = create_app(settings, rate_client=rate_client)
    with TestClient(app) as test_client:
        yield test_client
    app.state.engine.dispose()


@pytest.fixture
def register(client):
    """Register a user and return auth headers for them."""
    def _register(email: str, password: str = "secret123") -> dict:
        response = client.post("/api/auth/register", json={"email": email, "password": password})
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}
    return _register
