"""Shared pytest fixtures."""

import pytest
import requests
from fastapi.testclient import TestClient

from main import create_app
from models.database import Database
from services.external_data import ExternalDataGateway
from utils.config import Settings


class StubResponse:
    def __init__(self, payload=None, status_code=200):
        self.payload = payload if payload is not None else {}
        self.status_code = status_code

    def json(self):
        return self.payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class StubHttp:
    """Stands in for requests.Session; replies are keyed by URL."""

    def __init__(self):
        self.calls = []
        self.replies = {}

    def reply(self, url, payload=None, status_code=200):
        self.replies[url] = StubResponse(payload, status_code)

    def fail(self, url, exc):
        self.replies[url] = exc

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        reply = self.replies.get(url)
        if isinstance(reply, Exception):
            raise reply
        if reply is None:
            return StubResponse({}, 404)
        return reply

    def close(self):
        pass


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite://",
        secret_key="test-secret",
        access_token_expire_minutes=5,
        mapbox_access_token="mapbox-test-token",
        openweather_api_key="openweather-test-key",
        upstream_timeout_seconds=3,
        cors_origins=["*"],
        log_level="WARNING",
    )


@pytest.fixture
def database(settings: Settings):
    db = Database(settings.database_url)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def db_session(database: Database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def stub_http() -> StubHttp:
    return StubHttp()


@pytest.fixture
def app(settings: Settings, database: Database, stub_http: StubHttp):
    gateway = ExternalDataGateway(settings, http=stub_http)
    return create_app(settings, database=database, external_data=gateway)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


def register_and_login(client: TestClient, name: str, email: str, password: str = "correct-horse") -> dict:
    response = client.post("/auth/register", json={"name": name, "email": email, "password": password})
    assert response.status_code == 201, response.text
    response = client.post("/auth/login", data={"username": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def alice(client: TestClient) -> dict:
    return register_and_login(client, "Alice", "alice@example.com")


@pytest.fixture
def bob(client: TestClient) -> dict:
    return register_and_login(client, "Bob", "bob@example.com")
