import pytest
from fastapi.testclient import TestClient

from diary.api.http.export import get_renderer
from diary.core.config import Settings
from diary.main import create_app

PASSWORD = "secret123"


class FakeRenderer:
    """Stands in for the Chromium pipeline and keeps every composed document"""

    def __init__(self):
        self.documents = []
        self.error = None

    async def render(self, html: str) -> bytes:
        self.documents.append(html)
        if self.error is not None:
            raise self.error
        return b"%PDF-1.4\n" + b"0" * 2048 + b"\n%%EOF\n"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'diary-test.db'}",
        jwt_secret="test-secret",
        auto_create_schema=True,
        log_level="WARNING",
    )


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def app(settings, renderer):
    app = create_app(settings)
    app.dependency_overrides[get_renderer] = lambda: renderer
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def register_and_login(client, email, name=None):
    response = client.post("/auth/register", json={"email": email, "password": PASSWORD, "name": name})
    assert response.status_code == 201, response.text
    response = client.post("/auth/login", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}


@pytest.fixture
def alice(client):
    return register_and_login(client, "alice@example.com", "Alice")


@pytest.fixture
def bob(client):
    return register_and_login(client, "bob@example.com", "Bob")


@pytest.fixture
def create_entry(client):
    def _create(headers, **fields):
        payload = {"title": "Entry", "content": "<p>Body</p>"}
        payload.update(fields)
        response = client.post("/entries", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["entry"]

    return _create
