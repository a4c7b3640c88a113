"""Pytest configuration and fixtures."""

import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from src.config import Settings
from src.context import ServiceContext
from src.main import create_app

STRONG_PASSWORD = "Testpass123!"  # noqa: S105


class AuthHeaders(dict):
    """Dict subclass that also stores the registered user's details."""

    def __init__(
        self,
        *args,
        user_id: str | None = None,
        username: str = "",
        email: str = "",
        token: str = "",
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.username = username
        self.email = email
        self.token = token


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite file and upload directory."""
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        upload_dir=str(tmp_path / "uploads"),
        jwt_secret="test-secret",  # noqa: S106
        environment="test",
        max_upload_bytes=1024 * 1024,
    )


@pytest.fixture
def context(settings):
    """Service context with the schema created."""
    ctx = ServiceContext.from_settings(settings)
    ctx.init_db()
    yield ctx
    ctx.dispose()


@pytest.fixture
def db(context):
    """Database session for direct service-level tests."""
    with context.session() as session:
        yield session


@pytest.fixture
def client(settings):
    """Create a test client for an app built from the test settings."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


def _register(client, username: str, email: str, password: str = STRONG_PASSWORD) -> AuthHeaders:
    response = client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["user"]["id"],
        username=username,
        email=email,
        token=data["token"],
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return _register(client, "testuser", "test@example.com")


@pytest.fixture
def other_auth_headers(client):
    """A second, unrelated user."""
    return _register(client, "otheruser", "other@example.com")


def _make_image(size=(800, 600), color="red", fmt="PNG") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def register_user(client):
    """Return a helper that registers a user and returns their auth headers."""

    def register(username: str, email: str, password: str = STRONG_PASSWORD) -> AuthHeaders:
        return _register(client, username, email, password)

    return register


@pytest.fixture
def make_image():
    return _make_image


@pytest.fixture
def png_bytes():
    return _make_image()
