"""API endpoint tests."""

from datetime import UTC, datetime, timedelta

from fastapi.testclient import TestClient
from sqlalchemy import text

from src.main import create_app
from src.services.tokens import TokenService


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_api_index(client):
    response = client.get("/api")
    assert response.status_code == 200
    assert response.json()["endpoints"]["profile"] == "/api/profile"


def test_unknown_route_uses_error_shape(client):
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert response.json()["error"] == "Not found"


def test_register_user(client):
    """Test user registration."""
    response = client.post(
        "/api/auth/register",
        json={"username": "newuser", "email": "newuser@example.com", "password": "Password1!"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["token"]
    assert data["tokenType"] == "bearer"
    assert data["user"]["username"] == "newuser"
    assert data["user"]["email"] == "newuser@example.com"
    assert "password" not in data["user"]
    assert "passwordHash" not in data["user"]


def test_register_duplicate_username(client, auth_headers):
    """Same username with a different email is a conflict."""
    response = client.post(
        "/api/auth/register",
        json={
            "username": auth_headers.username,
            "email": "fresh@example.com",
            "password": "Password1!",
        },
    )
    assert response.status_code == 409
    assert response.json()["error"] == "User already exists"


def test_register_duplicate_email(client, auth_headers):
    """Same email with a different username is a conflict."""
    response = client.post(
        "/api/auth/register",
        json={"username": "freshname", "email": auth_headers.email, "password": "Password1!"},
    )
    assert response.status_code == 409


def test_register_weak_password_reports_field(client):
    response = client.post(
        "/api/auth/register",
        json={"username": "weakling", "email": "weak@example.com", "password": "password"},
    )
    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Validation failed"
    fields = {detail["field"] for detail in data["details"]}
    assert fields == {"password"}
    message = data["details"][0]["message"]
    assert "uppercase" in message
    assert "number" in message
    assert "special character" in message


def test_register_invalid_username_and_email(client):
    response = client.post(
        "/api/auth/register",
        json={"username": "no spaces!", "email": "not-an-email", "password": "Password1!"},
    )
    assert response.status_code == 400
    fields = {detail["field"] for detail in response.json()["details"]}
    assert fields == {"username", "email"}


def test_register_username_too_short(client):
    response = client.post(
        "/api/auth/register",
        json={"username": "ab", "email": "ab@example.com", "password": "Password1!"},
    )
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "username"


def test_login(client, auth_headers):
    """Test user login."""
    response = client.post(
        "/api/auth/login", json={"username": auth_headers.username, "password": "Testpass123!"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["user"]["id"] == auth_headers.user_id
    assert data["token"]


def test_login_with_email(client, auth_headers):
    response = client.post(
        "/api/auth/login", json={"username": auth_headers.email, "password": "Testpass123!"}
    )
    assert response.status_code == 200
    assert response.json()["user"]["username"] == auth_headers.username


def test_login_token_resolves_to_same_user(client, auth_headers):
    response = client.post(
        "/api/auth/login", json={"username": auth_headers.username, "password": "Testpass123!"}
    )
    token = response.json()["token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["user"]["id"] == auth_headers.user_id


def test_login_wrong_password(client, auth_headers):
    """Test login with wrong password."""
    response = client.post(
        "/api/auth/login", json={"username": auth_headers.username, "password": "Wrongpass1!"}
    )
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid credentials"


def test_login_unknown_user(client):
    response = client.post("/api/auth/login", json={"username": "ghost", "password": "Whatever1!"})
    assert response.status_code == 401


def test_get_current_user(client, auth_headers):
    """Test getting current user info."""
    response = client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["email"] == auth_headers.email
    assert user["createdAt"] is not None


def test_me_without_token(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json()["error"] == "No token provided"
    assert response.headers["www-authenticate"] == "Bearer"


def test_me_with_garbage_token(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.token"})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token"


def test_me_with_expired_token(client, auth_headers):
    tokens = TokenService("test-secret")
    expired = tokens.issue(
        auth_headers.user_id, auth_headers.username, now=datetime.now(UTC) - timedelta(days=8)
    )
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {expired}"})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token"
    assert "expired" in response.json()["message"]


def test_me_with_token_signed_by_other_secret(client, auth_headers):
    forged = TokenService("another-secret").issue(auth_headers.user_id, auth_headers.username)
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {forged}"})
    assert response.status_code == 401


def test_me_for_user_that_no_longer_exists(client):
    token = TokenService("test-secret").issue("00000000-0000-0000-0000-000000000000", "ghost")
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["message"] == "User not found"


def test_logout(client, auth_headers):
    response = client.post("/api/auth/logout", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Logged out successfully"


def test_unauthorized_access(client):
    """Test that profile mutations require authentication."""
    assert client.post("/api/profile", json={"firstName": "X"}).status_code == 401
    assert client.get("/api/profile/me").status_code == 401
    assert client.put("/api/profile/me", json={"bio": "x"}).status_code == 401
    assert client.delete("/api/profile/me").status_code == 401
    assert client.delete("/api/upload/profile-picture/anything.jpg").status_code == 401


def test_complete_flow(client):
    """Register, create a profile, read it back, then merge an update."""
    response = client.post(
        "/api/auth/register",
        json={"username": "alice", "email": "a@x.com", "password": "Abc12345!"},
    )
    assert response.status_code == 201
    headers = {"Authorization": f"Bearer {response.json()['token']}"}

    response = client.post("/api/profile", headers=headers, json={"firstName": "Alice"})
    assert response.status_code == 201
    assert response.json()["profile"]["firstName"] == "Alice"

    response = client.get("/api/profile/me", headers=headers)
    assert response.status_code == 200
    assert response.json()["profile"]["firstName"] == "Alice"

    response = client.put("/api/profile/me", headers=headers, json={"bio": "hi"})
    assert response.status_code == 200

    profile = client.get("/api/profile/me", headers=headers).json()["profile"]
    assert profile["firstName"] == "Alice"
    assert profile["bio"] == "hi"
    assert profile["username"] == "alice"


def test_storage_failure_returns_service_unavailable(client, auth_headers):
    """A broken store answers 503 instead of leaking the database error."""
    with client.app.state.context.engine.begin() as conn:
        conn.execute(text("DROP TABLE profiles"))

    response = client.get("/api/profile/me", headers=auth_headers)
    assert response.status_code == 503
    assert response.json() == {
        "error": "Service unavailable",
        "message": "The service is temporarily unavailable",
    }


def test_database_directory_is_created_at_startup(settings, tmp_path):
    database_dir = tmp_path / "nested" / "database"
    settings = settings.model_copy(
        update={"database_url": f"sqlite:///{database_dir / 'profiles.db'}"}
    )

    app = create_app(settings)
    assert not database_dir.exists()

    with TestClient(app) as client:
        assert database_dir.is_dir()
        assert client.get("/health").status_code == 200
