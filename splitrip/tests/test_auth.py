"""
Tests for authentication endpoints.
"""


def test_register(client):
    """Test user registration."""
    response = client.post(
        "/api/auth/register",
        json={"email": "test@example.com", "password": "testpassword123", "name": "Test"}
    )
    assert response.status_code == 201
    body = response.json()
    assert body["access_token"]
    assert body["user"]["email"] == "test@example.com"
    assert body["user"]["is_provisional"] is False


def test_register_duplicate_email(client, register):
    register("dup@example.com")
    response = client.post("/api/auth/register", json={"email": "dup@example.com", "password": "another1"})
    assert response.status_code == 409
    assert response.json()["error"] == "duplicate"


def test_register_short_password(client):
    response = client.post("/api/auth/register", json={"email": "short@example.com", "password": "123"})
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_register_invalid_email(client):
    response = client.post("/api/auth/register", json={"email": "not-an-email", "password": "secret123"})
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_login(client, register):
    """Test user login."""
    register("test2@example.com", "testpassword123")
    response = client.post(
        "/api/auth/login",
        json={"email": "test2@example.com", "password": "testpassword123"}
    )
    assert response.status_code == 200
    assert "access_token" in response.json()


def test_login_invalid_credentials(client, register):
    """Test login with invalid credentials."""
    register("test3@example.com", "testpassword123")
    for payload in (
        {"email": "nonexistent@example.com", "password": "wrongpassword"},
        {"email": "test3@example.com", "password": "wrongpassword"},
    ):
        response = client.post("/api/auth/login", json=payload)
        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"


def test_me_requires_token(client):
    response = client.get("/api/users/me")
    assert response.status_code == 401
    assert response.json()["error"] == "unauthorized"

    response = client.get("/api/users/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


def test_me(client, register):
    headers = register("me@example.com")
    response = client.get("/api/users/me", headers=headers)
    assert response.status_code == 200
    assert response.json()["email"] == "me@example.com"


def test_invited_user_can_claim_account(client, register):
    owner = register("owner@example.com")
    trip = client.post("/api/trips", json={"name": "Rio"}, headers=owner).json()
    client.post(f"/api/trips/{trip['id']}/participants", json={"email": "guest@example.com"}, headers=owner)

    response = client.post("/api/auth/register", json={"email": "guest@example.com", "password": "mypassword"})
    assert response.status_code == 201
    assert response.json()["user"]["is_provisional"] is False

    login = client.post("/api/auth/login", json={"email": "guest@example.com", "password": "mypassword"})
    assert login.status_code == 200
