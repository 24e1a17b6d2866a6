# =============================================================================
# tests/test_auth_api.py - Authentication Endpoint Tests
# =============================================================================
# Tests for /api/auth/register, /api/auth/login and /api/auth/me.
# =============================================================================

from app.auth.security import decode_access_token, hash_password
from tests.conftest import auth_header

ANN = {"name": "Ann Lee", "email": "ann@x.com", "password": "Abcdef1"}


class TestRegister:
    """Tests for POST /api/auth/register."""

    def test_register_returns_account_and_token(self, client):
        response = client.post("/api/auth/register", json=ANN)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User registered successfully"
        data = body["data"]
        assert data["name"] == "Ann Lee"
        assert data["email"] == "ann@x.com"
        assert data["role"] == "user"
        assert "password" not in data
        assert "passwordHash" not in data

        claims = decode_access_token(data["token"])
        assert claims["sub"] == str(data["id"])
        assert claims["role"] == "user"

    def test_password_is_stored_hashed(self, client):
        client.post("/api/auth/register", json=ANN)

        stored = client.app.state.users.get_by_email("ann@x.com")
        assert stored.password_hash != "Abcdef1"

    def test_email_is_lowercased(self, client):
        response = client.post("/api/auth/register", json={**ANN, "email": "Ann@X.com"})

        assert response.json()["data"]["email"] == "ann@x.com"

    def test_duplicate_email_rejected(self, client):
        client.post("/api/auth/register", json=ANN)

        response = client.post("/api/auth/register", json={**ANN, "email": "ANN@x.com"})

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "User already exists with this email"
        assert body["errors"][0]["field"] == "email"

    def test_admin_role_can_be_requested(self, client):
        response = client.post("/api/auth/register", json={**ANN, "role": "admin"})

        assert response.status_code == 201
        assert response.json()["data"]["role"] == "admin"

    def test_unknown_role_rejected(self, client):
        response = client.post("/api/auth/register", json={**ANN, "role": "owner"})

        assert response.status_code == 400
        assert response.json()["errors"][0]["message"] == "Role must be either user or admin"

    def test_weak_password_rejected(self, client):
        response = client.post("/api/auth/register", json={**ANN, "password": "abcdefg"})

        assert response.status_code == 400
        error = response.json()["errors"][0]
        assert error["field"] == "password"
        assert "uppercase" in error["message"]

    def test_every_invalid_field_reported(self, client):
        response = client.post(
            "/api/auth/register",
            json={"name": "A", "email": "not-an-email", "password": "x"},
        )

        assert response.status_code == 400
        fields = [error["field"] for error in response.json()["errors"]]
        assert fields == ["name", "email", "password"]
        assert client.app.state.users.get_by_email("not-an-email") is None

    def test_name_with_digits_rejected(self, client):
        response = client.post("/api/auth/register", json={**ANN, "name": "Ann 2"})

        assert response.status_code == 400
        assert response.json()["errors"][0]["message"] == "Name must contain only letters and spaces"

    def test_body_must_be_object(self, client):
        response = client.post("/api/auth/register", json=["Ann Lee"])

        assert response.status_code == 400
        assert response.json()["message"] == "Request body must be a JSON object"


class TestLogin:
    """Tests for POST /api/auth/login."""

    def test_login_returns_token(self, client):
        client.post("/api/auth/register", json=ANN)

        response = client.post("/api/auth/login", json={"email": "ann@x.com", "password": "Abcdef1"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["data"]["email"] == "ann@x.com"
        assert body["data"]["token"]

    def test_login_email_is_case_insensitive(self, client):
        client.post("/api/auth/register", json=ANN)

        response = client.post("/api/auth/login", json={"email": "ANN@x.com", "password": "Abcdef1"})

        assert response.status_code == 200

    def test_wrong_password_is_401(self, client):
        client.post("/api/auth/register", json=ANN)

        response = client.post("/api/auth/login", json={"email": "ann@x.com", "password": "Wrong123"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_unknown_email_is_401(self, client):
        response = client.post("/api/auth/login", json={"email": "nobody@x.com", "password": "Abcdef1"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_deactivated_account_is_401(self, client):
        client.app.state.users.create(
            name="Ann Lee",
            email="ann@x.com",
            password_hash=hash_password("Abcdef1"),
            is_active=False,
        )

        response = client.post("/api/auth/login", json={"email": "ann@x.com", "password": "Abcdef1"})

        assert response.status_code == 401
        assert response.json()["message"] == "Account is deactivated"

    def test_deactivated_account_with_wrong_password(self, client):
        client.app.state.users.create(
            name="Ann Lee",
            email="ann@x.com",
            password_hash=hash_password("Abcdef1"),
            is_active=False,
        )

        response = client.post("/api/auth/login", json={"email": "ann@x.com", "password": "Wrong123"})

        assert response.json()["message"] == "Invalid credentials"

    def test_missing_password_is_400(self, client):
        response = client.post("/api/auth/login", json={"email": "ann@x.com"})

        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "password", "message": "Password is required", "value": None}
        ]


class TestMe:
    """Tests for GET /api/auth/me."""

    def test_me_returns_current_account(self, client, user_token):
        response = client.get("/api/auth/me", headers=auth_header(user_token))

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["email"] == "ann@x.com"
        assert data["role"] == "user"
        assert "token" not in data

    def test_me_without_token_is_401(self, client):
        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Not authenticated"}
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_account_removed_after_authentication_is_401(self, client, user_token, monkeypatch):
        users = client.app.state.users
        lookup = users.get_by_id
        calls = []

        def vanishing(user_id):
            calls.append(user_id)
            return lookup(user_id) if len(calls) == 1 else None

        monkeypatch.setattr(users, "get_by_id", vanishing)

        response = client.get("/api/auth/me", headers=auth_header(user_token))

        assert len(calls) == 2
        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "User not found"}

    def test_non_bearer_scheme_is_401(self, client, user_token):
        response = client.get("/api/auth/me", headers={"Authorization": f"Basic {user_token}"})

        assert response.status_code == 401
        assert response.json()["message"] == "Not authenticated"
