"""Tests for API authentication and user endpoints."""

import pytest
from fastapi.testclient import TestClient

from moneybook.api.app import create_app
from moneybook.api.deps import parse_authorization
from moneybook.config import Settings
from moneybook.domain.errors import AuthenticationError, MalformedAuthorizationError


class TestParseAuthorization:
    """Tests for Authorization header parsing."""

    def test_bearer_token(self):
        """Test the standard bearer form."""
        assert parse_authorization("Bearer abc") == "abc"
        assert parse_authorization("bearer abc") == "abc"

    @pytest.mark.parametrize("header", [None, "", "   "])
    def test_missing_header(self, header):
        """Test that an absent header is an authentication error."""
        with pytest.raises(AuthenticationError):
            parse_authorization(header)

    @pytest.mark.parametrize("header", ["abc", "Basic abc", "Bearer", "Bearer a b"])
    def test_malformed_header(self, header):
        """Test that anything but 'Bearer <token>' is malformed."""
        with pytest.raises(MalformedAuthorizationError):
            parse_authorization(header)

    def test_raw_token_when_enabled(self):
        """Test the backward-compatible raw token form."""
        assert parse_authorization("abc", accept_raw_token=True) == "abc"


def test_register_and_me(client, register):
    """Test registering, logging in and fetching the current user."""
    headers = register()

    response = client.get("/api/users/me", headers=headers)

    assert response.status_code == 200
    assert response.json()["login"] == "alice"
    assert "createdAt" in response.json()


def test_register_duplicate_login(client, register):
    """Test that a taken login is a conflict."""
    register()
    response = client.post("/api/users", json={"login": "alice", "password": "another-one"})

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"


def test_login_returns_token(client, register):
    """Test the login response shape."""
    register()
    response = client.post("/api/users/login", json={"login": "alice", "password": "correct-horse"})

    body = response.json()
    assert response.status_code == 200
    assert body["token"]
    assert body["tokenType"] == "bearer"
    assert body["expiresAt"] is not None


def test_login_bad_password(client, register):
    """Test that wrong credentials are 401."""
    register()
    response = client.post("/api/users/login", json={"login": "alice", "password": "nope-nope"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


def test_missing_authorization(client):
    """Test that protected endpoints require a token."""
    response = client.get("/api/accounts")
    assert response.status_code == 401


def test_unknown_token(client):
    """Test that an unknown token is 401."""
    response = client.get("/api/accounts", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401


def test_raw_token_rejected_by_default(client, register):
    """Test that a bare token is a format error unless enabled."""
    headers = register()
    raw = headers["Authorization"].split()[1]

    response = client.get("/api/users/me", headers={"Authorization": raw})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "MALFORMED_AUTHORIZATION"


def test_raw_token_accepted_when_enabled(temp_db):
    """Test the raw token compatibility switch."""
    settings = Settings(database_path=temp_db.database_path, accept_raw_token=True, _env_file=None)
    with TestClient(create_app(settings=settings, db=temp_db)) as client:
        client.post("/api/users", json={"login": "alice", "password": "correct-horse"})
        token = client.post(
            "/api/users/login", json={"login": "alice", "password": "correct-horse"}
        ).json()["token"]

        response = client.get("/api/users/me", headers={"Authorization": token})

    assert response.status_code == 200


def test_health_needs_no_auth(client):
    """Test the health endpoint."""
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
