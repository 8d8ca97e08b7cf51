"""Registration, login and token handling."""

from unittest.mock import patch

from itsdangerous import URLSafeTimedSerializer

from afyaconnect.core.config import settings
from afyaconnect.services.auth import create_token, decode_token


def test_register_returns_token_and_profile(client):
    resp = client.post(
        "/api/auth/register",
        json={
            "email": "Baraka@Example.com",
            "password": "secret123",
            "firstName": "Baraka",
            "lastName": "Mwangi",
        },
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["token"]
    assert body["user"]["email"] == "baraka@example.com"
    assert body["user"]["role"] == "patient"
    assert "passwordHash" not in body["user"]


def test_duplicate_email_conflicts(client, register_user):
    register_user("dup@example.com")
    resp = client.post(
        "/api/auth/register",
        json={
            "email": "dup@example.com",
            "password": "secret123",
            "firstName": "A",
            "lastName": "B",
        },
    )
    assert resp.status_code == 409
    assert "error" in resp.json()


def test_short_password_rejected(client):
    resp = client.post(
        "/api/auth/register",
        json={"email": "a@b.co", "password": "123", "firstName": "A", "lastName": "B"},
    )
    assert resp.status_code == 400
    assert "password" in resp.json()["fields"]


def test_login_and_profile(client, register_user):
    register_user("login@example.com", "secret123")
    resp = client.post(
        "/api/auth/login", json={"email": "login@example.com", "password": "secret123"}
    )
    assert resp.status_code == 200
    token = resp.json()["token"]

    profile = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert profile.status_code == 200
    assert profile.json()["email"] == "login@example.com"
    assert profile.json()["firstName"] == "Amina"


def test_wrong_password_is_unauthorized(client, register_user):
    register_user("login@example.com", "secret123")
    resp = client.post(
        "/api/auth/login", json={"email": "login@example.com", "password": "wrong-pass"}
    )
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid email or password"}


def test_admin_login(client, admin_headers):
    profile = client.get("/api/auth/profile", headers=admin_headers).json()
    assert profile["role"] == "admin"


def test_profile_requires_token(client):
    assert client.get("/api/auth/profile").status_code == 401


def test_token_signed_with_other_key_is_rejected():
    forged = URLSafeTimedSerializer("other-key", salt="afyaconnect-auth").dumps(
        {"user_id": 0, "email": "x", "role": "admin"}
    )
    assert decode_token(forged) is None


def test_expired_token_is_rejected():
    token = create_token({"id": 1, "email": "a@b.co", "role": "patient"})
    with patch("afyaconnect.core.config.settings.TOKEN_MAX_AGE_SECONDS", -1):
        assert decode_token(token) is None
    assert decode_token(token)["user_id"] == 1


def test_token_for_deleted_user_is_rejected(client):
    token = create_token({"id": 4242, "email": "ghost@example.com", "role": "patient"})
    resp = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert settings.SECRET_KEY


def test_update_profile(client, user_headers):
    resp = client.put(
        "/api/auth/profile",
        json={
            "firstName": " Amina ",
            "lastName": "Wanjiru",
            "phone": "+254 700 000 000",
            "dateOfBirth": "1982-04-11",
            "country": "",
        },
        headers=user_headers,
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "Profile updated successfully"
    assert body["user"]["firstName"] == "Amina"
    assert body["user"]["lastName"] == "Wanjiru"
    assert body["user"]["phone"] == "+254 700 000 000"
    assert body["user"]["dateOfBirth"] == "1982-04-11"
    assert body["user"]["country"] is None

    profile = client.get("/api/auth/profile", headers=user_headers).json()
    assert profile["lastName"] == "Wanjiru"


def test_update_profile_requires_names(client, user_headers):
    resp = client.put(
        "/api/auth/profile", json={"firstName": "", "lastName": "Otieno"}, headers=user_headers
    )
    assert resp.status_code == 400
    assert "firstName" in resp.json()["fields"]


def test_update_profile_requires_token(client):
    resp = client.put("/api/auth/profile", json={"firstName": "A", "lastName": "B"})
    assert resp.status_code == 401


def test_admin_profile_is_not_editable(client, admin_headers):
    resp = client.put(
        "/api/auth/profile", json={"firstName": "A", "lastName": "B"}, headers=admin_headers
    )
    assert resp.status_code == 403


def test_change_password(client, register_user):
    headers = register_user("change@example.com", "secret123")
    resp = client.post(
        "/api/auth/change-password",
        json={"currentPassword": "secret123", "newPassword": "better-secret"},
        headers=headers,
    )
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Password changed successfully"}

    old = client.post(
        "/api/auth/login", json={"email": "change@example.com", "password": "secret123"}
    )
    assert old.status_code == 401
    new = client.post(
        "/api/auth/login", json={"email": "change@example.com", "password": "better-secret"}
    )
    assert new.status_code == 200


def test_change_password_checks_current_password(client, user_headers):
    resp = client.post(
        "/api/auth/change-password",
        json={"currentPassword": "not-it", "newPassword": "better-secret"},
        headers=user_headers,
    )
    assert resp.status_code == 401
    assert resp.json() == {"error": "Current password is incorrect"}


def test_change_password_enforces_length(client, user_headers):
    resp = client.post(
        "/api/auth/change-password",
        json={"currentPassword": "secret123", "newPassword": "123"},
        headers=user_headers,
    )
    assert resp.status_code == 400
    assert "newPassword" in resp.json()["fields"]
