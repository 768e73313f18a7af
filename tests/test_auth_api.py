from datetime import datetime, timedelta, timezone

import jwt

from config.settings import settings
from helpers.token_helper import create_access_token, decode_access_token


def register(client, **overrides):
    body = {
        "email": "new.parent@example.com",
        "password": "secret123",
        "displayName": "New Parent",
        "role": "parent",
    }
    body.update(overrides)
    return client.post("/api/auth/register", json=body)


def test_register_then_login(client):
    response = register(client)
    assert response.status_code == 201
    body = response.json()
    assert body["requiresVerification"] is True
    assert body["user"]["role"] == "parent"
    assert body["user"]["emailVerified"] is False

    response = client.post(
        "/api/auth/login",
        json={"email": "new.parent@example.com", "password": "secret123"},
    )
    assert response.status_code == 200
    token = response.json()["token"]
    claims = decode_access_token(token)
    assert claims["email"] == "new.parent@example.com"
    assert claims["role"] == "parent"
    assert claims["displayName"] == "New Parent"
    assert claims["userId"] == response.json()["user"]["id"]


def test_registered_parent_gets_default_settings(client):
    register(client)
    token = client.post(
        "/api/auth/login",
        json={"email": "new.parent@example.com", "password": "secret123"},
    ).json()["token"]

    profile = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"}).json()
    assert profile["kids"] == []
    assert profile["settings"]["dailyLearningMinutes"] == 30
    assert profile["settings"]["funUnlockMinutes"] == 15


def test_duplicate_email_rejected(client):
    assert register(client).status_code == 201
    response = register(client, email="NEW.PARENT@example.com")
    assert response.status_code == 400


def test_admin_cannot_self_register(client):
    assert register(client, role="admin").status_code == 400


def test_register_validates_fields(client):
    response = register(client, password="123", displayName="X", email="nope")
    assert response.status_code == 400
    fields = {err["field"] for err in response.json()["errors"]}
    assert {"password", "displayName", "email"} <= fields


def test_wrong_password_is_unauthorized(client, parent):
    response = client.post(
        "/api/auth/login",
        json={"email": parent["email"], "password": "wrong-password"},
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


def test_unknown_email_is_unauthorized(client):
    response = client.post(
        "/api/auth/login",
        json={"email": "ghost@example.com", "password": "whatever"},
    )
    assert response.status_code == 401


def test_expired_token_is_rejected(client, parent):
    token = create_access_token({"userId": parent["id"]}, expires_days=-1)
    response = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Token has expired"


def test_token_signed_with_other_secret_is_rejected(client, parent):
    token = jwt.encode(
        {"userId": parent["id"], "exp": datetime.now(timezone.utc) + timedelta(days=1)},
        "a-completely-different-secret-key-value",
        algorithm=settings.ALGORITHM,
    )
    response = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_without_user_id_is_rejected(client):
    token = create_access_token({"email": "someone@example.com"})
    response = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_educator_profile_has_no_kids_or_settings(client, educator):
    profile = client.get("/api/auth/profile", headers=educator["headers"]).json()
    assert profile["role"] == "educator"
    assert "kids" not in profile
    assert "settings" not in profile


def test_update_profile_display_name(client, parent):
    response = client.put(
        "/api/auth/profile",
        json={"displayName": "Renamed Parent"},
        headers=parent["headers"],
    )
    assert response.status_code == 200
    assert response.json()["user"]["displayName"] == "Renamed Parent"


def test_change_password(client, parent):
    response = client.post(
        "/api/auth/change-password",
        json={"currentPassword": "wrong", "newPassword": "another123"},
        headers=parent["headers"],
    )
    assert response.status_code == 400

    response = client.post(
        "/api/auth/change-password",
        json={"currentPassword": parent["password"], "newPassword": "another123"},
        headers=parent["headers"],
    )
    assert response.status_code == 200

    login = client.post("/api/auth/login", json={"email": parent["email"], "password": "another123"})
    assert login.status_code == 200


def test_refresh_and_logout(client, parent):
    response = client.post("/api/auth/refresh", headers=parent["headers"])
    assert response.status_code == 200
    assert decode_access_token(response.json()["token"])["userId"] == parent["id"]

    response = client.post("/api/auth/logout", headers=parent["headers"])
    assert response.json() == {"message": "Logged out successfully"}


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"
