from datetime import timedelta

from api.user.user_model import User
from utils.date_utils import utc_now


def register(client, email="verify.me@example.com"):
    response = client.post(
        "/api/auth/register",
        json={"email": email, "password": "secret123", "displayName": "Verify Me", "role": "parent"},
    )
    assert response.status_code == 201
    return response.json()["user"]["id"]


def load_user(session_factory, user_id):
    with session_factory() as db:
        user = db.query(User).filter(User.id == user_id).first()
        db.expunge(user)
        return user


def set_fields(session_factory, user_id, **fields):
    with session_factory() as db:
        user = db.query(User).filter(User.id == user_id).first()
        for field, value in fields.items():
            setattr(user, field, value)
        db.commit()


# ─── Email verification ───────────────────────────────────────────────────────

def test_register_issues_a_verification_token(client, session_factory):
    user = load_user(session_factory, register(client))
    assert user.email_verified is False
    assert len(user.email_verification_token) == 64
    assert user.email_verification_expires is not None


def test_verify_email_marks_user_verified_and_clears_token(client, session_factory):
    user_id = register(client)
    token = load_user(session_factory, user_id).email_verification_token

    response = client.get(f"/api/auth/verify-email/{token}")
    assert response.status_code == 200
    assert response.json()["user"]["emailVerified"] is True
    assert response.json()["user"]["id"] == user_id

    user = load_user(session_factory, user_id)
    assert user.email_verified is True
    assert user.email_verification_token is None
    assert user.email_verification_expires is None

    # token is single-use
    assert client.get(f"/api/auth/verify-email/{token}").status_code == 400


def test_verify_email_rejects_unknown_token(client):
    response = client.get("/api/auth/verify-email/abc")
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid or expired verification token"


def test_verify_email_rejects_expired_token(client, session_factory):
    user_id = register(client)
    token = load_user(session_factory, user_id).email_verification_token
    set_fields(session_factory, user_id, email_verification_expires=utc_now() - timedelta(minutes=1))

    response = client.get(f"/api/auth/verify-email/{token}")
    assert response.status_code == 400
    assert "expired" in response.json()["detail"]
    assert load_user(session_factory, user_id).email_verified is False


def test_resend_while_token_still_valid_is_refused(client):
    register(client)
    response = client.post("/api/auth/resend-verification", json={"email": "verify.me@example.com"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Please wait before requesting another verification email"


def test_resend_after_expiry_issues_new_token(client, session_factory):
    user_id = register(client)
    old_token = load_user(session_factory, user_id).email_verification_token
    set_fields(session_factory, user_id, email_verification_expires=utc_now() - timedelta(hours=1))

    response = client.post("/api/auth/resend-verification", json={"email": "Verify.Me@example.com"})
    assert response.status_code == 200

    new_token = load_user(session_factory, user_id).email_verification_token
    assert new_token and new_token != old_token
    assert client.get(f"/api/auth/verify-email/{new_token}").status_code == 200


def test_resend_for_verified_account_is_refused(client, session_factory):
    user_id = register(client)
    set_fields(session_factory, user_id, email_verified=True, email_verification_token=None)

    response = client.post("/api/auth/resend-verification", json={"email": "verify.me@example.com"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Email is already verified"


def test_resend_for_unknown_account(client):
    response = client.post("/api/auth/resend-verification", json={"email": "ghost@example.com"})
    assert response.status_code == 404


# ─── Password reset ───────────────────────────────────────────────────────────

FORGOT_MESSAGE = "If an account with that email exists, a password reset link has been sent."


def test_forgot_password_does_not_reveal_accounts(client, parent, session_factory):
    known = client.post("/api/auth/forgot-password", json={"email": parent["email"]})
    unknown = client.post("/api/auth/forgot-password", json={"email": "ghost@example.com"})
    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json() == {"message": FORGOT_MESSAGE}

    user = load_user(session_factory, parent["id"])
    assert len(user.password_reset_token) == 64
    assert user.password_reset_expires is not None


def test_reset_password_with_token(client, parent, session_factory):
    client.post("/api/auth/forgot-password", json={"email": parent["email"]})
    token = load_user(session_factory, parent["id"]).password_reset_token

    response = client.post("/api/auth/reset-password", json={"token": token, "newPassword": "brand-new-1"})
    assert response.status_code == 200

    assert load_user(session_factory, parent["id"]).password_reset_token is None
    old_login = client.post("/api/auth/login", json={"email": parent["email"], "password": parent["password"]})
    assert old_login.status_code == 401
    new_login = client.post("/api/auth/login", json={"email": parent["email"], "password": "brand-new-1"})
    assert new_login.status_code == 200

    # token is single-use
    again = client.post("/api/auth/reset-password", json={"token": token, "newPassword": "another-2"})
    assert again.status_code == 400


def test_reset_password_rejects_unknown_token(client):
    response = client.post("/api/auth/reset-password", json={"token": "nope", "newPassword": "brand-new-1"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid password reset token"


def test_reset_password_rejects_expired_token(client, parent, session_factory):
    client.post("/api/auth/forgot-password", json={"email": parent["email"]})
    token = load_user(session_factory, parent["id"]).password_reset_token
    set_fields(session_factory, parent["id"], password_reset_expires=utc_now() - timedelta(seconds=1))

    response = client.post("/api/auth/reset-password", json={"token": token, "newPassword": "brand-new-1"})
    assert response.status_code == 400
    assert "expired" in response.json()["detail"]


def test_reset_password_validates_new_password(client):
    response = client.post("/api/auth/reset-password", json={"token": "whatever", "newPassword": "123"})
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "newPassword"


# ─── Profile under /users ─────────────────────────────────────────────────────

def test_profile_is_served_under_users(client, parent, kid_id):
    profile = client.get("/api/users/profile", headers=parent["headers"]).json()
    assert profile["id"] == parent["id"]
    assert [k["id"] for k in profile["kids"]] == [kid_id]
    assert profile["settings"]["dailyLearningMinutes"] == 30

    response = client.put("/api/users/profile", json={"displayName": "Renamed"}, headers=parent["headers"])
    assert response.status_code == 200
    assert response.json()["user"]["displayName"] == "Renamed"
    assert client.get("/api/auth/profile", headers=parent["headers"]).json()["displayName"] == "Renamed"


def test_users_profile_requires_token(client):
    assert client.get("/api/users/profile").status_code == 401
