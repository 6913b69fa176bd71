"""Tests for authentication helpers and admin resolution."""

from app.services.firebase.auth_service import AUTH_ERROR_MESSAGES, describe_auth_error
from app.store.policy import AdminDirectory


def test_known_auth_error_codes():
    assert describe_auth_error("auth/wrong-password") == "Invalid credentials. Please try again."
    assert describe_auth_error("auth/code-expired") == "The verification code has expired. Please request a new one."


def test_unknown_auth_error_keeps_the_code():
    assert describe_auth_error("auth/quota-exceeded") == "An unexpected error occurred. (Code: auth/quota-exceeded)"
    assert describe_auth_error(None) == "An unexpected error occurred. (Code: N/A)"


def test_every_mapped_code_has_a_message():
    assert all(message for message in AUTH_ERROR_MESSAGES.values())


def test_admin_by_membership_document(db):
    directory = AdminDirectory(db)
    assert directory.is_admin("u1") is False
    db.document("admins/u1").set({"addedOn": None})
    assert directory.is_admin("u1") is True


def test_admin_by_bootstrap_uid(db):
    directory = AdminDirectory(db, bootstrap_uid="owner")
    assert directory.context_for("owner").is_admin is True
    assert directory.context_for("someone").is_admin is False
    assert directory.is_admin(None) is False


def test_me_requires_token(client):
    response = client.get("/api/v1/auth/me")
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"


def test_me_reports_admin_flag(client, admin_headers, patient_headers):
    admin = client.get("/api/v1/auth/me", headers=admin_headers).json()["data"]
    patient = client.get("/api/v1/auth/me", headers=patient_headers).json()["data"]
    assert admin["isAdmin"] is True
    assert patient["isAdmin"] is False
    assert patient["email"] == "pat@example.com"


def test_describe_error_endpoint(client):
    response = client.post("/api/v1/auth/describe-error", json={"code": "auth/popup-blocked"})
    assert response.status_code == 200
    assert "popup was blocked" in response.json()["data"]["message"]


def test_dev_token_in_local_mode(client):
    token = client.post("/api/v1/auth/dev-token", json={"uid": "u9", "email": "u9@example.com"}).json()["data"]["token"]
    me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"}).json()["data"]
    assert me["uid"] == "u9"
