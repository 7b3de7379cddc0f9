from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from staff_attendance.core.exceptions import AuthenticationError
from staff_attendance.employees.admin_auth import FirebaseAdminAuthenticator, PasswordAdminAuthenticator


def test_password_authenticator_accepts_configured_password():
    auth = PasswordAdminAuthenticator(generate_password_hash("s3cret"))
    assert auth.authenticate({"password": "s3cret"}) == "admin"


def test_password_authenticator_rejects_wrong_or_missing_password():
    auth = PasswordAdminAuthenticator.from_settings(password="s3cret")

    with pytest.raises(AuthenticationError, match="Incorrect password"):
        auth.authenticate({"password": "nope"})
    with pytest.raises(AuthenticationError, match="enter the admin password"):
        auth.authenticate({})


def test_password_authenticator_needs_configuration():
    with pytest.raises(ValueError):
        PasswordAdminAuthenticator.from_settings()


def test_firebase_authenticator_checks_allowlist():
    tokens = {
        "good": {"uid": "u1", "email": "Admin@Example.com"},
        "other": {"uid": "u2", "email": "someone@example.com"},
    }
    auth = FirebaseAdminAuthenticator(allowed_emails=["admin@example.com"], verify_id_token=tokens.__getitem__)

    assert auth.authenticate({"id_token": "good"}) == "admin@example.com"
    with pytest.raises(AuthenticationError, match="User not found"):
        auth.authenticate({"id_token": "other"})


def test_firebase_authenticator_rejects_bad_tokens():
    def verify(token):
        raise ValueError("malformed token")

    auth = FirebaseAdminAuthenticator(verify_id_token=verify)

    with pytest.raises(AuthenticationError, match="Login failed"):
        auth.authenticate({"id_token": "garbage"})
    with pytest.raises(AuthenticationError, match="email and password"):
        auth.authenticate({"id_token": ""})


def test_firebase_authenticator_without_allowlist_uses_uid():
    auth = FirebaseAdminAuthenticator(verify_id_token=lambda token: {"uid": "u7"})
    assert auth.authenticate({"id_token": "t"}) == "u7"
