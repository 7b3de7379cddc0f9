"""Admin gate.

Two interchangeable ways to obtain the "is admin" capability: a shared static
password, or a Firebase ID token from a client that signed in with email and
password. Services never see either mechanism, only the resulting boolean.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Protocol

from firebase_admin import auth as firebase_auth
from firebase_admin import exceptions as firebase_exceptions
from werkzeug.security import check_password_hash, generate_password_hash

from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class AdminAuthenticator(Protocol):
    def authenticate(self, credentials: dict) -> str:
        """Return an identity label for the admin, or raise AuthenticationError."""

        raise NotImplementedError


class PasswordAdminAuthenticator:
    def __init__(self, password_hash: str):
        if not password_hash:
            raise ValueError("Admin password is not configured")
        self._password_hash = password_hash

    @classmethod
    def from_settings(cls, *, password_hash: str = "", password: str = "") -> "PasswordAdminAuthenticator":
        if password_hash:
            return cls(password_hash)
        if password:
            return cls(generate_password_hash(password))
        raise ValueError("Set ADMIN_PASSWORD_HASH or ADMIN_PASSWORD")

    def authenticate(self, credentials: dict) -> str:
        password = (credentials or {}).get("password") or ""
        if not password:
            raise AuthenticationError("Please enter the admin password.")

        try:
            ok = check_password_hash(self._password_hash, password)
        except ValueError:
            # e.g. a corrupted or unsupported hash value
            ok = False

        if not ok:
            raise AuthenticationError("Incorrect password. Please try again.")
        return "admin"


class FirebaseAdminAuthenticator:
    def __init__(
        self,
        *,
        allowed_emails: Iterable[str] = (),
        verify_id_token: Optional[Callable[[str], dict]] = None,
    ):
        self._allowed = {e.lower() for e in allowed_emails}
        self._verify = verify_id_token or firebase_auth.verify_id_token

    def authenticate(self, credentials: dict) -> str:
        token = (credentials or {}).get("id_token") or ""
        if not token:
            raise AuthenticationError("Please enter email and password.")

        try:
            claims = self._verify(token)
        except (ValueError, firebase_exceptions.FirebaseError) as exc:
            logger.info("Admin token rejected: %s", exc)
            raise AuthenticationError("Login failed. Please try again.") from exc

        email = (claims.get("email") or "").lower()
        if self._allowed and email not in self._allowed:
            raise AuthenticationError("User not found. Please check your email.")
        return email or str(claims.get("uid", "admin"))
