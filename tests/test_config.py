from __future__ import annotations

import importlib

import pytest

from staff_attendance.config import get_settings_module
from staff_attendance.container import build_admin_authenticator, build_container
from staff_attendance.employees.admin_auth import PasswordAdminAuthenticator


@pytest.mark.parametrize(
    "env, expected",
    [
        ("production", "staff_attendance.config.production"),
        ("prod", "staff_attendance.config.production"),
        ("testing", "staff_attendance.config.testing"),
        ("development", "staff_attendance.config.development"),
        ("anything-else", "staff_attendance.config.development"),
    ],
)
def test_get_settings_module(monkeypatch, env, expected):
    monkeypatch.setenv("APP_ENV", env)
    assert get_settings_module() == expected


def test_memory_backend_container():
    settings = importlib.import_module("staff_attendance.config.testing")
    container = build_container(settings)

    assert container.backend == "memory"
    assert container.tz is None
    assert isinstance(container.admin_auth, PasswordAdminAuthenticator)
    assert container.admin_auth.authenticate({"password": "admin-test"}) == "admin"


def test_unknown_admin_auth_mode():
    class Settings:
        ADMIN_AUTH = "ldap"

    with pytest.raises(ValueError):
        build_admin_authenticator(Settings)


def test_unknown_backend():
    class Settings:
        STORE_BACKEND = "sqlite"
        ADMIN_PASSWORD = "x"

    with pytest.raises(ValueError):
        build_container(Settings)
