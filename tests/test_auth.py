from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from payroll_desk.application.auth import AuthService, InvalidCredentialsError
from payroll_desk.infrastructure import InMemoryHRRepository


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2025, 1, 1, 8, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def auth(clock) -> AuthService:
    service = AuthService(InMemoryHRRepository(), ttl_days=7, clock=clock)
    service.seed_credential("admin@example.com", "hunter22", "ADM-1")
    return service


def test_login_issues_session(auth, clock):
    session = auth.login("admin@example.com", "hunter22")

    assert session["user"] == {"email": "admin@example.com", "admin_id": "ADM-1"}
    assert session["expires_at"] == clock.now + timedelta(days=7)
    assert auth.resolve(session["token"]) == session["user"]


@pytest.mark.parametrize(
    ("email", "password"),
    [("admin@example.com", "wrong"), ("other@example.com", "hunter22"), ("", "")],
)
def test_login_rejects_wrong_credentials(auth, email, password):
    with pytest.raises(InvalidCredentialsError):
        auth.login(email, password)


def test_login_without_credential_document_fails():
    with pytest.raises(InvalidCredentialsError):
        AuthService(InMemoryHRRepository()).login("admin@example.com", "hunter22")


def test_session_expires_after_ttl(auth, clock):
    token = auth.login("admin@example.com", "hunter22")["token"]

    clock.now += timedelta(days=6, hours=23)
    assert auth.resolve(token) is not None

    clock.now += timedelta(hours=1)
    assert auth.resolve(token) is None

    clock.now -= timedelta(days=1)
    assert auth.resolve(token) is None


def test_logout_drops_session(auth):
    token = auth.login("admin@example.com", "hunter22")["token"]

    auth.logout(token)

    assert auth.resolve(token) is None
    assert auth.resolve(None) is None
