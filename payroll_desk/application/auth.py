"""Admin sign-in gate backed by the stored credential document."""
from __future__ import annotations

import hmac
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from payroll_desk.domain import AdminSession
from payroll_desk.infrastructure import HRRepository

logger = logging.getLogger(__name__)


class InvalidCredentialsError(Exception):
    """Raised when the submitted e-mail and password do not match."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuthService:
    def __init__(
        self,
        repository: HRRepository,
        *,
        ttl_days: int = 7,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._repository = repository
        self._ttl = timedelta(days=ttl_days)
        self._clock = clock

    def seed_credential(self, email: str, password: str, admin_id: str) -> None:
        self._repository.set_admin_credential({"email": email, "password": password, "admin_id": admin_id})

    def login(self, email: str, password: str) -> dict[str, Any]:
        credential = self._repository.get_admin_credential()
        if not credential:
            raise InvalidCredentialsError("Invalid credentials")
        email_ok = hmac.compare_digest(str(credential.get("email", "")), email or "")
        password_ok = hmac.compare_digest(str(credential.get("password", "")), password or "")
        if not (email_ok and password_ok):
            logger.info("Rejected sign-in attempt for %s", email)
            raise InvalidCredentialsError("Invalid credentials")

        session = AdminSession(
            token=secrets.token_urlsafe(32),
            email=credential["email"],
            admin_id=str(credential.get("admin_id", "")),
            expires_at=self._clock() + self._ttl,
        )
        self._repository.save_session(session)
        return {
            "token": session.token,
            "expires_at": session.expires_at,
            "user": {"email": session.email, "admin_id": session.admin_id},
        }

    def resolve(self, token: str | None) -> dict[str, str] | None:
        """Return the signed-in admin for ``token``, dropping expired sessions."""

        if not token:
            return None
        session = self._repository.get_session(token)
        if session is None:
            return None
        if session.expires_at <= self._clock():
            self._repository.delete_session(token)
            return None
        return {"email": session.email, "admin_id": session.admin_id}

    def logout(self, token: str) -> None:
        self._repository.delete_session(token)
