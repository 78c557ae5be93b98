"""Welcome e-mail delivery through an HTTP mail relay.

The relay accepts ``{"to", "subject", "body"}`` as JSON.  Delivery is
best-effort: a failed send is logged and reported as ``False`` so that the
employee that triggered it is still created.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol

import httpx

logger = logging.getLogger(__name__)


class WelcomeMailer(Protocol):
    """Contract for welcome e-mail integrations."""

    def send_welcome(self, employee: Mapping[str, Any]) -> bool:
        """Send the onboarding message, returning whether it was accepted."""


def build_welcome_message(employee: Mapping[str, Any]) -> dict[str, str]:
    name = employee.get("name", "")
    body = (
        f"Dear {name},\n\n"
        f"Welcome to our team! We're excited to have you join us as a {employee.get('designation', '')}.\n\n"
        "Your login credentials:\n"
        f"Employee ID: {employee.get('employee_id', '')}\n"
        f"Employee Password: {employee.get('password', '')}\n\n"
        "Please use these credentials to log into our employee portal.\n"
    )
    return {
        "to": str(employee.get("email", "")),
        "subject": f"Welcome to Our Company, {name}!",
        "body": body,
    }


class NoOpMailer:
    """Fallback mailer used when no relay is configured."""

    def send_welcome(self, employee: Mapping[str, Any]) -> bool:
        logger.info("Welcome e-mail skipped for %s: no mail relay configured", employee.get("employee_id"))
        return False


class HttpWelcomeMailer:
    """Posts welcome messages to the configured mail relay."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        if not url.startswith(("http://", "https://")):
            raise ValueError("mail relay url must include scheme and host")
        self._url = url
        self._client = http_client or httpx.Client(timeout=timeout)
        self._owns_client = http_client is None

    def send_welcome(self, employee: Mapping[str, Any]) -> bool:
        message = build_welcome_message(employee)
        try:
            response = self._client.post(self._url, json=message)
        except httpx.HTTPError as exc:
            logger.warning("Welcome e-mail to %s failed: %s", message["to"], exc)
            return False

        if response.is_error:
            detail = response.text
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                detail = body.get("error", detail)
            logger.warning("Mail relay rejected welcome e-mail to %s (%s): %s", message["to"], response.status_code, detail)
            return False

        logger.info("Welcome e-mail sent to %s", message["to"])
        return True

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
