from __future__ import annotations

from typing import Any, Mapping

import pytest
from fastapi.testclient import TestClient

from payroll_desk.app import create_app
from payroll_desk.application import build_services
from payroll_desk.core.config import Settings

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "s3cret-pass"


class RecordingMailer:
    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []

    def send_welcome(self, employee: Mapping[str, Any]) -> bool:
        self.sent.append(dict(employee))
        return True


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
        welcome_email_url=None,
    )


@pytest.fixture()
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture()
def services(settings, mailer):
    return build_services(settings, mailer=mailer)


@pytest.fixture()
def client(settings, mailer):
    app = create_app(settings, mailer=mailer)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers(client) -> dict[str, str]:
    response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture()
def employee_payload():
    def _payload(employee_id: str = "EMP001", **overrides: Any) -> dict[str, Any]:
        payload = {
            "employee_id": employee_id,
            "name": "Asha Rao",
            "email": f"{employee_id.lower()}@example.com",
            "designation": "Sales Manager",
            "date_of_joining": "01/04/2024",
            "epfuan_number": "100200300",
            "esic_number": "5500",
            "base_salary": "31000",
            "special_salary": "5000",
        }
        payload.update(overrides)
        return payload

    return _payload
