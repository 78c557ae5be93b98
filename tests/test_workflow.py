from __future__ import annotations

from io import BytesIO

from openpyxl import load_workbook

ADMIN_EMAIL = "admin@example.com"


def test_landing_page_is_public(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["login"] == "/api/auth/login"


def test_api_requires_bearer_token(client):
    assert client.get("/api/employees").status_code == 401
    assert client.get("/api/employees", headers={"Authorization": "Bearer nope"}).status_code == 401
    assert client.get("/api/dashboard", headers={"Authorization": "Token abc"}).status_code == 401


def test_login_errors(client):
    assert client.post("/api/auth/login", json={"email": ADMIN_EMAIL}).status_code == 400
    response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": "wrong"})
    assert response.status_code == 401


def test_session_and_logout(client, auth_headers):
    response = client.get("/api/auth/session", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["user"]["email"] == ADMIN_EMAIL

    assert client.post("/api/auth/logout", headers=auth_headers).status_code == 200
    assert client.get("/api/auth/session", headers=auth_headers).status_code == 401


def test_employee_crud(client, auth_headers, employee_payload, mailer):
    response = client.post("/api/employees", json=employee_payload(), headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["welcome_email"] == "queued"
    assert body["employee"]["date_of_joining"] == "2024-04-01"
    assert [sent["employee_id"] for sent in mailer.sent] == ["EMP001"]

    duplicate = client.post("/api/employees", json=employee_payload(), headers=auth_headers)
    assert duplicate.status_code == 409
    missing_designation = client.post(
        "/api/employees", json=employee_payload("EMP002", designation=""), headers=auth_headers
    )
    assert missing_designation.status_code == 400
    assert missing_designation.json()["detail"] == "Please select a designation"
    negative = client.post("/api/employees", json=employee_payload("EMP003", base_salary="-1"), headers=auth_headers)
    assert negative.status_code == 422

    unknown = client.patch("/api/employees/EMP001", json={"designation": "Astronaut"}, headers=auth_headers)
    assert unknown.status_code == 400
    assert unknown.json()["detail"] == "Unknown designation: Astronaut"
    custom = client.patch(
        "/api/employees/EMP001",
        json={"designation": "Other", "custom_designation": "Field Auditor"},
        headers=auth_headers,
    )
    assert custom.json()["designation"] == "Field Auditor"
    unknown_create = client.post(
        "/api/employees", json=employee_payload("EMP004", designation="Astronaut"), headers=auth_headers
    )
    assert unknown_create.status_code == 400

    updated = client.patch("/api/employees/EMP001", json={"base_salary": "40000"}, headers=auth_headers)
    assert updated.status_code == 200
    assert str(updated.json()["base_salary"]) == "40000"

    listing = client.get("/api/employees", headers=auth_headers).json()["items"]
    assert [item["employee_id"] for item in listing] == ["EMP001"]

    assert client.delete("/api/employees/EMP001", headers=auth_headers).status_code == 200
    assert client.get("/api/employees/EMP001", headers=auth_headers).status_code == 404


def test_attendance_to_payroll_to_exports(client, auth_headers, employee_payload):
    client.post("/api/employees", json=employee_payload(), headers=auth_headers)

    location = {
        "address": "Site office",
        "latitude": 12.97,
        "longitude": 77.59,
        "accuracy": 8,
        "timestamp": "2025-01-15T09:30:00Z",
    }
    response = client.post("/api/employees/EMP001/attendance/2025-01-15/locations", json=location, headers=auth_headers)
    assert response.status_code == 200
    session = {"check_in_time": "2025-01-15T09:00:00Z", "check_out_time": "2025-01-15T18:00:00Z"}
    response = client.post(
        "/api/employees/EMP001/attendance/2025-01-15/work-sessions", json=session, headers=auth_headers
    )
    assert response.status_code == 200

    count = client.get("/api/employees/EMP001/attendance/01-2025/count", headers=auth_headers).json()
    assert count["working_days"] == 31
    assert count["reported_days"] == 1

    history = client.get("/api/employees/EMP001/attendance", headers=auth_headers).json()["items"]
    assert history[0]["work_sessions"][0]["duration_minutes"] == 540

    today = client.get("/api/attendance/today", params={"on": "2025-01-15"}, headers=auth_headers).json()
    assert today["stats"]["present"] == 1
    assert today["items"][0]["location"]["address"] == "Site office"

    sheet = client.get("/api/payroll/01-2025", headers=auth_headers).json()["items"]
    assert sheet[0]["breakdown"]["pay_scale"] == "1000"
    assert sheet[0]["saved"] is False

    preview = client.post(
        "/api/payroll/01-2025/employees/EMP001/calculate", json={"advance": "500"}, headers=auth_headers
    )
    assert preview.status_code == 200
    assert preview.json()["net_pay"] == "3902"
    assert client.get("/api/payroll/01-2025/saved", headers=auth_headers).json()["items"] == []

    saved = client.put("/api/payroll/01-2025/employees/EMP001", json={"advance": "500"}, headers=auth_headers)
    assert saved.status_code == 200
    assert saved.json()["net_pay"] == "3902"

    stored = client.get("/api/payroll/01-2025/saved", headers=auth_headers).json()["items"]
    assert [item["net_pay"] for item in stored] == ["3902"]
    employee_history = client.get("/api/employees/EMP001/payroll", headers=auth_headers).json()["items"]
    assert [item["month"] for item in employee_history] == ["01-2025"]

    result = client.post("/api/payroll/01-2025/save-all", headers=auth_headers).json()
    assert result["saved"] == ["EMP001"]
    assert result["failed"] == []

    workbook_response = client.get("/api/payroll/01-2025/export.xlsx", headers=auth_headers)
    assert workbook_response.status_code == 200
    assert workbook_response.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    sheet = load_workbook(BytesIO(workbook_response.content))["Payroll"]
    assert sheet["A2"].value == "EMP001"
    assert sheet["R2"].value == "=K2-Q2"

    bank = client.get("/api/payroll/01-2025/export/bank.csv", headers=auth_headers)
    assert bank.status_code == 200
    assert bank.headers["content-type"].startswith("text/csv")
    assert "EMP001,Asha Rao,3902,01-2025" in bank.text

    purge = client.delete("/api/payroll", params={"older_than_months": 0}, headers=auth_headers)
    assert purge.status_code == 200
    assert purge.json()["deleted"] == 1


def test_malformed_month_and_unknown_employee(client, auth_headers):
    assert client.get("/api/payroll/2025-01", headers=auth_headers).status_code == 400
    response = client.post("/api/payroll/01-2025/employees/EMP404/calculate", headers=auth_headers)
    assert response.status_code == 404
    assert client.delete("/api/payroll", params={"older_than_months": -1}, headers=auth_headers).status_code == 400


def test_leave_workflow(client, auth_headers, employee_payload):
    client.post("/api/employees", json=employee_payload(), headers=auth_headers)
    request = {
        "cause": "Flu",
        "duration": 2,
        "leave_type": "Sick",
        "start_date": "2025-02-03",
        "end_date": "2025-02-04",
    }

    created = client.post("/api/employees/EMP001/leaves", json=request, headers=auth_headers)
    assert created.status_code == 200
    leave_id = created.json()["id"]
    assert created.json()["status"] == "Pending"

    pending = client.get("/api/leaves", headers=auth_headers).json()["items"]
    assert [item["id"] for item in pending] == [leave_id]

    bad = client.post(
        f"/api/employees/EMP001/leaves/{leave_id}/status", json={"status": "Maybe"}, headers=auth_headers
    )
    assert bad.status_code == 400
    approved = client.post(
        f"/api/employees/EMP001/leaves/{leave_id}/status", json={"status": "Approved"}, headers=auth_headers
    )
    assert approved.json()["status"] == "Approved"

    assert client.get("/api/leaves", headers=auth_headers).json()["items"] == []
    all_items = client.get("/api/leaves", params={"status": "all"}, headers=auth_headers).json()["items"]
    assert len(all_items) == 1

    analytics = client.get("/api/leaves/analytics", params={"year": 2025}, headers=auth_headers).json()
    assert analytics["employees"] == [
        {"employee_id": "EMP001", "name": "Asha Rao", "total_days": 2, "monthly_average": "0.2"}
    ]

    today = client.get("/api/attendance/today", params={"on": "2025-02-04"}, headers=auth_headers).json()
    assert today["items"][0]["status"] == "leave"


def test_announcements_and_dashboard(client, auth_headers, employee_payload):
    client.post("/api/employees", json=employee_payload(), headers=auth_headers)

    first = client.post("/api/announcements", json={"message": "Payroll closes on the 25th"}, headers=auth_headers)
    assert first.status_code == 200
    assert client.post("/api/announcements", json={"message": "   "}, headers=auth_headers).status_code == 400
    client.post("/api/announcements", json={"message": "Office closed Friday"}, headers=auth_headers)
    client.post("/api/announcements", json={"message": "New leave policy"}, headers=auth_headers)

    items = client.get("/api/announcements", headers=auth_headers).json()["items"]
    assert len(items) == 3

    summary = client.get("/api/dashboard", params={"on": "2025-01-15"}, headers=auth_headers).json()
    assert summary["employee_count"] == 1
    assert summary["attendance"]["absent"] == 1
    assert len(summary["announcements"]) == 2

    deleted = client.delete(f"/api/announcements/{first.json()['id']}", headers=auth_headers)
    assert deleted.status_code == 200
    assert client.delete(f"/api/announcements/{first.json()['id']}", headers=auth_headers).status_code == 404
