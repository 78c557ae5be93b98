"""Infrastructure layer for HR document persistence."""
from __future__ import annotations

from copy import deepcopy
from dataclasses import asdict
from datetime import date
from typing import Any, Protocol

from payroll_desk.domain import AdminSession, DailyRecord, EmployeeDocument


class HRRepository(Protocol):
    """Persistence contract for employees and their nested collections."""

    def get_admin_credential(self) -> dict[str, Any] | None: ...

    def set_admin_credential(self, credential: dict[str, Any]) -> None: ...

    def save_session(self, session: AdminSession) -> None: ...

    def get_session(self, token: str) -> AdminSession | None: ...

    def delete_session(self, token: str) -> None: ...

    def add_employee(self, profile: dict[str, Any]) -> None: ...

    def get_employee(self, employee_id: str) -> dict[str, Any] | None: ...

    def list_employee_ids(self) -> list[str]: ...

    def update_employee(self, employee_id: str, fields: dict[str, Any]) -> dict[str, Any]: ...

    def delete_employee(self, employee_id: str) -> None: ...

    def append_daily_entry(self, employee_id: str, day: date, kind: str, entry: dict[str, Any]) -> None: ...

    def get_daily_record(self, employee_id: str, day: date) -> dict[str, Any] | None: ...

    def list_daily_records(self, employee_id: str) -> list[dict[str, Any]]: ...

    def add_leave(self, employee_id: str, leave: dict[str, Any]) -> None: ...

    def list_leaves(self, employee_id: str, status: str | None = None) -> list[dict[str, Any]]: ...

    def update_leave(self, employee_id: str, leave_id: str, fields: dict[str, Any]) -> dict[str, Any]: ...

    def save_payroll(self, employee_id: str, month: str, record: dict[str, Any]) -> None: ...

    def get_payroll(self, employee_id: str, month: str) -> dict[str, Any] | None: ...

    def list_payrolls(self, employee_id: str) -> list[dict[str, Any]]: ...

    def list_payrolls_for_month(self, month: str) -> list[dict[str, Any]]: ...

    def delete_payroll(self, employee_id: str, month: str) -> None: ...

    def add_announcement(self, record: dict[str, Any]) -> None: ...

    def list_announcements(self) -> list[dict[str, Any]]: ...

    def delete_announcement(self, announcement_id: str) -> None: ...

    def next_id(self, prefix: str) -> str: ...

    def reset(self) -> None: ...


DAILY_KINDS = ("locations", "routines", "work_sessions")


class InMemoryHRRepository:
    """Simple in-memory document store for fast iteration and tests."""

    def __init__(self) -> None:
        self._employees: dict[str, EmployeeDocument] = {}
        self._admin_credential: dict[str, Any] | None = None
        self._sessions: dict[str, AdminSession] = {}
        self._announcements: dict[str, dict[str, Any]] = {}
        self._counter = 0

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------
    def _require(self, employee_id: str) -> EmployeeDocument:
        document = self._employees.get(employee_id)
        if document is None:
            raise KeyError(employee_id)
        return document

    # ------------------------------------------------------------------
    # admin credential & sessions
    # ------------------------------------------------------------------
    def get_admin_credential(self) -> dict[str, Any] | None:
        return dict(self._admin_credential) if self._admin_credential else None

    def set_admin_credential(self, credential: dict[str, Any]) -> None:
        self._admin_credential = dict(credential)

    def save_session(self, session: AdminSession) -> None:
        self._sessions[session.token] = session

    def get_session(self, token: str) -> AdminSession | None:
        return self._sessions.get(token)

    def delete_session(self, token: str) -> None:
        self._sessions.pop(token, None)

    # ------------------------------------------------------------------
    # employees
    # ------------------------------------------------------------------
    def add_employee(self, profile: dict[str, Any]) -> None:
        employee_id = profile["employee_id"]
        self._employees[employee_id] = EmployeeDocument(employee_id=employee_id, profile=deepcopy(profile))

    def get_employee(self, employee_id: str) -> dict[str, Any] | None:
        document = self._employees.get(employee_id)
        return deepcopy(document.profile) if document else None

    def list_employee_ids(self) -> list[str]:
        return sorted(self._employees)

    def update_employee(self, employee_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        document = self._require(employee_id)
        document.profile.update(deepcopy(fields))
        return deepcopy(document.profile)

    def delete_employee(self, employee_id: str) -> None:
        self._require(employee_id)
        del self._employees[employee_id]

    # ------------------------------------------------------------------
    # daily attendance data
    # ------------------------------------------------------------------
    def append_daily_entry(self, employee_id: str, day: date, kind: str, entry: dict[str, Any]) -> None:
        if kind not in DAILY_KINDS:
            raise ValueError(f"unknown daily entry kind: {kind}")
        document = self._require(employee_id)
        record = document.daily.get(day)
        if record is None:
            record = DailyRecord(day=day)
            document.daily[day] = record
        getattr(record, kind).append(deepcopy(entry))

    def get_daily_record(self, employee_id: str, day: date) -> dict[str, Any] | None:
        document = self._employees.get(employee_id)
        if document is None or day not in document.daily:
            return None
        return deepcopy(asdict(document.daily[day]))

    def list_daily_records(self, employee_id: str) -> list[dict[str, Any]]:
        document = self._require(employee_id)
        return [deepcopy(asdict(record)) for record in document.daily.values()]

    # ------------------------------------------------------------------
    # leaves
    # ------------------------------------------------------------------
    def add_leave(self, employee_id: str, leave: dict[str, Any]) -> None:
        document = self._require(employee_id)
        document.leaves[leave["id"]] = deepcopy(leave)

    def list_leaves(self, employee_id: str, status: str | None = None) -> list[dict[str, Any]]:
        document = self._require(employee_id)
        return [
            deepcopy(leave)
            for leave in document.leaves.values()
            if status is None or leave.get("status") == status
        ]

    def update_leave(self, employee_id: str, leave_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        document = self._require(employee_id)
        leave = document.leaves.get(leave_id)
        if leave is None:
            raise KeyError(leave_id)
        leave.update(deepcopy(fields))
        return deepcopy(leave)

    # ------------------------------------------------------------------
    # payroll documents, keyed by MM-YYYY
    # ------------------------------------------------------------------
    def save_payroll(self, employee_id: str, month: str, record: dict[str, Any]) -> None:
        document = self._require(employee_id)
        existing = document.payroll.get(month, {})
        existing.update(deepcopy(record))
        document.payroll[month] = existing

    def get_payroll(self, employee_id: str, month: str) -> dict[str, Any] | None:
        document = self._employees.get(employee_id)
        if document is None or month not in document.payroll:
            return None
        return deepcopy(document.payroll[month])

    def list_payrolls(self, employee_id: str) -> list[dict[str, Any]]:
        document = self._require(employee_id)
        return [deepcopy(record) for record in document.payroll.values()]

    def list_payrolls_for_month(self, month: str) -> list[dict[str, Any]]:
        collected: list[dict[str, Any]] = []
        for employee_id in sorted(self._employees):
            record = self._employees[employee_id].payroll.get(month)
            if record is not None:
                collected.append(deepcopy(record))
        return collected

    def delete_payroll(self, employee_id: str, month: str) -> None:
        document = self._require(employee_id)
        document.payroll.pop(month, None)

    # ------------------------------------------------------------------
    # announcements
    # ------------------------------------------------------------------
    def add_announcement(self, record: dict[str, Any]) -> None:
        self._announcements[record["id"]] = deepcopy(record)

    def list_announcements(self) -> list[dict[str, Any]]:
        return [deepcopy(record) for record in self._announcements.values()]

    def delete_announcement(self, announcement_id: str) -> None:
        if announcement_id not in self._announcements:
            raise KeyError(announcement_id)
        del self._announcements[announcement_id]

    def next_id(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}-{self._counter:05d}"

    def reset(self) -> None:
        self._employees.clear()
        self._sessions.clear()
        self._announcements.clear()
        self._admin_credential = None
        self._counter = 0
