"""Payroll orchestration between the HR store and the payroll rules."""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Mapping

from payroll_desk.application.attendance import AttendanceService
from payroll_desk.application.employees import EmployeeService
from payroll_desk.core import periods
from payroll_desk.core.payroll import compute_breakdown, parse_override
from payroll_desk.core.validation import ValidationError
from payroll_desk.infrastructure import HRRepository

logger = logging.getLogger(__name__)

ATTENDANCE_FIELDS = ("working_days", "reported_days")
# Saved values of these fields win over recomputation when a month is reloaded.
ADMIN_EDITABLE_FIELDS = ("advance", "tds", "provident_fund", "professional", "medical_contribution")
# Formula results an admin may pin; only pinned values are replayed on reload.
FORMULA_OVERRIDE_FIELDS = ("da", "hra", "esic", "esic_contribution")


class PayrollService:
    """Builds, previews and persists monthly payroll breakdowns."""

    def __init__(
        self,
        repository: HRRepository,
        employees: EmployeeService,
        attendance: AttendanceService,
        *,
        default_professional_tax: Decimal | None = None,
    ) -> None:
        self._repository = repository
        self._employees = employees
        self._attendance = attendance
        self._default_professional_tax = default_professional_tax

    # ------------------------------------------------------------------
    # input assembly
    # ------------------------------------------------------------------
    def _gather_inputs(self, employee_id: str, month: str, payload: Mapping[str, Any] | None) -> dict[str, Any]:
        basis = self._employees.salary_basis(employee_id)
        saved = self._repository.get_payroll(employee_id, month)

        raw: dict[str, Any] = {}
        if saved:
            for field in ATTENDANCE_FIELDS + ADMIN_EDITABLE_FIELDS:
                raw[field] = saved.get(field)
            raw.update(saved.get("overrides") or {})
        else:
            count = self._attendance.attendance_count(employee_id, month)
            raw["working_days"] = count.working_days
            raw["reported_days"] = count.reported_days

        for field in ATTENDANCE_FIELDS + ADMIN_EDITABLE_FIELDS + FORMULA_OVERRIDE_FIELDS:
            if payload and field in payload:
                raw[field] = payload[field]

        raw["basic"] = basis.base_salary
        raw["special_pay"] = basis.special_salary
        return raw

    def _compute(self, employee_id: str, month: str, payload: Mapping[str, Any] | None = None) -> dict[str, Any]:
        periods.parse_month(month)
        raw = self._gather_inputs(employee_id, month, payload)
        breakdown = compute_breakdown(
            raw,
            employee_id=employee_id,
            month=month,
            default_professional=self._default_professional_tax,
        )
        return breakdown.model_dump(exclude={"created_at"})

    # ------------------------------------------------------------------
    # use cases
    # ------------------------------------------------------------------
    def month_sheet(self, month: str) -> list[dict[str, Any]]:
        """One row per employee: the saved payroll refreshed, or a fresh one."""

        periods.parse_month(month)
        rows: list[dict[str, Any]] = []
        for employee_id in self._repository.list_employee_ids():
            profile = self._repository.get_employee(employee_id)
            if profile is None:
                continue
            row: dict[str, Any] = {
                "employee_id": employee_id,
                "name": profile.get("name", ""),
                "designation": profile.get("designation", ""),
                "saved": self._repository.get_payroll(employee_id, month) is not None,
                "breakdown": None,
                "error": None,
            }
            try:
                row["breakdown"] = self._compute(employee_id, month)
            except ValidationError as exc:
                logger.warning("Payroll for %s in %s needs attention: %s", employee_id, month, exc)
                row["error"] = str(exc)
            rows.append(row)
        return rows

    def preview(self, employee_id: str, month: str, payload: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self._compute(employee_id, month, payload)

    def save(self, employee_id: str, month: str, payload: Mapping[str, Any] | None = None) -> dict[str, Any]:
        record = self._compute(employee_id, month, payload)
        previous = self._repository.get_payroll(employee_id, month) or {}
        pinned = dict(previous.get("overrides") or {})
        for field in FORMULA_OVERRIDE_FIELDS:
            if not payload or field not in payload:
                continue
            if parse_override(payload[field]) is None:
                pinned.pop(field, None)
            else:
                pinned[field] = str(payload[field])
        record["overrides"] = pinned
        record["created_at"] = datetime.now(timezone.utc)
        self._repository.save_payroll(employee_id, month, record)
        logger.info("Payroll saved for %s in %s (net pay %s)", employee_id, month, record["net_pay"])
        return record

    def save_all(self, month: str) -> dict[str, Any]:
        saved: list[str] = []
        failed: list[dict[str, str]] = []
        for row in self.month_sheet(month):
            employee_id = row["employee_id"]
            if row["error"]:
                failed.append({"employee_id": employee_id, "error": row["error"]})
                continue
            try:
                self.save(employee_id, month)
            except (KeyError, ValidationError) as exc:
                logger.warning("Could not save payroll for %s in %s: %s", employee_id, month, exc)
                failed.append({"employee_id": employee_id, "error": str(exc)})
                continue
            saved.append(employee_id)
        return {"month": month, "saved": saved, "failed": failed}

    def saved_for_month(self, month: str) -> list[dict[str, Any]]:
        periods.parse_month(month)
        return self._repository.list_payrolls_for_month(month)

    def history(self, employee_id: str, month: str | None = None) -> list[dict[str, Any]]:
        records = self._repository.list_payrolls(employee_id)
        if month:
            periods.parse_month(month)
            records = [record for record in records if record.get("month") == month]
        records.sort(key=lambda record: periods.month_sort_key(record["month"]), reverse=True)
        return records

    def purge_older_than(self, months: int, *, today: date | None = None) -> dict[str, Any]:
        """Delete saved payrolls strictly older than ``months`` before ``today``."""

        if months < 0:
            raise ValidationError("older_than_months must not be negative")
        cutoff = periods.shift_month(periods.month_key(today or date.today()), -months)
        cutoff_key = periods.month_sort_key(cutoff)

        deleted = 0
        employee_ids = self._repository.list_employee_ids()
        for employee_id in employee_ids:
            for record in self._repository.list_payrolls(employee_id):
                if periods.month_sort_key(record["month"]) < cutoff_key:
                    self._repository.delete_payroll(employee_id, record["month"])
                    deleted += 1
        logger.info(
            "Payroll cleanup completed: %s old payrolls deleted across %s employees", deleted, len(employee_ids)
        )
        return {"cutoff": cutoff, "deleted": deleted, "employees": len(employee_ids)}

    def export_rows(self, month: str) -> list[dict[str, Any]]:
        """Sheet rows flattened for the exporters; rows with errors are left out."""

        rows = []
        for row in self.month_sheet(month):
            if row["breakdown"] is None:
                continue
            rows.append({"name": row["name"], "designation": row["designation"], **row["breakdown"]})
        return rows
