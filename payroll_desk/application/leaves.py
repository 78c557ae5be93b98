"""Leave request approval workflow."""
from __future__ import annotations

import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from payroll_desk.core.schema import LeaveRequest, LeaveRequestCreate
from payroll_desk.core.validation import ValidationError
from payroll_desk.infrastructure import HRRepository

logger = logging.getLogger(__name__)

DECISIONS = ("Approved", "Rejected")
MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class LeaveService:
    def __init__(self, repository: HRRepository) -> None:
        self._repository = repository

    def submit_leave(self, employee_id: str, payload: LeaveRequestCreate, *, today: date | None = None) -> dict[str, Any]:
        if payload.end_date < payload.start_date:
            raise ValidationError("end_date must not be before start_date")
        if self._repository.get_employee(employee_id) is None:
            raise KeyError(employee_id)
        leave = LeaveRequest(
            id=self._repository.next_id("leave"),
            employee_id=employee_id,
            submitted_at=today or date.today(),
            **payload.model_dump(),
        )
        record = leave.model_dump()
        self._repository.add_leave(employee_id, record)
        return record

    def list_requests(self, status: str | None = "Pending", search: str | None = None) -> list[dict[str, Any]]:
        """Leave requests across all employees, optionally filtered."""

        keyword = (search or "").strip().lower()
        requests: list[dict[str, Any]] = []
        for employee_id in self._repository.list_employee_ids():
            profile = self._repository.get_employee(employee_id) or {}
            for leave in self._repository.list_leaves(employee_id, status):
                leave["employee_name"] = profile.get("name", "")
                if keyword:
                    haystack = " ".join(
                        str(leave.get(key, "")) for key in ("employee_id", "employee_name", "leave_type", "cause")
                    ).lower()
                    if keyword not in haystack:
                        continue
                requests.append(leave)
        requests.sort(key=lambda item: (item["submitted_at"], item["id"]))
        return requests

    def update_status(self, employee_id: str, leave_id: str, status: str) -> dict[str, Any]:
        if status not in DECISIONS:
            raise ValidationError("status must be Approved or Rejected")
        leave = self._repository.update_leave(employee_id, leave_id, {"status": status})
        logger.info("Leave %s of employee %s marked %s", leave_id, employee_id, status)
        return leave

    def leave_analytics(self, year: int) -> dict[str, Any]:
        """Approved leave days per employee, bucketed by the month the leave starts.

        Month entries are keyed by employee id; ``employees`` carries the names.
        """

        per_employee: dict[str, list[int]] = {}
        names: dict[str, str] = {}
        for employee_id in self._repository.list_employee_ids():
            profile = self._repository.get_employee(employee_id) or {}
            names[employee_id] = profile.get("name") or employee_id
            buckets = per_employee.setdefault(employee_id, [0] * 12)
            for leave in self._repository.list_leaves(employee_id, "Approved"):
                start = leave["start_date"]
                if start.year == year:
                    buckets[start.month - 1] += int(leave["duration"])

        months = []
        for index, label in enumerate(MONTH_LABELS):
            entry: dict[str, Any] = {"name": label}
            for employee_id, buckets in per_employee.items():
                entry[employee_id] = buckets[index]
            months.append(entry)

        totals = []
        for employee_id, buckets in per_employee.items():
            total = sum(buckets)
            average = (Decimal(total) / 12).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
            totals.append(
                {
                    "employee_id": employee_id,
                    "name": names[employee_id],
                    "total_days": total,
                    "monthly_average": str(average),
                }
            )

        return {"year": year, "months": months, "employees": totals}
