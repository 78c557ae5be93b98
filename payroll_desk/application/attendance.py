"""Daily attendance and location tracking views."""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any

from payroll_desk.core import periods
from payroll_desk.core.schema import AttendanceCount, LocationFix, RoutineEntry, WorkSession
from payroll_desk.infrastructure import HRRepository

logger = logging.getLogger(__name__)

STATUS_ORDER = {"present": 0, "leave": 1, "absent": 2}


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def latest_location(record: dict[str, Any] | None) -> dict[str, Any] | None:
    """Most recent location fix of a day record, if any."""

    if not record or not record.get("locations"):
        return None
    return max(record["locations"], key=lambda item: _as_utc(item["timestamp"]))


def _covering_leave(leaves: list[dict[str, Any]], day: date) -> dict[str, Any] | None:
    for leave in leaves:
        if leave["start_date"] <= day <= leave["end_date"]:
            return leave
    return None


class AttendanceService:
    """Reads and records the per-day data reported by the field app."""

    def __init__(self, repository: HRRepository) -> None:
        self._repository = repository

    # ------------------------------------------------------------------
    # ingestion
    # ------------------------------------------------------------------
    def record_location(self, employee_id: str, day: date, fix: LocationFix) -> None:
        self._repository.append_daily_entry(employee_id, day, "locations", fix.model_dump())

    def record_routine(self, employee_id: str, day: date, entry: RoutineEntry) -> None:
        self._repository.append_daily_entry(employee_id, day, "routines", entry.model_dump())

    def record_work_session(self, employee_id: str, day: date, session: WorkSession) -> None:
        data = session.model_dump()
        if not data["duration_minutes"] and session.check_in_time and session.check_out_time:
            elapsed = _as_utc(session.check_out_time) - _as_utc(session.check_in_time)
            data["duration_minutes"] = max(int(elapsed.total_seconds() // 60), 0)
        self._repository.append_daily_entry(employee_id, day, "work_sessions", data)

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------
    def attendance_count(self, employee_id: str, month: str) -> AttendanceCount:
        working_days = periods.days_in_month(month)
        reported = sum(
            1 for record in self._repository.list_daily_records(employee_id) if periods.contains(month, record["day"])
        )
        return AttendanceCount(working_days=working_days, reported_days=reported)

    def employee_history(self, employee_id: str) -> list[dict[str, Any]]:
        records = self._repository.list_daily_records(employee_id)
        records.sort(key=lambda record: record["day"], reverse=True)
        return records

    def today_overview(self, on: date | None = None) -> list[dict[str, Any]]:
        day = on or date.today()
        rows: list[dict[str, Any]] = []
        for employee_id in self._repository.list_employee_ids():
            profile = self._repository.get_employee(employee_id)
            if profile is None:
                logger.warning("Details not found for employee %s", employee_id)
                rows.append(
                    {
                        "employee_id": employee_id,
                        "name": "Unknown Employee",
                        "email": "",
                        "designation": "No Designation",
                        "location": None,
                        "status": "absent",
                        "notes": "Error fetching employee data",
                        "checked_in": False,
                        "checked_out": False,
                    }
                )
                continue

            record = self._repository.get_daily_record(employee_id, day)
            sessions = record["work_sessions"] if record else []
            if record is not None:
                status, notes = "present", "Daily data exists"
            else:
                leave = _covering_leave(self._repository.list_leaves(employee_id, "Approved"), day)
                if leave is not None:
                    status, notes = "leave", f"{leave['leave_type']} leave"
                else:
                    status, notes = "absent", "No attendance record found"

            rows.append(
                {
                    "employee_id": employee_id,
                    "name": profile.get("name", ""),
                    "email": profile.get("email", ""),
                    "designation": profile.get("designation", ""),
                    "location": latest_location(record),
                    "status": status,
                    "notes": notes,
                    "checked_in": any(item.get("check_in_time") for item in sessions),
                    "checked_out": any(item.get("check_out_time") for item in sessions),
                }
            )

        rows.sort(key=lambda row: STATUS_ORDER[row["status"]])
        return rows

    def today_stats(self, on: date | None = None) -> dict[str, int]:
        return self.summarise(self.today_overview(on))

    @staticmethod
    def summarise(rows: list[dict[str, Any]]) -> dict[str, int]:
        return {
            "total": len(rows),
            "present": sum(1 for row in rows if row["status"] == "present"),
            "on_leave": sum(1 for row in rows if row["status"] == "leave"),
            "absent": sum(1 for row in rows if row["status"] == "absent"),
            "checked_in": sum(1 for row in rows if row["checked_in"]),
            "checked_out": sum(1 for row in rows if row["checked_out"]),
        }
