"""Announcements board and the dashboard summary."""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

from payroll_desk.application.attendance import AttendanceService
from payroll_desk.core.schema import Announcement
from payroll_desk.core.validation import require_text
from payroll_desk.infrastructure import HRRepository


class DashboardService:
    def __init__(self, repository: HRRepository, attendance: AttendanceService) -> None:
        self._repository = repository
        self._attendance = attendance

    def list_announcements(self) -> list[dict[str, Any]]:
        items = self._repository.list_announcements()
        items.sort(key=lambda item: (item["timestamp"], item["id"]), reverse=True)
        return items

    def post_announcement(self, message: str) -> dict[str, Any]:
        now = datetime.now(timezone.utc)
        announcement = Announcement(
            id=self._repository.next_id("announcement"),
            message=require_text(message, "Announcement"),
            date=now.date(),
            timestamp=now,
        )
        record = announcement.model_dump()
        self._repository.add_announcement(record)
        return record

    def delete_announcement(self, announcement_id: str) -> None:
        self._repository.delete_announcement(announcement_id)

    def summary(self, on: date | None = None, *, announcements: int = 2) -> dict[str, Any]:
        rows = self._attendance.today_overview(on)
        return {
            "date": on or date.today(),
            "employee_count": len(rows),
            "attendance": self._attendance.summarise(rows),
            "announcements": self.list_announcements()[:announcements],
        }
