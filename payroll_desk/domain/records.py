"""Stored documents for the HR store."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any


@dataclass(slots=True)
class DailyRecord:
    """Everything the field app reported for one employee on one day."""

    day: date
    locations: list[dict[str, Any]] = field(default_factory=list)
    routines: list[dict[str, Any]] = field(default_factory=list)
    work_sessions: list[dict[str, Any]] = field(default_factory=list)


@dataclass(slots=True)
class EmployeeDocument:
    """An employee profile together with its nested collections."""

    employee_id: str
    profile: dict[str, Any]
    daily: dict[date, DailyRecord] = field(default_factory=dict)
    leaves: dict[str, dict[str, Any]] = field(default_factory=dict)
    payroll: dict[str, dict[str, Any]] = field(default_factory=dict)


@dataclass(slots=True)
class AdminSession:
    token: str
    email: str
    admin_id: str
    expires_at: datetime
