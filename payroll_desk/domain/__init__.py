"""Domain layer definitions."""

from .records import AdminSession, DailyRecord, EmployeeDocument

__all__ = [
    "AdminSession",
    "DailyRecord",
    "EmployeeDocument",
]
