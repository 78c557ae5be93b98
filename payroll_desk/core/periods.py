"""Month keys (``MM-YYYY``) used to address payroll periods."""
from __future__ import annotations

import calendar
import re
from datetime import date

from payroll_desk.core.validation import ValidationError

MONTH_PATTERN = re.compile(r"^(0[1-9]|1[0-2])-(\d{4})$")


def parse_month(value: str) -> tuple[int, int]:
    """Split a ``MM-YYYY`` key into ``(year, month)``."""

    match = MONTH_PATTERN.fullmatch(str(value or "").strip())
    if not match:
        raise ValidationError("month must use the MM-YYYY format")
    return int(match.group(2)), int(match.group(1))


def format_month(year: int, month: int) -> str:
    return f"{month:02d}-{year:04d}"


def month_key(day: date) -> str:
    return format_month(day.year, day.month)


def days_in_month(value: str) -> int:
    year, month = parse_month(value)
    return calendar.monthrange(year, month)[1]


def contains(value: str, day: date) -> bool:
    year, month = parse_month(value)
    return day.year == year and day.month == month


def shift_month(value: str, delta: int) -> str:
    year, month = parse_month(value)
    index = year * 12 + (month - 1) + delta
    return format_month(index // 12, index % 12 + 1)


def month_sort_key(value: str) -> tuple[int, int]:
    """Chronological ordering key; ``MM-YYYY`` strings do not sort by time."""

    return parse_month(value)
