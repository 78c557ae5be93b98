from __future__ import annotations

import re
from datetime import datetime

PRESET_DESIGNATIONS = (
    "Country Manager",
    "Sales Manager",
    "Service Engineer",
    "Account Officer Jr",
)
OTHER_DESIGNATION = "Other"

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ValidationError(Exception):
    """Raised when domain validation fails."""


class MissingProfessionalTaxError(ValidationError):
    """Raised when a payroll has no professional tax and no default applies."""


class DuplicateEmployeeError(ValidationError):
    """Raised when an employee id is already registered."""


def require_text(value: str | None, label: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{label} is required")
    return text


def validate_email(value: str | None) -> str:
    email = require_text(value, "Email address")
    if not _EMAIL_PATTERN.match(email):
        raise ValidationError("Email address is not valid")
    return email


def resolve_designation(designation: str | None, custom: str | None = None) -> str:
    """Return the final designation, honouring the ``Other`` escape hatch."""

    choice = (designation or "").strip()
    if choice == OTHER_DESIGNATION:
        custom_text = (custom or "").strip()
        if not custom_text:
            raise ValidationError('Custom designation is required when "Other" is selected')
        return custom_text
    if not choice:
        raise ValidationError("Please select a designation")
    if choice not in PRESET_DESIGNATIONS:
        raise ValidationError(f"Unknown designation: {choice}")
    return choice


def parse_joining_date(value: str | None) -> str:
    """Convert a ``DD/MM/YYYY`` date of joining into ISO ``YYYY-MM-DD``."""

    text = require_text(value, "Date of joining")
    try:
        parsed = datetime.strptime(text, "%d/%m/%Y")
    except ValueError as exc:
        raise ValidationError("Please enter date in DD/MM/YYYY format") from exc
    return parsed.date().isoformat()
