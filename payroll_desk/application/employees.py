"""Employee record management."""
from __future__ import annotations

import logging
import secrets
import string
from datetime import date, datetime, timezone
from typing import Any

from payroll_desk.application.attendance import latest_location
from payroll_desk.core.schema import EmployeeCreate, EmployeeProfile, EmployeeSalaryBasis, EmployeeUpdate
from payroll_desk.core.validation import (
    DuplicateEmployeeError,
    parse_joining_date,
    require_text,
    resolve_designation,
    validate_email,
)
from payroll_desk.infrastructure import HRRepository

logger = logging.getLogger(__name__)

PASSWORD_ALPHABET = string.ascii_lowercase + string.digits
PASSWORD_LENGTH = 8


def generate_password() -> str:
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(PASSWORD_LENGTH))


class EmployeeService:
    """Create, read, update and remove employee profiles."""

    def __init__(self, repository: HRRepository) -> None:
        self._repository = repository

    def create_employee(self, payload: EmployeeCreate) -> dict[str, Any]:
        employee_id = require_text(payload.employee_id, "Employee ID")
        if self._repository.get_employee(employee_id) is not None:
            raise DuplicateEmployeeError(f"employee {employee_id} already exists")

        profile = EmployeeProfile(
            employee_id=employee_id,
            name=require_text(payload.name, "Employee name"),
            email=validate_email(payload.email),
            designation=resolve_designation(payload.designation, payload.custom_designation),
            base_salary=payload.base_salary,
            special_salary=payload.special_salary,
            epfuan_number=payload.epfuan_number.strip(),
            esic_number=payload.esic_number.strip(),
            date_of_joining=parse_joining_date(payload.date_of_joining),
            password=generate_password(),
            created_at=datetime.now(timezone.utc),
        )
        record = profile.model_dump()
        self._repository.add_employee(record)
        logger.info("Employee %s created", employee_id)
        return record

    def get_employee(self, employee_id: str) -> dict[str, Any]:
        profile = self._repository.get_employee(employee_id)
        if profile is None:
            raise KeyError(employee_id)
        return profile

    def list_employees(self, on: date | None = None) -> list[dict[str, Any]]:
        day = on or date.today()
        employees: list[dict[str, Any]] = []
        for employee_id in self._repository.list_employee_ids():
            profile = self._repository.get_employee(employee_id)
            if profile is None:
                continue
            profile["today_location"] = latest_location(self._repository.get_daily_record(employee_id, day))
            employees.append(profile)
        return employees

    def update_employee(self, employee_id: str, payload: EmployeeUpdate) -> dict[str, Any]:
        self.get_employee(employee_id)
        updates = payload.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in updates:
            updates["name"] = require_text(updates["name"], "Employee name")
        if "email" in updates:
            updates["email"] = validate_email(updates["email"])
        custom = updates.pop("custom_designation", None)
        if "designation" in updates:
            updates["designation"] = resolve_designation(updates["designation"], custom)
        if "date_of_joining" in updates:
            updates["date_of_joining"] = parse_joining_date(updates["date_of_joining"])
        if not updates:
            return self.get_employee(employee_id)
        profile = self._repository.update_employee(employee_id, updates)
        if {"base_salary", "special_salary"} & updates.keys():
            logger.info("Salary basis changed for employee %s", employee_id)
        return profile

    def delete_employee(self, employee_id: str) -> None:
        self._repository.delete_employee(employee_id)
        logger.info("Employee %s deleted with payroll, attendance and leave records", employee_id)

    def salary_basis(self, employee_id: str) -> EmployeeSalaryBasis:
        profile = self.get_employee(employee_id)
        return EmployeeSalaryBasis(
            base_salary=profile.get("base_salary") or 0,
            special_salary=profile.get("special_salary") or 0,
        )
