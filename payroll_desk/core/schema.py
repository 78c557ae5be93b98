from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, constr

MonthKey = constr(pattern=r"^(0[1-9]|1[0-2])-\d{4}$")
LeaveStatus = Literal["Pending", "Approved", "Rejected"]


class EmployeeCreate(BaseModel):
    employee_id: str
    name: str
    email: str
    designation: str = ""
    custom_designation: str | None = None
    date_of_joining: str
    epfuan_number: str = ""
    esic_number: str = ""
    base_salary: Decimal = Field(default=Decimal("0"), ge=0)
    special_salary: Decimal = Field(default=Decimal("0"), ge=0)


class EmployeeUpdate(BaseModel):
    name: str | None = None
    email: str | None = None
    designation: str | None = None
    custom_designation: str | None = None
    base_salary: Decimal | None = Field(default=None, ge=0)
    special_salary: Decimal | None = Field(default=None, ge=0)
    epfuan_number: str | None = None
    esic_number: str | None = None
    date_of_joining: str | None = None
    password: str | None = None


class EmployeeProfile(BaseModel):
    employee_id: str
    name: str
    email: str
    designation: str
    base_salary: Decimal = Decimal("0")
    special_salary: Decimal = Decimal("0")
    epfuan_number: str = ""
    esic_number: str = ""
    date_of_joining: str = ""
    password: str = ""
    created_at: datetime | None = None


class EmployeeSalaryBasis(BaseModel):
    base_salary: Decimal = Decimal("0")
    special_salary: Decimal = Decimal("0")


class AttendanceCount(BaseModel):
    working_days: int
    reported_days: int = 0


class LocationFix(BaseModel):
    address: str = ""
    latitude: float
    longitude: float
    accuracy: float = 0.0
    timestamp: datetime


class RoutineEntry(BaseModel):
    routines: list[str] = Field(default_factory=list)
    timestamp: datetime


class WorkSession(BaseModel):
    check_in_time: datetime | None = None
    check_out_time: datetime | None = None
    duration_minutes: int = 0


class LeaveRequestCreate(BaseModel):
    cause: str
    duration: int = Field(gt=0)
    leave_type: str
    start_date: date
    end_date: date


class LeaveRequest(LeaveRequestCreate):
    id: str
    employee_id: str
    status: LeaveStatus = "Pending"
    submitted_at: date


class PayrollBreakdown(BaseModel):
    """Computed payroll for one employee-month; numbers are kept as text."""

    employee_id: str
    month: MonthKey
    working_days: str
    reported_days: str
    basic: str
    special_pay: str
    pay_scale: str
    da: str
    hra: str
    gross_earning: str
    provident_fund: str
    professional: str
    advance: str
    tds: str
    esic: str
    total_deductions: str
    net_pay: str
    cpf: str
    esic_contribution: str
    medical_contribution: str
    created_at: datetime | None = None


class Announcement(BaseModel):
    id: str
    message: str
    date: date
    timestamp: datetime
