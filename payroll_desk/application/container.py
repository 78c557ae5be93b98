"""Wiring of the application services around one repository."""
from __future__ import annotations

from dataclasses import dataclass

from payroll_desk.core.config import Settings
from payroll_desk.infrastructure import HRRepository, HttpWelcomeMailer, InMemoryHRRepository, NoOpMailer, WelcomeMailer

from .attendance import AttendanceService
from .auth import AuthService
from .dashboard import DashboardService
from .employees import EmployeeService
from .leaves import LeaveService
from .payroll import PayrollService


@dataclass(slots=True)
class Services:
    repository: HRRepository
    mailer: WelcomeMailer
    auth: AuthService
    employees: EmployeeService
    attendance: AttendanceService
    leaves: LeaveService
    payroll: PayrollService
    dashboard: DashboardService


def build_services(
    settings: Settings,
    *,
    repository: HRRepository | None = None,
    mailer: WelcomeMailer | None = None,
) -> Services:
    repository = repository if repository is not None else InMemoryHRRepository()
    if mailer is None:
        if settings.welcome_email_url:
            mailer = HttpWelcomeMailer(settings.welcome_email_url, timeout=settings.welcome_email_timeout)
        else:
            mailer = NoOpMailer()

    auth = AuthService(repository, ttl_days=settings.token_ttl_days)
    if settings.admin_email and settings.admin_password:
        auth.seed_credential(settings.admin_email, settings.admin_password, settings.admin_id)

    employees = EmployeeService(repository)
    attendance = AttendanceService(repository)
    return Services(
        repository=repository,
        mailer=mailer,
        auth=auth,
        employees=employees,
        attendance=attendance,
        leaves=LeaveService(repository),
        payroll=PayrollService(
            repository,
            employees,
            attendance,
            default_professional_tax=settings.default_professional_tax,
        ),
        dashboard=DashboardService(repository, attendance),
    )
