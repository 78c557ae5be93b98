from __future__ import annotations

from datetime import date

from fastapi import APIRouter, BackgroundTasks, Depends, Query

from payroll_desk.application import Services
from payroll_desk.core.schema import EmployeeCreate, EmployeeUpdate
from payroll_desk.routes.deps import domain_errors, get_services, require_admin

router = APIRouter(prefix="/employees", tags=["employees"], dependencies=[Depends(require_admin)])


@router.get("")
async def list_employees(
    on: date | None = Query(default=None),
    services: Services = Depends(get_services),
) -> dict:
    return {"items": services.employees.list_employees(on)}


@router.post("")
async def create_employee(
    payload: EmployeeCreate,
    background_tasks: BackgroundTasks,
    services: Services = Depends(get_services),
) -> dict:
    """Register an employee and queue the welcome e-mail."""
    with domain_errors():
        employee = services.employees.create_employee(payload)
    background_tasks.add_task(services.mailer.send_welcome, employee)
    return {"employee": employee, "welcome_email": "queued"}


@router.get("/{employee_id}")
async def get_employee(employee_id: str, services: Services = Depends(get_services)) -> dict:
    with domain_errors():
        return services.employees.get_employee(employee_id)


@router.patch("/{employee_id}")
async def update_employee(
    employee_id: str,
    payload: EmployeeUpdate,
    services: Services = Depends(get_services),
) -> dict:
    with domain_errors():
        return services.employees.update_employee(employee_id, payload)


@router.delete("/{employee_id}")
async def delete_employee(employee_id: str, services: Services = Depends(get_services)) -> dict:
    with domain_errors():
        services.employees.delete_employee(employee_id)
    return {"deleted": employee_id}


@router.get("/{employee_id}/payroll")
async def payroll_history(
    employee_id: str,
    month: str | None = Query(default=None),
    services: Services = Depends(get_services),
) -> dict:
    with domain_errors():
        items = services.payroll.history(employee_id, month)
    return {"employee_id": employee_id, "items": items}
