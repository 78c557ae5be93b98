from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from payroll_desk.application import Services
from payroll_desk.core.schema import LeaveRequestCreate
from payroll_desk.routes.deps import domain_errors, get_services, require_admin

router = APIRouter(tags=["leaves"], dependencies=[Depends(require_admin)])


@router.get("/leaves")
async def list_leave_requests(
    status: str = Query(default="Pending"),
    search: str | None = Query(default=None),
    services: Services = Depends(get_services),
) -> dict:
    selected = None if status == "all" else status
    return {"items": services.leaves.list_requests(selected, search)}


@router.get("/leaves/analytics")
async def leave_analytics(
    year: int | None = Query(default=None),
    services: Services = Depends(get_services),
) -> dict:
    return services.leaves.leave_analytics(year or date.today().year)


@router.post("/employees/{employee_id}/leaves")
async def submit_leave(
    employee_id: str,
    payload: LeaveRequestCreate,
    services: Services = Depends(get_services),
) -> dict:
    with domain_errors():
        return services.leaves.submit_leave(employee_id, payload)


@router.post("/employees/{employee_id}/leaves/{leave_id}/status")
async def update_leave_status(
    employee_id: str,
    leave_id: str,
    payload: dict,
    services: Services = Depends(get_services),
) -> dict:
    status = payload.get("status")
    if not status:
        raise HTTPException(status_code=400, detail="status is required")
    with domain_errors():
        return services.leaves.update_status(employee_id, leave_id, str(status))
