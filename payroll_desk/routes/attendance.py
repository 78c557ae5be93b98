from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from payroll_desk.application import Services
from payroll_desk.core.schema import LocationFix, RoutineEntry, WorkSession
from payroll_desk.routes.deps import domain_errors, get_services, require_admin

router = APIRouter(tags=["attendance"], dependencies=[Depends(require_admin)])


@router.get("/attendance/today")
async def today_attendance(
    on: date | None = Query(default=None),
    services: Services = Depends(get_services),
) -> dict:
    rows = services.attendance.today_overview(on)
    return {
        "date": on or date.today(),
        "items": rows,
        "stats": services.attendance.summarise(rows),
    }


@router.get("/employees/{employee_id}/attendance")
async def attendance_history(employee_id: str, services: Services = Depends(get_services)) -> dict:
    with domain_errors():
        items = services.attendance.employee_history(employee_id)
    return {"employee_id": employee_id, "items": items}


@router.get("/employees/{employee_id}/attendance/{month}/count")
async def attendance_count(employee_id: str, month: str, services: Services = Depends(get_services)) -> dict:
    with domain_errors():
        count = services.attendance.attendance_count(employee_id, month)
    return {"employee_id": employee_id, "month": month, **count.model_dump()}


@router.post("/employees/{employee_id}/attendance/{day}/locations")
async def add_location(
    employee_id: str,
    day: date,
    payload: LocationFix,
    services: Services = Depends(get_services),
) -> dict:
    with domain_errors():
        services.attendance.record_location(employee_id, day, payload)
    return {"employee_id": employee_id, "day": day, "recorded": "location"}


@router.post("/employees/{employee_id}/attendance/{day}/routines")
async def add_routine(
    employee_id: str,
    day: date,
    payload: RoutineEntry,
    services: Services = Depends(get_services),
) -> dict:
    with domain_errors():
        services.attendance.record_routine(employee_id, day, payload)
    return {"employee_id": employee_id, "day": day, "recorded": "routine"}


@router.post("/employees/{employee_id}/attendance/{day}/work-sessions")
async def add_work_session(
    employee_id: str,
    day: date,
    payload: WorkSession,
    services: Services = Depends(get_services),
) -> dict:
    with domain_errors():
        services.attendance.record_work_session(employee_id, day, payload)
    return {"employee_id": employee_id, "day": day, "recorded": "work_session"}
