from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from payroll_desk.application import Services
from payroll_desk.routes.deps import domain_errors, get_services, require_admin

router = APIRouter(tags=["dashboard"], dependencies=[Depends(require_admin)])


@router.get("/dashboard")
async def dashboard(
    on: date | None = Query(default=None),
    services: Services = Depends(get_services),
) -> dict:
    return services.dashboard.summary(on)


@router.get("/announcements")
async def list_announcements(services: Services = Depends(get_services)) -> dict:
    return {"items": services.dashboard.list_announcements()}


@router.post("/announcements")
async def post_announcement(payload: dict, services: Services = Depends(get_services)) -> dict:
    message = payload.get("message")
    if not isinstance(message, str):
        raise HTTPException(status_code=400, detail="message is required")
    with domain_errors():
        return services.dashboard.post_announcement(message)


@router.delete("/announcements/{announcement_id}")
async def delete_announcement(announcement_id: str, services: Services = Depends(get_services)) -> dict:
    with domain_errors():
        services.dashboard.delete_announcement(announcement_id)
    return {"deleted": announcement_id}
