from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from payroll_desk.application import Services
from payroll_desk.application.auth import InvalidCredentialsError
from payroll_desk.routes.deps import bearer_token, get_services, require_admin

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
async def login(payload: dict, services: Services = Depends(get_services)) -> dict:
    email = str(payload.get("email") or "").strip()
    password = str(payload.get("password") or "")
    if not email or not password:
        raise HTTPException(status_code=400, detail="email and password are required")
    try:
        return services.auth.login(email, password)
    except InvalidCredentialsError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc


@router.get("/session")
async def current_session(user: dict = Depends(require_admin)) -> dict:
    return {"user": user}


@router.post("/logout")
async def logout(
    request: Request,
    services: Services = Depends(get_services),
    user: dict = Depends(require_admin),
) -> dict:
    services.auth.logout(bearer_token(request) or "")
    return {"logged_out": user["email"]}
