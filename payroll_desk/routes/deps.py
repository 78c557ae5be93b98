from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from fastapi import Depends, HTTPException, Request, status

from payroll_desk.application import Services
from payroll_desk.core.validation import DuplicateEmployeeError, ValidationError


def get_services(request: Request) -> Services:
    return request.app.state.services


def bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def require_admin(request: Request, services: Services = Depends(get_services)) -> dict[str, str]:
    user = services.auth.resolve(bearer_token(request))
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


@contextmanager
def domain_errors() -> Iterator[None]:
    """Translate service-layer exceptions into HTTP errors."""

    try:
        yield
    except DuplicateEmployeeError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except KeyError as exc:
        missing = exc.args[0] if exc.args else "record"
        raise HTTPException(status_code=404, detail=f"{missing} not found") from exc
