from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from payroll_desk.application import build_services
from payroll_desk.core.config import Settings, configure_logging
from payroll_desk.infrastructure import HRRepository, WelcomeMailer
from payroll_desk.routes import attendance, auth, dashboard, employees, leaves, payroll

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    repository: HRRepository | None = None,
    mailer: WelcomeMailer | None = None,
) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings)
    services = build_services(settings, repository=repository, mailer=mailer)
    if settings.admin_email is None:
        logger.warning("No admin credential configured; sign-in is disabled")

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        close = getattr(services.mailer, "close", None)
        if callable(close):
            close()

    app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)
    app.state.services = services
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth.router, prefix="/api")
    app.include_router(employees.router, prefix="/api")
    app.include_router(attendance.router, prefix="/api")
    app.include_router(leaves.router, prefix="/api")
    app.include_router(payroll.router, prefix="/api")
    app.include_router(dashboard.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Provide a lightweight landing page for container checks."""
        return JSONResponse(
            {
                "message": settings.app_name,
                "docs": "/docs",
                "login": "/api/auth/login",
            }
        )

    return app


app = create_app()
