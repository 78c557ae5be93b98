from __future__ import annotations

import logging.config
from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PAYROLL_DESK_", env_file=".env", extra="ignore")

    app_name: str = "Payroll Desk API"
    cors_origins: str = ""

    admin_email: str | None = None
    admin_password: str | None = None
    admin_id: str = "admin"
    token_ttl_days: int = 7

    welcome_email_url: str | None = None
    welcome_email_timeout: float = 10.0

    # Applied to fresh payrolls that carry no professional tax of their own.
    # Unset it to make admins enter the amount for every employee.
    default_professional_tax: Decimal | None = Decimal("200")

    log_level: str = "INFO"
    log_file: str | None = None

    def cors_origin_list(self) -> list[str]:
        origins = [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
        return origins or ["http://localhost:3000", "http://127.0.0.1:3000"]


def build_logging_config(settings: Settings) -> dict:
    handlers: dict[str, dict] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "level": settings.log_level,
        },
    }
    if settings.log_file:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "standard",
            "filename": settings.log_file,
            "maxBytes": 1024 * 1024 * 5,
            "backupCount": 5,
            "level": settings.log_level,
            "encoding": "utf-8",
        }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"standard": {"format": LOG_FORMAT}},
        "handlers": handlers,
        "loggers": {
            "payroll_desk": {
                "handlers": list(handlers),
                "level": settings.log_level,
                "propagate": True,
            },
        },
    }


def configure_logging(settings: Settings) -> None:
    logging.config.dictConfig(build_logging_config(settings))
