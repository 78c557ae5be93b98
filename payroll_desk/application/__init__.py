"""Application services."""

from .container import Services, build_services

__all__ = [
    "Services",
    "build_services",
]
