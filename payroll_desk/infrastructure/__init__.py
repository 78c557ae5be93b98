"""Infrastructure layer exports."""

from .mailer import HttpWelcomeMailer, NoOpMailer, WelcomeMailer, build_welcome_message
from .store import HRRepository, InMemoryHRRepository

__all__ = [
    "HRRepository",
    "InMemoryHRRepository",
    "HttpWelcomeMailer",
    "NoOpMailer",
    "WelcomeMailer",
    "build_welcome_message",
]
