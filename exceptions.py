"""Shared exceptions for the reservation backend."""

from typing import Iterable


class DomainError(Exception):
    """Base error carrying a client-facing message and an HTTP status code."""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ValidationError(DomainError):
    def __init__(self, message: str = "Missing required fields", missing: Iterable[str] = ()):
        self.missing = list(missing)
        if self.missing:
            message = f"{message}: {', '.join(self.missing)}"
        super().__init__(message, 400)


class NotFoundError(DomainError):
    def __init__(self, message: str = "Reservation not found"):
        super().__init__(message, 404)


class NotificationError(DomainError):
    """Email delivery failed. Caught by the notifier, never returned to a client."""

    def __init__(self, message: str):
        super().__init__(message, 502)


class InternalError(DomainError):
    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, 500)
