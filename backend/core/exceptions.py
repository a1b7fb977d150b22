"""
Domain exceptions for the waitlist service
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class WaitlistAppError(Exception):
    """Base application exception"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class WaitlistValidationError(WaitlistAppError):
    """Raised when signup input is missing or malformed"""

    def __init__(self, errors: list[FieldError]):
        super().__init__("Validation error")
        self.errors = errors


class DuplicateEmailError(WaitlistAppError):
    """Raised when the email is already on the waitlist"""

    def __init__(self, email: str):
        super().__init__("This email is already on the waitlist")
        self.email = email


class StorageError(WaitlistAppError):
    """Raised when the persistence layer fails"""


class EmailConflictError(StorageError):
    """Raised when the storage layer's unique email constraint rejects a write"""
