from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator

from core.exceptions import FieldError, WaitlistValidationError
from utils.sanitization import sanitize_text


def _normalize_text(value: str) -> str:
    return " ".join(value.strip().split())


class WaitlistEntryCreate(BaseModel):
    """Validated signup input. Built from the raw body by ``validate_waitlist_entry``."""

    model_config = ConfigDict(frozen=True)

    full_name: str = Field(alias="fullName", min_length=1, max_length=120)
    email: EmailStr
    company: str | None = Field(default=None, max_length=120)

    @field_validator("full_name", mode="before")
    @classmethod
    def normalize_full_name(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        return sanitize_text(_normalize_text(value))

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        return value.strip().lower()

    @field_validator("company", mode="before")
    @classmethod
    def normalize_company(cls, value: Any) -> Any:
        if value is None or not isinstance(value, str):
            return value
        cleaned = sanitize_text(_normalize_text(value))
        return cleaned or None


class StoredWaitlistEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    full_name: str
    email: str
    company: str | None = None
    created_at: datetime | None = None


class WaitlistEntryOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    full_name: str = Field(alias="fullName")
    email: str
    company: str | None = None


class WaitlistJoinResponse(BaseModel):
    message: str
    entry: WaitlistEntryOut


class WaitlistCountResponse(BaseModel):
    count: int


def _field_path(loc: tuple[int | str, ...]) -> str:
    if not loc:
        return "body"
    return ".".join(str(part) for part in loc)


def validate_waitlist_entry(raw: Any) -> WaitlistEntryCreate:
    """Validate a raw signup body.

    Returns the normalized entry, or raises ``WaitlistValidationError`` listing
    every failing field with its wire name (``fullName``, ``email``, ``company``).
    A body that is not a JSON object is reported against ``body``.
    """
    try:
        return WaitlistEntryCreate.model_validate(raw)
    except ValidationError as exc:
        errors = [FieldError(field=_field_path(err["loc"]), message=err["msg"]) for err in exc.errors()]
        raise WaitlistValidationError(errors) from exc
