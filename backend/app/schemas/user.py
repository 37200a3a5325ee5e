"""User Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - Wire format is camelCase (alias_generator); snake_case accepted on input
    - UserCreate: firstName/lastName 1-50 chars after strip, email required and well-formed
    - UserUpdate: every field optional; blank strings pass validation so the
      repository can apply presence rules (blank name/email = no change)
    - Phone numbers: digits, spaces and + ( ) - . only

Design Decisions:
    - field_validator for format checks instead of Field(pattern=...): update
      requests must accept "" where create requests reject it
"""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_PHONE_RE = re.compile(r"^[0-9+().\-\s]*$")


class CamelModel(BaseModel):
    """Base for every schema that crosses the HTTP boundary."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )


def _check_email(v: str) -> str:
    if not _EMAIL_RE.match(v.strip()):
        raise ValueError("Invalid email format")
    return v


def _check_phone(v: str) -> str:
    if not _PHONE_RE.match(v):
        raise ValueError("Invalid phone number format")
    return v


class UserCreate(CamelModel):
    """User creation — required names and email, optional contact/org fields."""
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    email: str = Field(min_length=3, max_length=100)
    phone_number: str | None = Field(None, max_length=25)
    department: str | None = Field(None, max_length=100)
    position: str | None = Field(None, max_length=100)

    @field_validator("first_name", "last_name")
    @classmethod
    def reject_blank_names(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name cannot be empty or whitespace")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, v: str | None) -> str | None:
        return v if v is None else _check_phone(v)


class UserUpdate(CamelModel):
    """Partial user update — None means the field was not supplied."""
    first_name: str | None = Field(None, max_length=50)
    last_name: str | None = Field(None, max_length=50)
    email: str | None = Field(None, max_length=100)
    phone_number: str | None = Field(None, max_length=25)
    department: str | None = Field(None, max_length=100)
    position: str | None = Field(None, max_length=100)
    is_active: bool | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return v
        return _check_email(v)

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, v: str | None) -> str | None:
        return v if v is None else _check_phone(v)


class UserResponse(CamelModel):
    """Public-facing user record."""
    id: int
    first_name: str
    last_name: str
    email: str
    phone_number: str | None = None
    department: str | None = None
    position: str | None = None
    created_at: datetime
    updated_at: datetime | None = None
    is_active: bool = True


# --- Errors ------------------------------------------------------------------

class ErrorDetail(BaseModel):
    """One field-level validation failure."""
    field: str
    message: str
    type: str


class ErrorResponse(CamelModel):
    """Structured error body written by every stage and handler."""
    error: str
    message: str
    request_id: str
    correlation_id: str | None = None
    timestamp: datetime
    details: list[ErrorDetail] | None = None
