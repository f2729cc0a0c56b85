from pydantic import BaseModel, Field, ValidationInfo, field_validator
from typing import Dict, Optional
import re

# Deliberately permissive: something@something.something, no whitespace
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

FIELD_LIMITS = {
    "name": 100,
    "email": 100,
    "message": 2000,
}


def sanitize_field(value: str, limit: int) -> str:
    """Trim and cap a text field. Trimmed again after the cut so the result is stable."""
    return value.strip()[:limit].strip()


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value))


class ContactSubmission(BaseModel):
    """A validated, sanitized contact form submission"""
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)

    @field_validator("name", "email", "message", mode="before")
    @classmethod
    def trim_and_cap(cls, value, info: ValidationInfo):
        if isinstance(value, str):
            return sanitize_field(value, FIELD_LIMITS[info.field_name])
        return value

    @field_validator("email")
    @classmethod
    def check_email_format(cls, value: str) -> str:
        # Runs on the capped value
        if not is_valid_email(value):
            raise ValueError("invalid format")
        return value


class ContactSuccessResponse(BaseModel):
    message: str


class ContactErrorResponse(BaseModel):
    error: str
    errors: Optional[Dict[str, str]] = None
