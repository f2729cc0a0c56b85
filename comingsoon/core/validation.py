"""
Server-side validation for contact form submissions.

The landing page repeats these checks in the browser for responsiveness;
this module is the authoritative copy. The field rules themselves live on
the ContactSubmission model; this module turns pydantic's errors into the
short per-field codes returned to the browser.
"""

from typing import Any, Dict

from pydantic import ValidationError

from comingsoon.core.exceptions import ContactValidationError
from comingsoon.models.contact import (
    EMAIL_PATTERN,
    FIELD_LIMITS,
    ContactSubmission,
    is_valid_email,
    sanitize_field,
)

__all__ = [
    "EMAIL_PATTERN",
    "FIELD_LIMITS",
    "INVALID_FORMAT",
    "INVALID_TYPE",
    "REQUIRED",
    "is_valid_email",
    "sanitize_field",
    "validate_submission",
]

REQUIRED = "required"
INVALID_TYPE = "invalid type"
INVALID_FORMAT = "invalid format"


def _error_code(error: Dict[str, Any]) -> str:
    error_type = error["type"]
    if error_type in ("missing", "string_too_short"):
        return REQUIRED
    if error_type == "value_error":
        return INVALID_FORMAT
    if error.get("input") is None:
        return REQUIRED
    return INVALID_TYPE


def validate_submission(payload: Any) -> ContactSubmission:
    """
    Validate and sanitize an untrusted contact form payload.

    Every field is checked before reporting, so the caller gets all
    problems at once.

    The email shape is checked on the trimmed and 100-character-capped
    value, not on the raw input. A record built here therefore always
    validates again unchanged. The cost is that a well-formed address
    longer than 100 characters is rejected with "invalid format" when the
    cut lands inside its domain, instead of being truncated and accepted.

    Args:
        payload: Decoded request body, expected to be a dict with
            name, email and message strings

    Returns:
        ContactSubmission: Trimmed and length-capped submission

    Raises:
        ContactValidationError: with a field -> error code mapping
    """
    if not isinstance(payload, dict):
        payload = {}

    fields = {field: payload.get(field) for field in FIELD_LIMITS if field in payload}

    try:
        return ContactSubmission.model_validate(fields)
    except ValidationError as e:
        errors: Dict[str, str] = {}
        for error in e.errors():
            field = error["loc"][0]
            errors.setdefault(field, _error_code(error))
        raise ContactValidationError(errors)
