"""
Tests for contact submission validation.
"""

import pytest

from comingsoon.core.exceptions import ContactValidationError
from comingsoon.core.validation import (
    INVALID_FORMAT,
    INVALID_TYPE,
    REQUIRED,
    is_valid_email,
    sanitize_field,
    validate_submission,
)


def errors_for(payload):
    with pytest.raises(ContactValidationError) as exc_info:
        validate_submission(payload)
    return exc_info.value.errors


class TestValidateSubmission:
    """Test required fields, format check and sanitization."""

    def test_valid_payload_is_trimmed(self):
        """Test that surrounding whitespace is removed from every field."""
        result = validate_submission({
            "name": "  Ann Lee ",
            "email": " ann@example.com\n",
            "message": "\n Hello!\n\n",
        })

        assert result.name == "Ann Lee"
        assert result.email == "ann@example.com"
        assert result.message == "Hello!"

    def test_empty_name_only_reports_name(self):
        errors = errors_for({"name": "", "email": "ann@example.com", "message": "Hi"})

        assert errors == {"name": REQUIRED}

    @pytest.mark.parametrize("field", ["name", "email", "message"])
    def test_blank_field_is_required(self, field):
        payload = {"name": "Ann", "email": "ann@example.com", "message": "Hi"}
        payload[field] = "   \t\n"

        assert errors_for(payload) == {field: REQUIRED}

    def test_all_missing_fields_reported_together(self):
        errors = errors_for({})

        assert errors == {"name": REQUIRED, "email": REQUIRED, "message": REQUIRED}

    def test_non_dict_payload_reports_every_field(self):
        errors = errors_for(["Ann", "ann@example.com", "Hi"])

        assert set(errors) == {"name", "email", "message"}

    def test_null_values_are_required(self):
        errors = errors_for({"name": None, "email": None, "message": None})

        assert errors == {"name": REQUIRED, "email": REQUIRED, "message": REQUIRED}

    def test_non_string_values_are_rejected(self):
        errors = errors_for({"name": 42, "email": "ann@example.com", "message": ["Hi"]})

        assert errors == {"name": INVALID_TYPE, "message": INVALID_TYPE}

    @pytest.mark.parametrize("email", ["foo", "foo@bar", "@bar.com", "foo@.com x", "a b@c.de", "foo@bar."])
    def test_malformed_email_is_invalid_format(self, email):
        errors = errors_for({"name": "Ann", "email": email, "message": "Hi"})

        assert errors == {"email": INVALID_FORMAT}

    def test_missing_fields_and_bad_email_reported_together(self):
        errors = errors_for({"name": "", "email": "foo", "message": ""})

        assert errors == {"name": REQUIRED, "email": INVALID_FORMAT, "message": REQUIRED}

    def test_long_fields_are_truncated_not_rejected(self):
        result = validate_submission({
            "name": "n" * 150,
            "email": "ann@example.com",
            "message": "m" * 2500,
        })

        assert result.name == "n" * 100
        assert result.message == "m" * 2000

    def test_long_email_is_truncated_before_format_check(self):
        email = "a" * 95 + "@example.com"  # 107 characters
        errors = errors_for({"name": "Ann", "email": email, "message": "Hi"})

        # Truncation cuts into the domain, leaving no dot after the @
        assert errors == {"email": INVALID_FORMAT}

        ok = validate_submission({"name": "Ann", "email": "a" * 80 + "@example.com", "message": "Hi"})
        assert len(ok.email) == 92

    def test_html_is_not_escaped_at_validation(self):
        result = validate_submission({
            "name": "<b>Ann</b>",
            "email": "ann@example.com",
            "message": "1 < 2 & 3 > 2",
        })

        assert result.name == "<b>Ann</b>"
        assert result.message == "1 < 2 & 3 > 2"

    def test_extra_fields_are_ignored(self):
        result = validate_submission({
            "name": "Ann",
            "email": "ann@example.com",
            "message": "Hi",
            "locale": "fr",
        })

        assert result.model_dump() == {"name": "Ann", "email": "ann@example.com", "message": "Hi"}


class TestIdempotence:
    """Re-validating a sanitized record must give the same record."""

    @pytest.mark.parametrize("payload", [
        {"name": "Ann Lee", "email": "ann@example.com", "message": "Hello!"},
        {"name": " " + "x" * 99 + "  tail", "email": "ann@example.com", "message": "Hi"},
        {"name": "Ann", "email": "ann@example.com", "message": "m" * 1999 + " more text"},
        {"name": "Ann", "email": "  " + "a" * 80 + "@example.com  ", "message": "line\n\nline"},
    ])
    def test_revalidation_is_stable(self, payload):
        first = validate_submission(payload)
        second = validate_submission(first.model_dump())

        assert second == first

    def test_truncation_never_leaves_trailing_whitespace(self):
        result = validate_submission({
            "name": "x" * 99 + " y",
            "email": "ann@example.com",
            "message": "Hi",
        })

        assert result.name == "x" * 99


class TestHelpers:

    def test_sanitize_field(self):
        assert sanitize_field("  abcdef  ", 3) == "abc"
        assert sanitize_field("ab cd", 3) == "ab"

    @pytest.mark.parametrize("email,expected", [
        ("ann@example.com", True),
        ("first.last+tag@sub.example.co.uk", True),
        ("ann@localhost", False),
        ("ann@@example.com", False),
        ("", False),
    ])
    def test_is_valid_email(self, email, expected):
        assert is_valid_email(email) is expected
