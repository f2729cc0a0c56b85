"""
Error types raised along the contact submission path.

Each maps to one HTTP outcome in the contact endpoint:
validation -> 400, configuration -> 500, delivery -> 500.
"""

from typing import Dict, List


class ContactRelayError(Exception):
    """Base class for contact relay failures."""


class ContactValidationError(ContactRelayError):
    """Submission failed validation. `errors` maps field name to error code."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__(f"Invalid contact submission: {', '.join(sorted(self.errors))}")


class RelayConfigurationError(ContactRelayError):
    """SMTP relay settings are incomplete or malformed."""

    def __init__(self, missing: List[str]):
        # Only setting names are kept, never their values
        self.missing = list(missing)
        super().__init__(f"SMTP relay configuration is incomplete: {', '.join(self.missing)}")


class RelayDeliveryError(ContactRelayError):
    """The relay rejected the message or could not be reached."""
