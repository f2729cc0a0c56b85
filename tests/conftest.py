"""
Pytest configuration and fixtures for all tests.
"""

import os
import pytest

# Keep the import-time settings in comingsoon.main away from any real relay
for _name in ("SMTP_HOST", "SMTP_PORT", "SMTP_USER", "SMTP_PASSWORD", "SMTP_FROM_EMAIL",
              "CONTACT_RECIPIENT_EMAIL"):
    os.environ.pop(_name, None)
os.environ.setdefault('LOG_LEVEL', 'INFO')

from comingsoon.core.config import RelayConfig, Settings
from comingsoon.models.contact import ContactSubmission


def make_settings(**overrides) -> Settings:
    """Settings isolated from the process environment and any .env file."""
    values = {
        "smtp_host": "smtp.example.com",
        "smtp_port": "587",
        "smtp_user": "relay-user",
        "smtp_password": "relay-secret",
        "smtp_from_email": "noreply@example.com",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def relay_config(settings) -> RelayConfig:
    return settings.relay_config()


@pytest.fixture
def submission() -> ContactSubmission:
    return ContactSubmission(name="Ann Lee", email="ann@example.com", message="Hello!")


@pytest.fixture
def settings_factory():
    return make_settings
