from pydantic import BaseModel, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from email.errors import HeaderParseError
from email.headerregistry import Address
from typing import List, Optional

from comingsoon.core.exceptions import RelayConfigurationError

DEFAULT_RECIPIENT_EMAIL = "info@immersegeek.com"


def is_bare_address(value: str) -> bool:
    """True for a plain addr-spec such as noreply@example.com (no display name)."""
    try:
        address = Address(addr_spec=value)
    except (ValueError, HeaderParseError):
        return False
    return bool(address.username and address.domain)


class RelayConfig(BaseModel):
    """Resolved SMTP relay parameters for a single send"""
    host: str
    port: int
    username: str
    password: SecretStr
    from_email: str
    recipient_email: str = DEFAULT_RECIPIENT_EMAIL
    timeout: float = 60.0

    @property
    def use_tls(self) -> bool:
        # Port 465 is implicit TLS; everything else starts in plaintext
        return self.port == 465


class Settings(BaseSettings):
    # SMTP relay - all optional here, checked when a message is sent
    smtp_host: Optional[str] = None
    smtp_port: Optional[str] = None
    smtp_user: Optional[str] = None
    smtp_password: Optional[SecretStr] = None
    smtp_from_email: Optional[str] = None
    smtp_timeout: float = 60.0

    # Operator inbox
    contact_recipient_email: Optional[str] = None

    # CORS settings
    allowed_origins: List[str] = ["*"]

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator(
        "smtp_host", "smtp_port", "smtp_user", "smtp_from_email", "contact_recipient_email",
        mode="before",
    )
    @classmethod
    def blank_as_unset(cls, value):
        if isinstance(value, int):
            return str(value)
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("smtp_password", mode="before")
    @classmethod
    def blank_password_as_unset(cls, value):
        if isinstance(value, str) and not value:
            return None
        return value

    @property
    def effective_recipient_email(self) -> str:
        """Get the operator inbox, falling back to the default address"""
        return self.contact_recipient_email or DEFAULT_RECIPIENT_EMAIL

    @property
    def smtp_status(self) -> dict:
        """Which relay settings are present (booleans only, safe to expose)"""
        return {
            "host": bool(self.smtp_host),
            "port": bool(self.smtp_port),
            "user": bool(self.smtp_user),
            "password": bool(self.smtp_password and self.smtp_password.get_secret_value()),
            "from_email": bool(self.smtp_from_email),
        }

    def relay_config(self) -> RelayConfig:
        """
        Build the relay parameters for a send.

        Raises:
            RelayConfigurationError: if host, port, credentials or sender are
                missing, or the port is not a valid TCP port number.
        """
        env_names = {
            "host": "SMTP_HOST",
            "port": "SMTP_PORT",
            "user": "SMTP_USER",
            "password": "SMTP_PASSWORD",
            "from_email": "SMTP_FROM_EMAIL",
        }
        missing = [env_names[key] for key, present in self.smtp_status.items() if not present]
        if missing:
            raise RelayConfigurationError(missing)

        try:
            port = int(self.smtp_port)
        except ValueError:
            raise RelayConfigurationError(["SMTP_PORT"])
        if not 0 < port < 65536:
            raise RelayConfigurationError(["SMTP_PORT"])

        invalid = [
            env_name
            for env_name, address in (
                ("SMTP_FROM_EMAIL", self.smtp_from_email),
                ("CONTACT_RECIPIENT_EMAIL", self.effective_recipient_email),
            )
            if not is_bare_address(address)
        ]
        if invalid:
            raise RelayConfigurationError(invalid)

        return RelayConfig(
            host=self.smtp_host,
            port=port,
            username=self.smtp_user,
            password=self.smtp_password,
            from_email=self.smtp_from_email,
            recipient_email=self.effective_recipient_email,
            timeout=self.smtp_timeout,
        )


@lru_cache
def get_settings():
    return Settings()
