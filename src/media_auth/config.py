"""Application configuration."""

import os
import re
from datetime import timedelta

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from media_auth.domain.auth import AuthConfig

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$")
_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
    "w": "weeks",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    secret: str
    token_exp: timedelta = timedelta(days=7)
    cookie_exp: int = 7
    cookie_name: str = "authToken"
    cookie_secure: bool = False
    media_root: str = "uploads"
    max_upload_bytes: int = 50 * 1024 * 1024
    bcrypt_rounds: int = 10
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("token_exp", mode="before")
    @classmethod
    def _parse_token_exp(cls, value: object) -> object:
        if isinstance(value, str):
            return parse_duration(value)
        return value

    def auth_config(self) -> AuthConfig:
        """Build the explicit workflow configuration."""
        return AuthConfig(
            token_expiry=self.token_exp,
            cookie_expiry_days=self.cookie_exp,
            cookie_name=self.cookie_name,
        )


def parse_duration(raw: str) -> timedelta:
    """Parse a duration like ``7d``, ``12h``, ``30m`` or a plain seconds count."""
    match = _DURATION_PATTERN.match(raw)
    if not match:
        raise ValueError(f"Invalid duration: {raw!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})
