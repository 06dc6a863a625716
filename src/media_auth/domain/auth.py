"""Domain models for the registration and login workflow."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Protocol


class MediaStream(Protocol):
    """Readable async byte stream, as exposed by an uploaded file."""

    async def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes, or everything when negative."""


@dataclass(frozen=True)
class AuthConfig:
    """Token and cookie lifetimes passed explicitly to the workflow."""

    token_expiry: timedelta
    cookie_expiry_days: int
    cookie_name: str = "authToken"


@dataclass(frozen=True)
class RegistrationRequest:
    """Submitted registration form fields."""

    user_name: str | None
    email: str | None
    password: str | None
    confirm_password: str | None


@dataclass(frozen=True)
class LoginRequest:
    """Submitted login credentials."""

    email: str | None
    password: str | None


@dataclass(frozen=True)
class UploadedMedia:
    """One uploaded media part."""

    filename: str
    content_type: str | None
    stream: MediaStream
    size: int | None = None

    @property
    def category(self) -> str:
        """Return the mime category, e.g. ``image`` for ``image/png``."""
        if not self.content_type:
            return ""
        return self.content_type.split("/", maxsplit=1)[0].strip().lower()


@dataclass(frozen=True)
class StoredMedia:
    """A media part written to storage under a generated name."""

    name: str
    path: Path


@dataclass(frozen=True)
class AuthResult:
    """Successful register or login outcome."""

    status_code: int
    success_message: str
    token: str
    cookie_expires: datetime
