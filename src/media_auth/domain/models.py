"""Domain models for registered users."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    user_name: str
    email: str
    image: str
    video: str
    created_at: datetime
    password_digest: str | None = None


@dataclass(frozen=True)
class NewUser:
    """Fields required to insert a user row."""

    user_name: str
    email: str
    password_digest: str
    image: str
    video: str
