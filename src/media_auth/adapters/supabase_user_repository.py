"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from media_auth.domain.errors import DuplicateEmailError
from media_auth.domain.models import NewUser, UserRecord
from media_auth.services.auth import UserRepository

_PUBLIC_COLUMNS = "id, user_name, email, image, video, created_at"
_UNIQUE_VIOLATION = "23505"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_email(
        self, email: str, include_password: bool = False
    ) -> UserRecord | None:
        """Return the user for an email, if present."""
        columns = f"{_PUBLIC_COLUMNS}, password" if include_password else _PUBLIC_COLUMNS
        response = (
            self.client.table("users")
            .select(columns)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if response.data:
            return _to_record(response.data[0])
        return None

    def create_user(self, user: NewUser) -> UserRecord:
        """Insert a user row and return it without the password digest."""
        try:
            response = (
                self.client.table("users")
                .insert(
                    {
                        "user_name": user.user_name,
                        "email": user.email,
                        "password": user.password_digest,
                        "image": user.image,
                        "video": user.video,
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                raise DuplicateEmailError(user.email) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        row = dict(response.data[0])
        row.pop("password", None)
        return _to_record(row)


def _to_record(row: dict[str, object]) -> UserRecord:
    password = row.get("password")
    return UserRecord(
        id=UUID(str(row["id"])),
        user_name=str(row["user_name"]),
        email=str(row["email"]),
        image=str(row["image"]),
        video=str(row["video"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        password_digest=str(password) if password is not None else None,
    )
