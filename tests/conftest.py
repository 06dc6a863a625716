"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path
from uuid import uuid4

import pytest

from media_auth.adapters.bcrypt_password_hasher import BcryptPasswordHasher
from media_auth.adapters.jwt_token_issuer import JwtTokenIssuer
from media_auth.config import Settings
from media_auth.containers import AppContainer
from media_auth.domain.auth import AuthConfig, StoredMedia, UploadedMedia
from media_auth.domain.errors import DuplicateEmailError
from media_auth.domain.models import NewUser, UserRecord
from media_auth.services.auth import AuthWorkflow, MediaStore, UserRepository

TEST_SUPABASE_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
    "c2lnbmF0dXJl"
)


@dataclass
class BytesStream:
    """Async readable over an in-memory payload."""

    payload: bytes
    offset: int = 0

    async def read(self, size: int = -1) -> bytes:
        if size < 0:
            size = len(self.payload) - self.offset
        chunk = self.payload[self.offset : self.offset + size]
        self.offset += len(chunk)
        return chunk


def make_media(
    filename: str = "avatar.png",
    content_type: str | None = "image/png",
    payload: bytes = b"media-bytes",
    size: int | None = None,
) -> UploadedMedia:
    return UploadedMedia(
        filename=filename,
        content_type=content_type,
        stream=BytesStream(payload),
        size=len(payload) if size is None else size,
    )


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository keyed by email."""

    users: dict[str, UserRecord] = field(default_factory=dict)
    lookups: list[str] = field(default_factory=list)
    fail_lookup: bool = False
    fail_create: bool = False
    race_on_create: bool = False

    def get_by_email(
        self, email: str, include_password: bool = False
    ) -> UserRecord | None:
        self.lookups.append(email)
        if self.fail_lookup:
            raise RuntimeError("lookup exploded")
        user = self.users.get(email)
        if user is None or include_password:
            return user
        return UserRecord(
            id=user.id,
            user_name=user.user_name,
            email=user.email,
            image=user.image,
            video=user.video,
            created_at=user.created_at,
        )

    def create_user(self, user: NewUser) -> UserRecord:
        if self.fail_create:
            raise RuntimeError("insert exploded")
        if self.race_on_create or user.email in self.users:
            raise DuplicateEmailError(user.email)
        record = UserRecord(
            id=uuid4(),
            user_name=user.user_name,
            email=user.email,
            image=user.image,
            video=user.video,
            created_at=datetime.now(tz=UTC),
            password_digest=user.password_digest,
        )
        self.users[user.email] = record
        return UserRecord(
            id=record.id,
            user_name=record.user_name,
            email=record.email,
            image=record.image,
            video=record.video,
            created_at=record.created_at,
        )


@dataclass
class InMemoryMediaStore(MediaStore):
    """Media store that keeps written payloads in memory."""

    saved: list[tuple[str, str, bytes]] = field(default_factory=list)
    attempts: list[str] = field(default_factory=list)
    fail_kinds: set[str] = field(default_factory=set)

    async def save(self, kind: str, media: UploadedMedia) -> StoredMedia:
        self.attempts.append(kind)
        if kind in self.fail_kinds:
            raise OSError(f"disk full while writing {kind}")
        payload = await media.stream.read()
        name = f"{len(self.saved)}{media.filename}"
        self.saved.append((kind, name, payload))
        return StoredMedia(name=name, path=Path("/media") / kind / name)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=TEST_SUPABASE_KEY,
        secret="test-secret",
        media_root=str(tmp_path / "uploads"),
        bcrypt_rounds=4,
        max_upload_bytes=1024,
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def media_store() -> InMemoryMediaStore:
    return InMemoryMediaStore()


@pytest.fixture
def token_issuer() -> JwtTokenIssuer:
    return JwtTokenIssuer(secret="test-secret")


@pytest.fixture
def auth_config() -> AuthConfig:
    return AuthConfig(token_expiry=timedelta(days=7), cookie_expiry_days=7)


@pytest.fixture
def workflow(
    user_repository: InMemoryUserRepository,
    media_store: InMemoryMediaStore,
    token_issuer: JwtTokenIssuer,
    auth_config: AuthConfig,
) -> AuthWorkflow:
    return AuthWorkflow(
        users=user_repository,
        hasher=BcryptPasswordHasher(rounds=4),
        tokens=token_issuer,
        media=media_store,
        config=auth_config,
        max_upload_bytes=1024,
    )


@pytest.fixture
def container(settings: Settings, workflow: AuthWorkflow) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_workflow=workflow,
        close_resources=close_resources,
    )
