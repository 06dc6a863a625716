"""Registration, login and logout business logic."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from media_auth.domain.auth import (
    AuthConfig,
    AuthResult,
    LoginRequest,
    RegistrationRequest,
    StoredMedia,
    UploadedMedia,
)
from media_auth.domain.errors import (
    AuthError,
    AuthWorkflowError,
    ConflictError,
    DuplicateEmailError,
    InternalError,
    NotFoundError,
    PersistenceError,
    UnauthenticatedError,
    UploadError,
    ValidationError,
)
from media_auth.domain.models import NewUser, UserRecord
from media_auth.services.validation import (
    MISSING_MEDIA,
    UPLOAD_ERROR,
    upload_violations,
    validate_login,
    validate_registration,
)

logger = logging.getLogger(__name__)

REGISTER_SUCCESS = "Your Registration Was Successful"
LOGIN_SUCCESS = "Your Login Successful"
DUPLICATE_EMAIL = "Your email already exists"
EMAIL_NOT_FOUND = "Your Email Not Found"
INVALID_PASSWORD = "Your Password is not Valid"
IMAGE_COPY_ERROR = "Image copy error"
VIDEO_COPY_ERROR = "Video copy error"
DATABASE_ERROR = "Database error"
INTERNAL_ERROR = "Internal Server Error"
LOGIN_REQUIRED = "Please login first"

# Unexpected login failures answer 404, unlike register's 500.
LOGIN_INTERNAL_ERROR_STATUS = 404


class UserRepository(Protocol):
    """Persistence interface for user records."""

    def get_by_email(
        self, email: str, include_password: bool = False
    ) -> UserRecord | None:
        """Return the user for an email; the digest only when requested."""

    def create_user(self, user: NewUser) -> UserRecord:
        """Insert a user and return the stored record.

        Raises ``DuplicateEmailError`` when the email is already taken.
        """


class PasswordHasher(Protocol):
    """One-way password hashing."""

    def hash(self, password: str) -> str:
        """Return a digest for the plaintext password."""

    def verify(self, password: str, digest: str) -> bool:
        """Return true when the password matches the digest."""


class TokenIssuer(Protocol):
    """Signs and verifies session tokens."""

    def sign(self, claims: dict[str, object], expires_in: timedelta) -> str:
        """Return a signed token carrying the claims."""

    def verify(self, token: str) -> dict[str, object]:
        """Return the claims of a valid token or raise ``ValueError``."""


class MediaStore(Protocol):
    """Stores uploaded media under generated names."""

    async def save(self, kind: str, media: UploadedMedia) -> StoredMedia:
        """Persist an uploaded part of the given kind (image or video)."""


@dataclass
class AuthWorkflow:
    """Application service for registration, login and logout."""

    users: UserRepository
    hasher: PasswordHasher
    tokens: TokenIssuer
    media: MediaStore
    config: AuthConfig
    max_upload_bytes: int

    async def register(
        self,
        request: RegistrationRequest,
        image: UploadedMedia | None,
        video: UploadedMedia | None,
    ) -> AuthResult:
        """Validate, store media, create the user and issue a session token."""
        if image is None or video is None:
            raise UploadError(MISSING_MEDIA)
        problems = upload_violations(image, video, self.max_upload_bytes)
        if problems:
            logger.info("Rejected registration upload: %s", "; ".join(problems))
            raise UploadError(UPLOAD_ERROR)

        errors = validate_registration(request)
        if errors:
            raise ValidationError(errors)
        email = str(request.email)
        password = str(request.password)

        try:
            existing = self.users.get_by_email(email)
        except Exception as exc:
            logger.exception("User lookup failed during registration")
            raise InternalError(INTERNAL_ERROR) from exc
        if existing is not None:
            logger.info("Registration rejected, email already registered")
            raise ConflictError(DUPLICATE_EMAIL)

        stored_image = await self._persist_media("image", image, IMAGE_COPY_ERROR)
        stored_video = await self._persist_media("video", video, VIDEO_COPY_ERROR)

        try:
            digest = await asyncio.to_thread(self.hasher.hash, password)
            user = self.users.create_user(
                NewUser(
                    user_name=str(request.user_name),
                    email=email,
                    password_digest=digest,
                    image=stored_image.name,
                    video=stored_video.name,
                )
            )
            token = self.tokens.sign(
                _claims(user, include_video=True), self.config.token_expiry
            )
        except DuplicateEmailError as exc:
            logger.info("Registration lost a race on a duplicate email")
            raise ConflictError(DUPLICATE_EMAIL) from exc
        except Exception as exc:
            logger.exception("Failed to create user")
            raise PersistenceError(DATABASE_ERROR) from exc

        logger.info("Registered user %s", user.id)
        return AuthResult(
            status_code=201,
            success_message=REGISTER_SUCCESS,
            token=token,
            cookie_expires=self.cookie_expires(),
        )

    async def login(self, request: LoginRequest) -> AuthResult:
        """Check credentials and issue a session token."""
        errors = validate_login(request)
        if errors:
            raise ValidationError(errors)

        try:
            user = self.users.get_by_email(str(request.email), include_password=True)
            if user is None:
                raise NotFoundError(EMAIL_NOT_FOUND)
            matched = await asyncio.to_thread(
                self.hasher.verify, str(request.password), user.password_digest or ""
            )
            if not matched:
                raise AuthError(INVALID_PASSWORD)
            token = self.tokens.sign(
                _claims(user, include_video=False), self.config.token_expiry
            )
        except AuthWorkflowError as exc:
            logger.info("Login rejected: %s", exc)
            raise
        except Exception as exc:
            logger.exception("Login failed")
            raise InternalError(
                INTERNAL_ERROR, status_code=LOGIN_INTERNAL_ERROR_STATUS
            ) from exc

        logger.info("Logged in user %s", user.id)
        return AuthResult(
            status_code=200,
            success_message=LOGIN_SUCCESS,
            token=token,
            cookie_expires=self.cookie_expires(),
        )

    def logout(self) -> dict[str, bool]:
        """Return the logout body; the caller empties the session cookie."""
        return {"success": True}

    def current_claims(self, token: str | None) -> dict[str, object]:
        """Return the claims of a presented session token."""
        if not token:
            raise UnauthenticatedError(LOGIN_REQUIRED)
        try:
            return self.tokens.verify(token)
        except ValueError as exc:
            raise UnauthenticatedError(LOGIN_REQUIRED) from exc

    def cookie_expires(self) -> datetime:
        """Return the expiry instant for a freshly issued session cookie."""
        return datetime.now(tz=UTC) + timedelta(days=self.config.cookie_expiry_days)

    async def _persist_media(
        self, kind: str, media: UploadedMedia, failure_message: str
    ) -> StoredMedia:
        try:
            return await self.media.save(kind, media)
        except Exception as exc:
            logger.exception("Failed to store %s upload", kind)
            raise PersistenceError(failure_message) from exc


def _claims(user: UserRecord, include_video: bool) -> dict[str, object]:
    """Build the session token claims for a user."""
    claims: dict[str, object] = {
        "id": str(user.id),
        "email": user.email,
        "userName": user.user_name,
        "image": user.image,
    }
    if include_video:
        claims["video"] = user.video
    claims["createdAt"] = user.created_at.isoformat()
    return claims
