"""Collect-all validation for registration and login forms."""

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from media_auth.domain.auth import LoginRequest, RegistrationRequest, UploadedMedia

MIN_PASSWORD_LENGTH = 6

MISSING_MEDIA = "Please provide user image and video"
UPLOAD_ERROR = "File upload error"

_EMAIL_ADAPTER: TypeAdapter[str] = TypeAdapter(EmailStr)


def is_valid_email(value: str) -> bool:
    """Return true when the value is a syntactically valid email address."""
    try:
        _EMAIL_ADAPTER.validate_python(value)
    except PydanticValidationError:
        return False
    return True


def validate_registration(request: RegistrationRequest) -> list[str]:
    """Return every violated registration rule, in a fixed order."""
    errors: list[str] = []
    if not request.user_name:
        errors.append("Please provide your user name")
    if not request.email:
        errors.append("Please provide your Email")
    if request.email and not is_valid_email(request.email):
        errors.append("Please provide a valid Email")
    if not request.password:
        errors.append("Please provide your Password")
    if not request.confirm_password:
        errors.append("Please provide your confirm Password")
    if (
        request.password
        and request.confirm_password
        and request.password != request.confirm_password
    ):
        errors.append("Your Password and Confirm Password are not the same")
    if request.password and len(request.password) < MIN_PASSWORD_LENGTH:
        errors.append(
            f"Please provide a password of at least {MIN_PASSWORD_LENGTH} characters"
        )
    return errors


def validate_login(request: LoginRequest) -> list[str]:
    """Return every violated login rule, in a fixed order."""
    errors: list[str] = []
    if not request.email:
        errors.append("Please provide your Email")
    if not request.password:
        errors.append("Please provide your Password")
    if request.email and not is_valid_email(request.email):
        errors.append("Please provide a valid Email")
    return errors


def upload_violations(
    image: UploadedMedia | None,
    video: UploadedMedia | None,
    max_bytes: int,
) -> list[str]:
    """Return problems with the parts that were uploaded.

    Absent parts are not reported here; the workflow checks for them
    separately.
    """
    problems: list[str] = []
    for expected, media in (("image", image), ("video", video)):
        if media is None:
            continue
        if media.category != expected:
            problems.append(f"{expected} part has content type {media.content_type!r}")
        if media.size is not None and media.size > max_bytes:
            problems.append(f"{expected} part exceeds {max_bytes} bytes")
    return problems
