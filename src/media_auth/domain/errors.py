"""Error taxonomy for the authentication workflow.

Every workflow error carries the HTTP status it maps to and one or more
human readable messages. The API layer renders them as
``{"error": {"errorMessage": [...]}}``.
"""

from collections.abc import Sequence


class AuthWorkflowError(Exception):
    """Base class for errors returned to the caller."""

    status_code = 500

    def __init__(
        self, messages: str | Sequence[str], status_code: int | None = None
    ) -> None:
        self.messages = [messages] if isinstance(messages, str) else list(messages)
        if status_code is not None:
            self.status_code = status_code
        super().__init__("; ".join(self.messages))


class ValidationError(AuthWorkflowError):
    """Client-correctable input problems, aggregated."""

    status_code = 400


class ConflictError(AuthWorkflowError):
    """The email is already registered."""

    status_code = 400


class NotFoundError(AuthWorkflowError):
    """No user exists for the email."""

    status_code = 404


class AuthError(AuthWorkflowError):
    """The password does not match."""

    status_code = 400


class UnauthenticatedError(AuthWorkflowError):
    """No valid session token was presented."""

    status_code = 401


class UploadError(AuthWorkflowError):
    """Missing, oversized or mistyped media parts."""

    status_code = 400


class PersistenceError(AuthWorkflowError):
    """Media or record write failed."""

    status_code = 500


class InternalError(AuthWorkflowError):
    """Unexpected failure; details are logged, never returned."""

    status_code = 500


class DuplicateEmailError(Exception):
    """Raised by a user store when the unique email constraint is violated."""
