"""Register, login, logout and session endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from media_auth.domain.auth import (
    AuthResult,
    LoginRequest,
    RegistrationRequest,
    UploadedMedia,
)

if TYPE_CHECKING:
    from media_auth.containers import AppContainer

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(request: Request) -> JSONResponse:
    """Register a user with a profile image and video sent as multipart form."""
    container = _container(request)
    form = await request.form()
    result = await container.auth_workflow.register(
        RegistrationRequest(
            user_name=_as_text(form.get("userName")),
            email=_as_text(form.get("email")),
            password=_as_text(form.get("password")),
            confirm_password=_as_text(form.get("confirmPassword")),
        ),
        image=_to_media(form.get("image")),
        video=_to_media(form.get("video")),
    )
    return _session_response(container, result)


@router.post("/login")
async def login(request: Request) -> JSONResponse:
    """Log in with email and password sent as JSON or form fields."""
    container = _container(request)
    payload = await _read_body(request)
    result = await container.auth_workflow.login(
        LoginRequest(
            email=_as_text(payload.get("email")),
            password=_as_text(payload.get("password")),
        )
    )
    return _session_response(container, result)


@router.post("/logout")
async def logout(request: Request) -> JSONResponse:
    """Empty the session cookie."""
    container = _container(request)
    response = JSONResponse(container.auth_workflow.logout())
    response.set_cookie(container.auth_workflow.config.cookie_name, "")
    return response


@router.get("/me")
async def me(request: Request) -> dict[str, object]:
    """Return the claims of the presented session token."""
    container = _container(request)
    token = request.cookies.get(container.auth_workflow.config.cookie_name)
    if not token:
        token = _bearer_token(request.headers.get("Authorization"))
    return {"user": container.auth_workflow.current_claims(token)}


def _session_response(container: AppContainer, result: AuthResult) -> JSONResponse:
    """Build the success body and set the session cookie."""
    response = JSONResponse(
        status_code=result.status_code,
        content={"successMessage": result.success_message, "token": result.token},
    )
    response.set_cookie(
        container.auth_workflow.config.cookie_name,
        result.token,
        expires=result.cookie_expires,
        httponly=True,
        secure=container.settings.cookie_secure,
        samesite="lax",
    )
    return response


def _to_media(upload: object) -> UploadedMedia | None:
    """Wrap a file part; plain text fields count as a missing part."""
    if not isinstance(upload, UploadFile):
        return None
    return UploadedMedia(
        filename=upload.filename or "",
        content_type=upload.content_type,
        stream=upload,
        size=upload.size,
    )


async def _read_body(request: Request) -> dict[str, object]:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
    form = await request.form()
    return dict(form)


def _as_text(value: object) -> str | None:
    return value if isinstance(value, str) else None


def _bearer_token(header: str | None) -> str | None:
    if not header:
        return None
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return credentials.strip() or None
