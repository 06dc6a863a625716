"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from media_auth.adapters.bcrypt_password_hasher import BcryptPasswordHasher
from media_auth.adapters.jwt_token_issuer import JwtTokenIssuer
from media_auth.adapters.local_media_store import LocalMediaStore
from media_auth.adapters.supabase_user_repository import SupabaseUserRepository
from media_auth.config import Settings
from media_auth.services.auth import AuthWorkflow


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_workflow: AuthWorkflow
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    auth_workflow = AuthWorkflow(
        users=SupabaseUserRepository(supabase_client),
        hasher=BcryptPasswordHasher(rounds=resolved_settings.bcrypt_rounds),
        tokens=JwtTokenIssuer(secret=resolved_settings.secret),
        media=LocalMediaStore(root=Path(resolved_settings.media_root)),
        config=resolved_settings.auth_config(),
        max_upload_bytes=resolved_settings.max_upload_bytes,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=resolved_settings,
        auth_workflow=auth_workflow,
        close_resources=close_resources,
    )
