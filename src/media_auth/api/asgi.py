"""ASGI entrypoint for the media auth API."""

from media_auth.api.app import create_app
from media_auth.containers import build_container

app = create_app(build_container())
