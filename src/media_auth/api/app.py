"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from media_auth.api.auth import router as auth_router
from media_auth.app_logging import configure_logging
from media_auth.containers import AppContainer
from media_auth.domain.errors import AuthWorkflowError
from media_auth.services.auth import INTERNAL_ERROR


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(auth_router)

    @app.exception_handler(AuthWorkflowError)
    async def workflow_error(_: Request, exc: AuthWorkflowError) -> JSONResponse:
        return error_response(exc.status_code, exc.messages)

    @app.exception_handler(RequestValidationError)
    async def request_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(400, [str(error["msg"]) for error in exc.errors()])

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s", request.url.path, exc_info=exc)
        return error_response(500, [INTERNAL_ERROR])

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def error_response(status_code: int, messages: list[str]) -> JSONResponse:
    """Render the shared error body."""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"errorMessage": messages}},
    )
