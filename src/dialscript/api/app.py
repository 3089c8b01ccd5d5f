"""FastAPI application factory for the DialScript checker."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from dialscript import __version__
from dialscript.api.deps import init_script_checker, reset_script_checker
from dialscript.api.middleware import RequestBodyLimitMiddleware, RequestTimingMiddleware
from dialscript.api.routers import reference, scripts
from dialscript.api.schemas import HealthResponse
from dialscript.service.script_checker import ScriptChecker
from dialscript.settings import Settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Provide the shared ScriptChecker for the lifetime of the application."""
    settings: Settings = app.state.settings
    init_script_checker(ScriptChecker(settings))
    try:
        yield
    finally:
        reset_script_checker()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="DialScript Checker",
        description="Validates and auto-fixes DialScript screenplay files.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Middleware
    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(RequestBodyLimitMiddleware, script_limit=settings.max_request_bytes)

    app.include_router(scripts.router, prefix="/scripts", tags=["scripts"])
    app.include_router(reference.router, prefix="/reference", tags=["reference"])

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    return app


def main() -> None:
    """Run the REST API server using settings from environment / .env file."""
    settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())
    logger = logging.getLogger("dialscript.api")
    logger.info(
        "DialScript API Server v%s starting (host=%s, port=%d)",
        __version__, settings.api_server_host, settings.effective_port,
    )

    uvicorn.run(
        "dialscript.api.app:create_app",
        factory=True,
        host=settings.api_server_host,
        port=settings.effective_port,
        log_level=settings.log_level.lower(),
    )
