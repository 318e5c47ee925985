"""API entry point — FastAPI application factory and lifespan wiring."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import uvicorn
from azure.monitor.opentelemetry import configure_azure_monitor
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from letter_issuance.config import load_settings
from letter_issuance.database.client import CosmosClient
from letter_issuance.errors import LetterError
from letter_issuance.events import ServiceBusPublisher
from letter_issuance.health import check_emulators
from letter_issuance.logging import configure_logging
from letter_issuance.routes import health, letters, printing, reference, verify
from letter_issuance.services.rendering import DocumentRenderer

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from letter_issuance.config import Settings

logger = logging.getLogger(__name__)


async def init_database(settings: Settings) -> CosmosClient:
    cosmos = CosmosClient(settings.cosmos)
    await cosmos.initialize()
    return cosmos


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = app.state.settings
    if settings.app.is_development and not await check_emulators(settings):
        raise RuntimeError("Local emulators are not reachable")

    cosmos = await init_database(settings)
    event_publisher = ServiceBusPublisher(
        settings.servicebus,
        topic_name=settings.servicebus.topic_name,
    )
    app.state.cosmos = cosmos
    app.state.event_publisher = event_publisher
    app.state.renderer = DocumentRenderer()
    logger.info("Letter issuance API started — env=%s", settings.app.env)

    yield

    logger.info("Letter issuance API shutting down")
    await event_publisher.close()
    await cosmos.close()


async def handle_letter_error(request: Request, exc: LetterError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "Request failed — path=%s error=%s", request.url.path, exc.message
        )
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


def _session_secret(settings: Settings) -> str:
    if settings.app.secret_key:
        return settings.app.secret_key
    if not settings.app.is_development:
        raise RuntimeError("APP_SECRET_KEY must be set outside development")
    logger.warning("APP_SECRET_KEY is not set — using the development session key")
    return "dev-insecure-key"


def create_app() -> FastAPI:
    settings = load_settings()
    configure_logging(settings.app.log_level, log_file="api.log")
    session_secret = _session_secret(settings)

    if settings.monitor.connection_string:
        configure_azure_monitor(connection_string=settings.monitor.connection_string)
        logger.info("Azure Monitor OpenTelemetry configured")

    if settings.app.demo_mode:
        logger.warning("DEMO_MODE is enabled — every request runs as the demo admin")

    app = FastAPI(title="Letter Issuance", lifespan=lifespan)
    app.state.settings = settings
    app.add_middleware(
        SessionMiddleware,
        secret_key=session_secret,
        https_only=not settings.app.is_development,
    )
    app.add_exception_handler(LetterError, handle_letter_error)  # type: ignore[arg-type]

    app.include_router(health.router)
    app.include_router(letters.router)
    app.include_router(printing.router)
    app.include_router(reference.router)
    app.include_router(verify.router)
    return app


def main() -> None:
    """Entry point for the API process."""
    settings = load_settings()
    uvicorn.run(
        "letter_issuance.app:create_app",
        factory=True,
        host="0.0.0.0",  # noqa: S104
        port=8000,
        reload=settings.app.is_development,
    )


if __name__ == "__main__":
    main()
