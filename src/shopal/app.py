"""FastAPI application entry point.

Run with any ASGI host, e.g. ``uvicorn shopal.app:app``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from shopal.api.chat import router as chat_router
from shopal.api.exceptions import register_exception_handlers
from shopal.configs.config import AppConfig, get_app_config
from shopal.infra.logging import setup_logging
from shopal.infra.telemetry import init_telemetry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown events."""
    logger.info("Starting Shopal chat endpoint...")
    yield
    logger.info("Shutting down Shopal chat endpoint...")


def get_app(config: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if config is None:
        config = get_app_config()

    setup_logging(config.logging)

    # Docs routes would shadow the catch-all chat route.
    app = FastAPI(
        title="Shopal",
        description="Storefront chat assistant backed by product search",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    register_exception_handlers(app)
    app.include_router(chat_router)
    init_telemetry(app, config.tracing)

    return app


app = get_app()
