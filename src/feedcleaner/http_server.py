"""uvicorn runner for the feed HTTP API."""

from __future__ import annotations

import uvicorn

from .config.settings import get_settings
from .http_app import app
from .observability.logger import get_logger

logger = get_logger(__name__)


async def run_http_server() -> None:
    """Serve the API until uvicorn exits; returns at once when HTTP is disabled."""
    settings = get_settings()
    if not settings.http_enable:
        logger.info("http_server_disabled")
        return

    # uvicorn's own logging stays quiet; request events come from structlog.
    server = uvicorn.Server(
        uvicorn.Config(
            app=app,
            host=settings.http_host,
            port=settings.http_port,
            log_level="warning",
            access_log=settings.http_access_log,
            loop="asyncio",
        )
    )

    logger.info("http_server_started", url=f"http://{settings.http_host}:{settings.http_port}/api/v1/sources")
    try:
        await server.serve()
    finally:
        logger.info("http_server_stopped")
