"""Application lifespan management (startup/shutdown hooks)."""

from __future__ import annotations

from contextlib import asynccontextmanager

from .config.settings import get_settings
from .http_app import app_state
from .observability.logger import configure_logging, get_logger
from .processing.feed_extractor import FeedExtractor
from .processing.junk_cleaner import JunkCleaner
from .processing.rule_engine import RuleEngine
from .scraping.feed_fetcher import FeedFetcher
from .services.feed_service import FeedService
from .sources.registry import build_default_registry

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan_manager():
    """Manage application lifespan (startup and shutdown)."""
    settings = get_settings()

    configure_logging()
    logger.info("starting_application", service_name=settings.service_name)

    # Bad rule configs fail here, before any request is served.
    registry = build_default_registry(settings.rules_dir)

    fetcher = FeedFetcher(
        timeout_seconds=settings.fetch_timeout_seconds,
        user_agent=settings.fetch_user_agent,
    )
    extractor = FeedExtractor(
        rule_engine=RuleEngine(parser=settings.html_parser),
        junk_cleaner=JunkCleaner(
            widget_class_marker=settings.widget_class_marker,
            parser=settings.html_parser,
        ),
        title_suffix_pattern=settings.feed_title_suffix_pattern,
    )

    app_state["feed_service"] = FeedService(fetcher=fetcher, extractor=extractor, registry=registry)

    logger.info("application_started", sources=len(registry))
    try:
        yield
    finally:
        app_state.clear()
        logger.info("application_shutdown_complete")
