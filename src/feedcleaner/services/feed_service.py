"""Feed cleaning orchestration service (business logic)."""

from __future__ import annotations

import asyncio

from ..config.settings import get_settings
from ..domain.errors import NetworkTimeoutError
from ..domain.models import CleanedFeed
from ..observability.logger import get_logger
from ..processing.feed_extractor import FeedExtractor
from ..scraping.feed_fetcher import FeedFetcher, FetchedFeed
from ..sources.registry import SourceRegistry
from ..utils.time import elapsed_ms, monotonic_ms
from ..utils.validators import resolve_item_limit

logger = get_logger(__name__)


class FeedService:
    """Service layer for feed cleaning.

    Responsibilities:
    - Resolve the source and its rule set
    - Apply system constraints (item limit)
    - Orchestrate fetching -> extraction -> cleaning
    """

    def __init__(self, fetcher: FeedFetcher, extractor: FeedExtractor, registry: SourceRegistry):
        self._fetcher = fetcher
        self._extractor = extractor
        self._registry = registry
        self._settings = get_settings()

    @property
    def registry(self) -> SourceRegistry:
        return self._registry

    def resolve_limit(self, limit: int | None) -> int:
        return resolve_item_limit(
            limit,
            default=self._settings.default_item_limit,
            maximum=self._settings.max_item_limit,
        )

    async def build_feed(self, source_name: str, limit: int | None = None) -> CleanedFeed:
        start_ms = monotonic_ms()
        source = self._registry.get(source_name)
        resolved_limit = self.resolve_limit(limit)

        fetched = await self._fetch_with_retries(source.config.rss_url)
        logger.info("feed_fetched", source=source_name, url=fetched.url, bytes=len(fetched.text))

        # Parsing is CPU-bound; keep it off the event loop.
        feed = await asyncio.to_thread(
            self._extractor.extract_and_clean,
            fetched.text,
            source.rule_set,
            resolved_limit,
        )
        logger.info(
            "feed_cleaned",
            source=source_name,
            items=len(feed.items),
            limit=resolved_limit,
            elapsed_ms=elapsed_ms(start_ms),
        )
        return feed

    async def _fetch_with_retries(self, url: str) -> FetchedFeed:
        """Fetch a feed with bounded retries for transient timeouts."""
        attempts = max(0, int(self._settings.fetch_max_retries)) + 1
        last_exc: Exception | None = None
        for attempt in range(1, attempts + 1):
            try:
                return await self._fetcher.fetch(url)
            except NetworkTimeoutError as e:
                last_exc = e
                logger.warning("feed_fetch_timeout", url=url, attempt=attempt, attempts=attempts)
                if attempt >= attempts:
                    raise
                await asyncio.sleep(max(0.0, float(self._settings.fetch_retry_backoff_ms) / 1000.0))
        if last_exc:
            raise last_exc
        raise NetworkTimeoutError("failed to fetch feed")
