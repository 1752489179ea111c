"""aiohttp-based feed fetcher."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import aiohttp

from ..domain.errors import FeedFetchError, NetworkTimeoutError
from ..utils.validators import is_valid_http_url


@dataclass(frozen=True)
class FetchedFeed:
    url: str
    text: str


class FeedFetcher:
    """Scraping layer.

    Responsibilities:
    - Fetch raw feed documents over HTTP
    - Enforce a total timeout per request
    - Return the raw text (no parsing, no cleaning)
    """

    def __init__(self, timeout_seconds: int, user_agent: str):
        self._timeout_seconds = int(timeout_seconds)
        self._user_agent = user_agent

    async def fetch(self, url: str) -> FetchedFeed:
        if not is_valid_http_url(url):
            raise FeedFetchError("feed url must be http(s)", detail=url)

        timeout = aiohttp.ClientTimeout(total=self._timeout_seconds)
        headers = {"User-Agent": self._user_agent}
        try:
            async with aiohttp.ClientSession(timeout=timeout, headers=headers) as session:
                async with session.get(url) as resp:
                    if resp.status >= 400:
                        raise FeedFetchError(f"feed request failed with status {resp.status}", detail=url)
                    text = await resp.text(errors="replace")
                    return FetchedFeed(url=url, text=text)
        except asyncio.TimeoutError as e:
            raise NetworkTimeoutError(f"Timeout while fetching {url}", detail=str(e)) from e
        except aiohttp.ClientError as e:
            raise FeedFetchError(f"failed to fetch {url}", detail=str(e)) from e
