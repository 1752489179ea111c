"""Validation helpers."""

from __future__ import annotations

from urllib.parse import urlparse


def is_valid_http_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)
    except (TypeError, ValueError, AttributeError):
        return False


def resolve_item_limit(requested: int | None, *, default: int, maximum: int) -> int:
    """Default when absent, capped at ``maximum``, never negative."""
    if requested is None:
        return default
    return max(0, min(int(requested), maximum))
