"""Configuration management using Pydantic Settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class CleanerSettings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service
    service_name: str = "feed-cleaner"

    # FastAPI
    http_enable: bool = True
    http_host: str = "127.0.0.1"
    http_port: int = 8000

    # Parsing
    html_parser: str = "lxml"

    # Item limits (the ?limit= query parameter is capped at max_item_limit)
    default_item_limit: int = 20
    max_item_limit: int = 100

    # Feed fetching
    fetch_timeout_seconds: int = 15
    fetch_user_agent: str = "FeedCleaner/0.1.0"
    fetch_max_retries: int = 2
    fetch_retry_backoff_ms: int = 500

    # Generic junk cleanup
    widget_class_marker: str = "js_wx_"

    # Aggregator suffix stripped from feed titles (also used as item author)
    feed_title_suffix_pattern: str = r"\s*-\s*今天看啥\s*$"

    # Extra JSON source configs loaded on startup (in addition to the built-ins)
    rules_dir: str | None = None

    # Logging ("json" or "console")
    log_level: str = "INFO"
    log_format: str = "json"
    http_access_log: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def validate(self) -> None:
        if self.http_port <= 0:
            raise ValueError("http_port must be > 0")
        if self.html_parser not in ("lxml", "html.parser"):
            raise ValueError("html_parser must be 'lxml' or 'html.parser'")
        if self.default_item_limit <= 0:
            raise ValueError("default_item_limit must be > 0")
        if self.max_item_limit < self.default_item_limit:
            raise ValueError("max_item_limit must be >= default_item_limit")
        if self.fetch_timeout_seconds <= 0:
            raise ValueError("fetch_timeout_seconds must be > 0")
        if self.fetch_max_retries < 0:
            raise ValueError("fetch_max_retries must be >= 0")
        if self.fetch_retry_backoff_ms < 0:
            raise ValueError("fetch_retry_backoff_ms must be >= 0")
        if self.log_format not in ("json", "console"):
            raise ValueError("log_format must be 'json' or 'console'")
        if not self.widget_class_marker:
            raise ValueError("widget_class_marker must not be empty")


_settings: CleanerSettings | None = None


def get_settings() -> CleanerSettings:
    global _settings
    if _settings is None:
        _settings = CleanerSettings()
        _settings.validate()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
