from __future__ import annotations

import pytest

from feedcleaner.config.settings import CleanerSettings, get_settings, reset_settings
from feedcleaner.utils.validators import is_valid_http_url, resolve_item_limit


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings()
    yield
    reset_settings()


def test_defaults() -> None:
    settings = get_settings()
    assert settings.html_parser == "lxml"
    assert settings.default_item_limit == 20
    assert settings.max_item_limit == 100
    assert settings.widget_class_marker == "js_wx_"


def test_settings_are_cached_until_reset(monkeypatch) -> None:
    first = get_settings()
    assert get_settings() is first
    monkeypatch.setenv("MAX_ITEM_LIMIT", "50")
    reset_settings()
    assert get_settings().max_item_limit == 50


@pytest.mark.parametrize(
    "overrides",
    [
        {"html_parser": "html5lib"},
        {"default_item_limit": 0},
        {"default_item_limit": 30, "max_item_limit": 10},
        {"fetch_max_retries": -1},
        {"widget_class_marker": ""},
        {"log_format": "xml"},
    ],
)
def test_validate_rejects_bad_values(overrides) -> None:
    with pytest.raises(ValueError):
        CleanerSettings(**overrides).validate()


def test_is_valid_http_url() -> None:
    assert is_valid_http_url("https://example.com/feed")
    assert is_valid_http_url("http://example.com")
    assert not is_valid_http_url("ftp://example.com")
    assert not is_valid_http_url("https://")
    assert not is_valid_http_url("not a url")


def test_resolve_item_limit() -> None:
    assert resolve_item_limit(None, default=20, maximum=100) == 20
    assert resolve_item_limit(0, default=20, maximum=100) == 0
    assert resolve_item_limit(500, default=20, maximum=100) == 100
    assert resolve_item_limit(-3, default=20, maximum=100) == 0
