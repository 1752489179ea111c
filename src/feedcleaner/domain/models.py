"""Framework-agnostic domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Action(str, Enum):
    KEEP_ONLY = "keep-only"
    REMOVE = "remove"
    REMOVE_AFTER = "remove-after"
    REMOVE_PARENT_AFTER = "remove-parent-after"


class TextMatchMode(str, Enum):
    STARTS_WITH = "startsWith"
    CONTAINS = "contains"
    EQUALS = "equals"
    REGEX = "regex"


class ErrorCode(str, Enum):
    PARSE_ERROR = "PARSE_ERROR"
    SELECTOR_ERROR = "SELECTOR_ERROR"
    REGEX_ERROR = "REGEX_ERROR"
    INVALID_RULE = "INVALID_RULE"
    UNKNOWN_SOURCE = "UNKNOWN_SOURCE"
    FEED_FETCH_ERROR = "FEED_FETCH_ERROR"
    NETWORK_TIMEOUT = "NETWORK_TIMEOUT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True)
class FeedItem:
    title: str
    link: str
    pub_date: str
    category: str
    description_html: str
    author: str = ""


@dataclass(frozen=True)
class CleanedFeed:
    title: str
    link: str
    description: str
    items: list[FeedItem] = field(default_factory=list)
