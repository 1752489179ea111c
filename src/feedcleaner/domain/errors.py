"""Domain-specific errors.

Configuration defects (SelectorError, RegexError, InvalidRuleError) are raised
when a rule set is compiled, so a bad source config is rejected on load.
ParseError is the only error the cleaning engine raises per document; callers
fall back to the uncleaned HTML. The HTTP layer maps these to status codes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class CleanerDomainError(Exception):
    """Base class for all domain errors."""


@dataclass(frozen=True)
class DomainErrorInfo:
    code: str
    message: str
    detail: Optional[str] = None


class ParseError(CleanerDomainError):
    """Raised when markup cannot be turned into a document."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.info = DomainErrorInfo(code="PARSE_ERROR", message=message, detail=detail)


class SelectorError(CleanerDomainError):
    """Raised when a rule's CSS selector is syntactically invalid."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.info = DomainErrorInfo(code="SELECTOR_ERROR", message=message, detail=detail)


class RegexError(CleanerDomainError):
    """Raised when a text/attribute match pattern fails to compile."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.info = DomainErrorInfo(code="REGEX_ERROR", message=message, detail=detail)


class InvalidRuleError(CleanerDomainError):
    """Raised when a rule or source config fails schema validation."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.info = DomainErrorInfo(code="INVALID_RULE", message=message, detail=detail)


class UnknownSourceError(CleanerDomainError):
    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.info = DomainErrorInfo(code="UNKNOWN_SOURCE", message=message, detail=detail)


class FeedFetchError(CleanerDomainError):
    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.info = DomainErrorInfo(code="FEED_FETCH_ERROR", message=message, detail=detail)


class NetworkTimeoutError(CleanerDomainError):
    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.info = DomainErrorInfo(code="NETWORK_TIMEOUT", message=message, detail=detail)
