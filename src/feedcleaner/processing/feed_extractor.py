"""Two-stage extraction: RSS XML -> per-item description HTML -> cleaned HTML.

Stage 1 parses the feed in XML mode so markup inside CDATA sections is never
treated as document structure. Stage 2 reads each description as *text*,
which yields the unwrapped HTML string, and runs it through the rule engine
and then the junk cleaner. A description that fails to parse is kept as-is;
an item is never dropped because cleaning failed.
"""

from __future__ import annotations

import re
from typing import Optional

from bs4 import Tag

from ..domain.errors import ParseError
from ..domain.models import CleanedFeed, FeedItem
from ..observability.logger import get_logger
from . import dom
from .junk_cleaner import JunkCleaner
from .rule_engine import RuleEngine
from .rule_set import RuleSet

logger = get_logger(__name__)

DEFAULT_TITLE_SUFFIX_PATTERN = r"\s*-\s*今天看啥\s*$"


def _plain(name: str):
    """Match un-prefixed elements only: `<atom:link>` is not `<link>`."""
    return lambda t: t.name == name and not t.prefix


def _first_text(node: Optional[Tag], name: str, *, recursive: bool = True) -> str:
    if node is None:
        return ""
    found = node.find(_plain(name), recursive=recursive)
    return dom.text(found) if found is not None else ""


class FeedExtractor:
    """Processing layer component: feed item extraction + cleaning."""

    def __init__(
        self,
        rule_engine: RuleEngine | None = None,
        junk_cleaner: JunkCleaner | None = None,
        *,
        title_suffix_pattern: str = DEFAULT_TITLE_SUFFIX_PATTERN,
    ):
        self._rules = rule_engine or RuleEngine()
        self._junk = junk_cleaner or JunkCleaner()
        self._title_suffix = re.compile(title_suffix_pattern)

    def extract_and_clean(self, feed_xml: str, rule_set: RuleSet, limit: int) -> CleanedFeed:
        doc = dom.parse_xml(feed_xml)
        if doc.soup.find(True) is None:
            raise ParseError("feed document has no root element")

        channel = doc.soup.find(_plain("channel"))
        feed_title = _first_text(channel, "title", recursive=False)
        feed_link = _first_text(channel, "link", recursive=False)
        feed_description = _first_text(channel, "description", recursive=False)
        author = self.strip_title_suffix(feed_title)

        items: list[FeedItem] = []
        for node in doc.soup.find_all(_plain("item"))[: max(0, int(limit))]:
            link = _first_text(node, "link")
            items.append(
                FeedItem(
                    title=_first_text(node, "title"),
                    link=link,
                    pub_date=_first_text(node, "pubDate"),
                    category=_first_text(node, "category"),
                    description_html=self.clean_description(_first_text(node, "description"), rule_set, link=link),
                    author=author,
                )
            )

        logger.info("feed_extracted", feed_title=author, items=len(items), rules=len(rule_set))
        return CleanedFeed(title=author, link=feed_link, description=feed_description, items=items)

    def clean_description(self, html: str, rule_set: RuleSet, *, link: Optional[str] = None) -> str:
        """Rule engine first, junk cleaner second; each stage falls back to its input."""
        if not html:
            return html

        cleaned = html
        try:
            cleaned = self._rules.clean(cleaned, rule_set)
        except ParseError as e:
            logger.warning("description_clean_failed", stage="rules", link=link, error=str(e))

        try:
            cleaned = self._junk.clean(cleaned)
        except ParseError as e:
            logger.warning("description_clean_failed", stage="junk", link=link, error=str(e))

        return cleaned

    def strip_title_suffix(self, title: str) -> str:
        return self._title_suffix.sub("", title)


def extract_and_clean(feed_xml: str, rule_set: RuleSet, limit: int) -> CleanedFeed:
    return FeedExtractor().extract_and_clean(feed_xml, rule_set, limit)
