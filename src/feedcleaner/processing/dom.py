"""DOM adapter over BeautifulSoup.

Every cleaning call parses its own Document and discards it after
serialization; node handles never outlive that call. Navigation helpers only
return element nodes, so text between elements is never selected or removed
by sibling-based actions.
"""

from __future__ import annotations

from typing import List, Optional, Union

import soupsieve
from bs4 import BeautifulSoup, CData, Comment, NavigableString, ParserRejectedMarkup, Tag
from bs4.element import Script, Stylesheet, TemplateString
from lxml import etree

from ..domain.errors import ParseError, SelectorError

Selector = Union[str, soupsieve.SoupSieve]


def compile_selector(selector: str) -> soupsieve.SoupSieve:
    """Compile a CSS selector once; raises SelectorError on invalid syntax."""
    try:
        return soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as e:
        raise SelectorError(f"invalid CSS selector: {selector!r}", detail=str(e)) from e


class Document:
    """A parsed, mutable HTML/XML tree owned by a single cleaning call."""

    def __init__(self, soup: BeautifulSoup):
        self._soup = soup
        self._had_body = soup.find("body") is not None

    @property
    def soup(self) -> BeautifulSoup:
        return self._soup

    def select(self, selector: Selector) -> List[Tag]:
        """Return matching elements in document order."""
        compiled = selector if isinstance(selector, soupsieve.SoupSieve) else compile_selector(selector)
        return compiled.select(self._soup)

    def serialize_body(self) -> str:
        body = self._soup.find("body")
        if body is not None:
            return body.decode_contents()
        if self._had_body:
            # A rule removed <body> itself.
            return ""
        return self._soup.decode_contents()


def parse_html(html: str, parser: str = "lxml") -> Document:
    return Document(_build_soup(html, parser))


def parse_xml(xml: str) -> Document:
    """Parse in strict markup mode (lxml-xml): CDATA stays text, not structure."""
    return Document(_build_soup(xml, "xml"))


def _build_soup(markup: str, parser: str) -> BeautifulSoup:
    if not isinstance(markup, (str, bytes)):
        raise ParseError("markup must be text", detail=type(markup).__name__)
    try:
        return BeautifulSoup(markup, parser)
    except ParserRejectedMarkup as e:
        raise ParseError("parser rejected markup", detail=str(e)) from e
    except etree.LxmlError as e:
        raise ParseError("malformed markup", detail=str(e)) from e
    except (ValueError, TypeError) as e:
        raise ParseError("failed to parse markup", detail=str(e)) from e


# Script and style bodies count as text; comments do not.
_TEXT_TYPES = (NavigableString, CData, Script, Stylesheet, TemplateString)


def text(node: Tag) -> str:
    return node.get_text(types=_TEXT_TYPES)


def inner_html(node: Tag) -> Optional[str]:
    if not isinstance(node, Tag) or is_removed(node):
        return None
    return node.decode_contents()


def attr(node: Tag, name: str) -> Optional[str]:
    value = node.get(name)
    if value is None:
        return None
    # bs4 splits multi-valued attributes (class, rel, ...) into lists.
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return str(value)


def parent(node: Tag) -> Optional[Tag]:
    p = node.parent
    if p is None or isinstance(p, BeautifulSoup):
        return None
    return p


def siblings(node: Tag) -> List[Tag]:
    p = node.parent
    if p is None:
        return []
    return [s for s in p.children if isinstance(s, Tag) and s is not node]


def next_all(node: Tag) -> List[Tag]:
    return [s for s in node.next_siblings if isinstance(s, Tag)]


def is_removed(node) -> bool:
    return isinstance(node, Tag) and node.decomposed


def remove(node) -> None:
    """Detach a node and its subtree. Removing twice is a no-op."""
    if is_removed(node):
        return
    if isinstance(node, Tag):
        node.decompose()
    else:
        node.extract()


def is_empty(node: Tag) -> bool:
    """True when a node has no element children and no text (comments ignored)."""
    for child in node.children:
        if isinstance(child, Tag):
            return False
        if isinstance(child, Comment):
            continue
        if str(child) != "":
            return False
    return True
