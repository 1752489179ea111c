"""Generic junk cleanup applied after source-specific rules.

Fixed passes, each on a disjoint concern:
1. tracking pixels (1x1 images)
2. hidden elements (inline display:none / visibility:hidden)
3. empty <p> / <div>
4. <iframe>, <script>, <style>
5. platform widgets (class contains the widget marker)
"""

from __future__ import annotations

import re
from typing import Dict, Optional

from bs4 import Tag

from . import dom

_PIXEL_SIZES = {"1", "1px"}
_HIDDEN_STYLE = re.compile(r"display:\s?none|visibility:\s?hidden", re.IGNORECASE)
_EMBED_SELECTOR = dom.compile_selector("iframe, script, style")
_EMPTY_CANDIDATES = dom.compile_selector("p, div")


def _inline_style(node: Tag) -> Dict[str, str]:
    style = dom.attr(node, "style") or ""
    out: dict[str, str] = {}
    for decl in style.split(";"):
        prop, sep, value = decl.partition(":")
        if not sep:
            continue
        prop = prop.strip().lower()
        if prop:
            out[prop] = value.strip()
    return out


def _dimension(node: Tag, name: str) -> Optional[str]:
    # The attribute wins when present and non-empty; inline style otherwise.
    value = dom.attr(node, name)
    if value:
        return value.strip()
    return _inline_style(node).get(name)


def is_tracking_pixel(node: Tag) -> bool:
    return _dimension(node, "width") in _PIXEL_SIZES and _dimension(node, "height") in _PIXEL_SIZES


def is_hidden(node: Tag) -> bool:
    style = dom.attr(node, "style")
    return bool(style) and _HIDDEN_STYLE.search(style) is not None


class JunkCleaner:
    """Processing layer component: universal noise removal."""

    def __init__(self, widget_class_marker: str = "js_wx_", parser: str = "lxml"):
        self._marker = widget_class_marker
        self._parser = parser

    def clean(self, html: str) -> str:
        doc = dom.parse_html(html, self._parser)

        for img in doc.select("img"):
            if is_tracking_pixel(img):
                dom.remove(img)

        for node in doc.soup.find_all(style=True):
            if not dom.is_removed(node) and is_hidden(node):
                dom.remove(node)

        for node in doc.select(_EMPTY_CANDIDATES):
            if dom.is_empty(node):
                dom.remove(node)

        for node in doc.select(_EMBED_SELECTOR):
            dom.remove(node)

        for node in doc.soup.find_all(class_=True):
            if dom.is_removed(node):
                continue
            if self._marker in (dom.attr(node, "class") or ""):
                dom.remove(node)

        return doc.serialize_body()


def clean_common_issues(html: str, *, widget_class_marker: str = "js_wx_", parser: str = "lxml") -> str:
    return JunkCleaner(widget_class_marker=widget_class_marker, parser=parser).clean(html)
