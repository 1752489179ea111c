"""Predicate evaluation: narrowing a selected node set by text/attribute clauses.

Patterns are compiled when a rule set is compiled, never per document.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Iterable, List, Optional, Pattern

from bs4 import Tag

from ..domain.errors import RegexError
from ..domain.models import TextMatchMode
from . import dom

if TYPE_CHECKING:
    from .rule_set import CompiledRule


def compile_pattern(pattern: str) -> Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise RegexError(f"invalid regular expression: {pattern!r}", detail=str(e)) from e


class TextMatchPredicate:
    """Matches a node's trimmed text content."""

    def __init__(self, mode: TextMatchMode, value: str):
        self.mode = mode
        self.value = value
        self._regex: Optional[Pattern[str]] = compile_pattern(value) if mode == TextMatchMode.REGEX else None

    def __call__(self, node: Tag) -> bool:
        content = dom.text(node).strip()
        if self.mode == TextMatchMode.STARTS_WITH:
            return content.startswith(self.value)
        if self.mode == TextMatchMode.CONTAINS:
            return self.value in content
        if self.mode == TextMatchMode.EQUALS:
            return content == self.value
        if self.mode == TextMatchMode.REGEX and self._regex is not None:
            return self._regex.search(content) is not None
        # Unrecognised modes reject everything.
        return False

    def __repr__(self) -> str:
        return f"TextMatchPredicate(mode={self.mode!r}, value={self.value!r})"


class AttrMatchPredicate:
    """Matches an attribute value by literal prefix (``^foo``) or regex."""

    def __init__(self, name: str, pattern: str):
        self.name = name
        self.pattern = pattern
        self._prefix: Optional[str] = pattern[1:] if pattern.startswith("^") else None
        self._regex: Optional[Pattern[str]] = None if self._prefix is not None else compile_pattern(pattern)

    def __call__(self, node: Tag) -> bool:
        value = dom.attr(node, self.name)
        if not value:
            return False
        if self._prefix is not None:
            return value.startswith(self._prefix)
        return self._regex.search(value) is not None

    def __repr__(self) -> str:
        return f"AttrMatchPredicate(name={self.name!r}, pattern={self.pattern!r})"


def narrow(nodes: Iterable[Tag], predicate) -> List[Tag]:
    return [n for n in nodes if predicate(n)]


def apply_filters(nodes: List[Tag], rule: "CompiledRule") -> List[Tag]:
    """Apply a rule's filters in order (text first, then attribute)."""
    for predicate in rule.filters:
        if not nodes:
            break
        nodes = narrow(nodes, predicate)
    return nodes
