"""Structural actions applied to a (filtered) node set."""

from __future__ import annotations

from typing import List

from bs4 import Tag

from ..domain.models import Action
from . import dom


def execute(nodes: List[Tag], action: Action) -> int:
    """Apply ``action`` to ``nodes`` in document order.

    Returns the number of subtrees removed. Every match is processed, not just
    the first; matches already removed by an earlier match of the same action
    are skipped.
    """
    if not nodes:
        return 0

    if action == Action.KEEP_ONLY:
        return _keep_only(nodes)
    if action == Action.REMOVE:
        return _remove_all(nodes)
    if action == Action.REMOVE_AFTER:
        return _remove_after(nodes)
    if action == Action.REMOVE_PARENT_AFTER:
        return _remove_parent_after(nodes)
    raise ValueError(f"unsupported action: {action!r}")


def _keep_only(nodes: List[Tag]) -> int:
    # Targets are collected from the untouched tree before anything is removed.
    # bs4 Tags compare by markup, so membership is tracked by identity.
    matched = {id(n) for n in nodes}
    seen: set[int] = set()
    targets: list[Tag] = []
    for node in nodes:
        for sibling in dom.siblings(node):
            key = id(sibling)
            if key in matched or key in seen:
                continue
            seen.add(key)
            targets.append(sibling)
    return _remove_all(targets)


def _remove_all(nodes: List[Tag]) -> int:
    removed = 0
    for node in nodes:
        if dom.is_removed(node):
            continue
        dom.remove(node)
        removed += 1
    return removed


def _remove_after(nodes: List[Tag]) -> int:
    removed = 0
    for node in nodes:
        if dom.is_removed(node):
            continue
        removed += _remove_all(dom.next_all(node))
        dom.remove(node)
        removed += 1
    return removed


def _remove_parent_after(nodes: List[Tag]) -> int:
    removed = 0
    for node in nodes:
        if dom.is_removed(node):
            continue
        p = dom.parent(node)
        if p is None:
            continue
        removed += _remove_all(dom.next_all(p))
        dom.remove(p)
        removed += 1
    return removed
