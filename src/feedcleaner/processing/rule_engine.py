"""Rule-driven HTML cleaning: parse, then select -> filter -> act per rule."""

from __future__ import annotations

from typing import Iterable, Union

from ..observability.logger import get_logger
from . import dom
from .actions import execute
from .predicates import apply_filters
from .rule_set import RuleLike, RuleSet

logger = get_logger(__name__)


class RuleEngine:
    """Processing layer component: source-specific cleaning.

    Rules:
    - Rules run in declared order; each sees the tree as left by the previous one
    - A rule that selects nothing is a no-op, never an error
    - Output for a given (html, rule set) pair is always the same
    """

    def __init__(self, parser: str = "lxml"):
        self._parser = parser

    def clean(self, html: str, rules: Union[RuleSet, Iterable[RuleLike]]) -> str:
        rule_set = rules if isinstance(rules, RuleSet) else RuleSet.compile(rules)

        doc = dom.parse_html(html, self._parser)
        for rule in rule_set:
            nodes = doc.select(rule.selector)
            selected = len(nodes)
            nodes = apply_filters(nodes, rule)
            removed = execute(nodes, rule.action)
            logger.debug(
                "rule_applied",
                rule=rule.description or rule.rule.selector,
                action=rule.action.value,
                selected=selected,
                matched=len(nodes),
                removed=removed,
            )
        return doc.serialize_body()


def clean_html(html: str, rules: Union[RuleSet, Iterable[RuleLike]], *, parser: str = "lxml") -> str:
    return RuleEngine(parser=parser).clean(html, rules)
