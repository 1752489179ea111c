"""Compiled, immutable rule sets.

Compiling a rule set validates every selector and pattern up front, so a bad
configuration fails on load (SelectorError / RegexError / InvalidRuleError)
instead of on the first request that hits it. A compiled RuleSet holds no
per-document state and is safe to share between concurrent cleaning calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping, Tuple, Union

import soupsieve
from pydantic import ValidationError

from ..domain.errors import InvalidRuleError
from ..domain.models import Action
from ..models.rules import CleanRule
from .dom import compile_selector
from .predicates import AttrMatchPredicate, TextMatchPredicate

RuleLike = Union[CleanRule, Mapping[str, Any]]


@dataclass(frozen=True)
class CompiledRule:
    rule: CleanRule
    selector: soupsieve.SoupSieve
    filters: Tuple[Any, ...]

    @property
    def action(self) -> Action:
        return self.rule.action

    @property
    def description(self) -> str:
        return self.rule.description


def compile_rule(rule: RuleLike) -> CompiledRule:
    if not isinstance(rule, CleanRule):
        try:
            rule = CleanRule.model_validate(rule)
        except ValidationError as e:
            raise InvalidRuleError("invalid clean rule", detail=str(e)) from e

    filters: list = []
    if rule.text_match is not None:
        filters.append(TextMatchPredicate(rule.text_match.mode, rule.text_match.value))
    if rule.attr_match is not None:
        filters.append(AttrMatchPredicate(rule.attr_match.name, rule.attr_match.pattern))

    return CompiledRule(rule=rule, selector=compile_selector(rule.selector), filters=tuple(filters))


class RuleSet:
    """An ordered sequence of compiled rules bound to one content source."""

    def __init__(self, rules: Iterable[CompiledRule] = ()):
        self._rules: Tuple[CompiledRule, ...] = tuple(rules)

    @classmethod
    def compile(cls, rules: Iterable[RuleLike]) -> "RuleSet":
        return cls(compile_rule(r) for r in rules)

    @property
    def rules(self) -> Tuple[CompiledRule, ...]:
        return self._rules

    def descriptions(self) -> list[str]:
        return [r.description for r in self._rules]

    def __iter__(self) -> Iterator[CompiledRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleSet({len(self._rules)} rules)"
