"""Source registry: named feed sources bound to compiled rule sets."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Union

from pydantic import ValidationError

from ..domain.errors import InvalidRuleError, UnknownSourceError
from ..models.rules import SourceConfig
from ..observability.logger import get_logger
from ..processing.rule_set import RuleSet
from .builtin import BUILTIN_SOURCES

logger = get_logger(__name__)


@dataclass(frozen=True)
class RegisteredSource:
    config: SourceConfig
    rule_set: RuleSet

    @property
    def name(self) -> str:
        return self.config.name


class SourceRegistry:
    """Holds every configured source; rule sets are compiled on registration."""

    def __init__(self) -> None:
        self._sources: Dict[str, RegisteredSource] = {}

    def register(self, config: Union[SourceConfig, Mapping[str, Any]]) -> RegisteredSource:
        if not isinstance(config, SourceConfig):
            try:
                config = SourceConfig.model_validate(config)
            except ValidationError as e:
                raise InvalidRuleError("invalid source configuration", detail=str(e)) from e

        # SelectorError / RegexError propagate: a bad rule rejects the whole source.
        rule_set = RuleSet.compile(config.clean_rules)
        source = RegisteredSource(config=config, rule_set=rule_set)
        if config.name in self._sources:
            logger.warning("source_overridden", source=config.name)
        self._sources[config.name] = source
        logger.debug("source_registered", source=config.name, rules=len(rule_set))
        return source

    def register_all(self, configs: Iterable[Union[SourceConfig, Mapping[str, Any]]]) -> None:
        for config in configs:
            self.register(config)

    def load_file(self, path: Union[str, Path]) -> RegisteredSource:
        path = Path(path)
        try:
            config = SourceConfig.model_validate_json(path.read_text(encoding="utf-8"))
        except ValidationError as e:
            raise InvalidRuleError(f"invalid source configuration in {path.name}", detail=str(e)) from e
        return self.register(config)

    def load_dir(self, directory: Union[str, Path]) -> List[RegisteredSource]:
        return [self.load_file(p) for p in sorted(Path(directory).glob("*.json"))]

    def get(self, name: str) -> RegisteredSource:
        source = self._sources.get(name)
        if source is None:
            raise UnknownSourceError(f"unknown source: {name}")
        return source

    def names(self) -> List[str]:
        return sorted(self._sources)

    def __contains__(self, name: object) -> bool:
        return name in self._sources

    def __len__(self) -> int:
        return len(self._sources)


def build_default_registry(rules_dir: str | None = None) -> SourceRegistry:
    registry = SourceRegistry()
    registry.register_all(BUILTIN_SOURCES)
    if rules_dir:
        registry.load_dir(rules_dir)
    logger.info("source_registry_built", sources=registry.names())
    return registry
