"""Rule and source configuration models.

Accepts the camelCase JSON shape used by hand-written source configs
(``textMatch``, ``attrMatch``, ``displayName``, ``rssUrl``, ``cleanRules``)
as well as the snake_case field names.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain.models import Action, TextMatchMode


class TextMatch(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    mode: TextMatchMode = Field(alias="type")
    value: str


class AttrMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    # A leading "^" means literal prefix; anything else is a regular expression.
    pattern: str


class CleanRule(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    description: str = ""
    selector: str = Field(..., min_length=1)
    action: Action
    text_match: Optional[TextMatch] = Field(default=None, alias="textMatch")
    attr_match: Optional[AttrMatch] = Field(default=None, alias="attrMatch")


class SourceConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(..., min_length=1)
    display_name: str = Field(default="", alias="displayName")
    rss_url: str = Field(alias="rssUrl")
    clean_rules: List[CleanRule] = Field(default_factory=list, alias="cleanRules")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v or "/" in v:
            raise ValueError("name must be a non-empty path segment")
        return v

    @field_validator("rss_url")
    @classmethod
    def validate_rss_url(cls, v: str) -> str:
        v = v.strip()
        if not (v.startswith("http://") or v.startswith("https://")):
            raise ValueError("rss_url must start with http:// or https://")
        return v
