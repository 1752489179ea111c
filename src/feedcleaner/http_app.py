"""FastAPI app.

Serves cleaned feeds as JSON (RSS/Atom rendering is left to the consumer) and
an ad-hoc cleaning endpoint for trying out rule sets.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from .domain.errors import (
    CleanerDomainError,
    FeedFetchError,
    InvalidRuleError,
    NetworkTimeoutError,
    ParseError,
    RegexError,
    SelectorError,
    UnknownSourceError,
)
from .observability.logger import get_logger
from .processing.junk_cleaner import JunkCleaner
from .processing.rule_engine import RuleEngine
from .processing.rule_set import RuleSet

logger = get_logger(__name__)

# Global app state populated during lifespan startup
app_state: dict = {}

app = FastAPI(title="Feed Cleaner", version="0.1.0")


class CleanRequest(BaseModel):
    html: str
    rules: List[Dict[str, Any]] = Field(default_factory=list)
    commonCleanup: bool = True


def _error_detail(exc: CleanerDomainError) -> dict:
    info = exc.info
    return {"code": info.code, "message": info.message, "detail": info.detail}


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}


@app.get("/api/v1/sources")
async def list_sources():
    service = _feed_service()
    out = []
    for name in service.registry.names():
        source = service.registry.get(name)
        out.append(
            {
                "name": name,
                "displayName": source.config.display_name,
                "rules": source.rule_set.descriptions(),
            }
        )
    return {"sources": out}


@app.get("/api/v1/sources/{name}/feed")
async def source_feed(name: str, limit: Optional[int] = Query(default=None, ge=0)):
    service = _feed_service()
    try:
        feed = await service.build_feed(name, limit=limit)
    except UnknownSourceError as exc:
        raise HTTPException(status_code=404, detail=_error_detail(exc)) from exc
    except NetworkTimeoutError as exc:
        raise HTTPException(status_code=504, detail=_error_detail(exc)) from exc
    except (FeedFetchError, ParseError) as exc:
        logger.warning("feed_unavailable", source=name, code=exc.info.code, error=str(exc))
        raise HTTPException(status_code=502, detail=_error_detail(exc)) from exc
    return asdict(feed)


@app.post("/api/v1/clean")
async def clean(payload: CleanRequest):
    try:
        rule_set = RuleSet.compile(payload.rules)
    except (InvalidRuleError, SelectorError, RegexError) as exc:
        raise HTTPException(status_code=400, detail=_error_detail(exc)) from exc

    # Each stage falls back to its input on ParseError, as feed items do.
    html = payload.html
    try:
        html = RuleEngine().clean(html, rule_set)
    except ParseError as exc:
        logger.warning("clean_request_failed", stage="rules", error=str(exc))
    if payload.commonCleanup:
        try:
            html = JunkCleaner().clean(html)
        except ParseError as exc:
            logger.warning("clean_request_failed", stage="junk", error=str(exc))
    return {"html": html}


def _feed_service():
    service = app_state.get("feed_service")
    if service is None:
        raise HTTPException(status_code=503, detail="feed_service_unavailable")
    return service
