#!/usr/bin/env python3
"""Validate JSON source configs (selectors, patterns, schema) before deploying them.

Usage:
    python scripts/validate_rules.py rules/*.json
"""

from __future__ import annotations

import sys

from feedcleaner.domain.errors import CleanerDomainError
from feedcleaner.sources.registry import SourceRegistry


def main(paths: list[str]) -> int:
    if not paths:
        print("usage: validate_rules.py FILE [FILE ...]", file=sys.stderr)
        return 2

    registry = SourceRegistry()
    failed = 0
    for p in paths:
        try:
            source = registry.load_file(p)
            print(f"{p} OK source={source.name} rules={len(source.rule_set)}")
        except CleanerDomainError as e:
            failed += 1
            print(f"{p} {e.info.code}: {e.info.message}")
            if e.info.detail:
                print(f"    {e.info.detail[:500]}")
        except OSError as e:
            failed += 1
            print(f"{p} ERROR {type(e).__name__}: {e}")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
