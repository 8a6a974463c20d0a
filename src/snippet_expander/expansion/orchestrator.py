# orchestrator.py
from __future__ import annotations

"""
orchestrator.py
===============

Does: High-level flows over a record collection: build the alias-map snapshot,
      expand text with it, and run a scored search.
Returns:
  - build_alias_map(records) -> read-only {alias.lower(): record} (enabled only)
  - replace_tokens(text, records) -> expanded text
  - expand_text(text, alias_map) -> ExpansionResult(text, expanded, unknown, changed)
  - search_shortcuts(records, query, limit) -> [ScoreResult, ...]
Used by: The CLI and any UI layer that reacts to submit/keystroke events.
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, NamedTuple, Optional

from snippet_expander.expansion.general.ranking.aggregate import rank_with_scores
from snippet_expander.expansion.general.token.scanner import extract_tokens
from snippet_expander.expansion.general.token.substitute import substitute
from snippet_expander.expansion.general.types import (
    AliasMap,
    ScoreResult,
    ShortcutRecord,
)

__all__ = [
    "ExpansionResult",
    "build_alias_map",
    "replace_tokens",
    "expand_text",
    "search_shortcuts",
]

logger = logging.getLogger(__name__)


class ExpansionResult(NamedTuple):
    text: str
    expanded: List[str]     # lower-cased aliases that were replaced, in order
    unknown: List[str]      # tokens with no enabled record, as written
    changed: bool


def build_alias_map(records: Iterable[ShortcutRecord]) -> AliasMap:
    """
    Does: Snapshot enabled records keyed by lower-cased alias; a later record
          with the same alias replaces an earlier one.
    Returns: Read-only mapping.
    """
    out: Dict[str, ShortcutRecord] = {}
    for record in records:
        if record.enabled:
            out[record.alias.lower()] = record
    return MappingProxyType(out)


def replace_tokens(text: str, records: Iterable[ShortcutRecord]) -> str:
    """Does: One-shot expansion straight from a record collection."""
    return substitute(text, build_alias_map(records))


def expand_text(text: str, alias_map: AliasMap, *, debug: bool = False) -> ExpansionResult:
    """
    Does: Expand `text` and report which tokens were used or left unresolved.
    Returns: ExpansionResult; `changed` is False when the output equals the input.
    """
    expanded: List[str] = []
    unknown: List[str] = []
    for alias in extract_tokens(text):
        key = alias.lower()
        if key in alias_map:
            expanded.append(key)
        else:
            unknown.append(alias)

    out = substitute(text, alias_map, debug=debug)
    if debug:
        logger.debug("[EXPAND] %d expanded, %d unknown", len(expanded), len(unknown))
    return ExpansionResult(out, expanded, unknown, out != text)


def search_shortcuts(
    records: Iterable[ShortcutRecord],
    query: str,
    *,
    limit: Optional[int] = None,
    debug: bool = False,
) -> List[ScoreResult]:
    """
    Does: Ranked search with scores; blank query lists everything in input order.
    Returns: At most `limit` ScoreResult items (all when limit is None).
    """
    results = rank_with_scores(records, query, debug=debug)
    if limit is not None:
        results = results[: max(0, limit)]
    return results
