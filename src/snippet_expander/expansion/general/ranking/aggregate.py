# src/snippet_expander/expansion/general/ranking/aggregate.py
from __future__ import annotations

"""
aggregate.py

Does: Combine alias and body-text scores per shortcut, drop non-matches, and
      order results deterministically (score ↓, enabled first, alias A→Z).
Returns: score_shortcut(), rank_and_filter(), rank_with_scores().
Used by: Orchestrator search and the CLI `search` command.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from snippet_expander.expansion.general.fuzzy.edit_distance import (
    approx_alias_score,
    approx_token_score,
)
from snippet_expander.expansion.general.fuzzy.scoring import (
    SubsequenceThresholds,
    load_scoring_config,
    score,
)
from snippet_expander.expansion.general.types import ScoreResult, ShortcutRecord

__all__ = [
    "score_shortcut",
    "rank_and_filter",
    "rank_with_scores",
]

__docformat__ = "google"

# ── Logging ──────────────────────────────────────────────────────────────────
log = logging.getLogger(__name__)


def score_shortcut(
    record: ShortcutRecord,
    query: str,
    *,
    thresholds: Optional[SubsequenceThresholds] = None,
) -> float:
    """
    Does: max(best alias score × alias weight, best text score × text weight),
          where "best" is the stricter tiered score or the typo-tolerant one.
    Returns: Score ≥ 0; 0 means the record is excluded.
    """
    weights = load_scoring_config()["weights"]

    alias_score = max(
        score(record.alias, query, thresholds=thresholds),
        approx_alias_score(record.alias, query),
    ) * weights["alias"]
    text_score = max(
        score(record.expansion_text, query, thresholds=thresholds),
        approx_token_score(record.expansion_text, query),
    ) * weights["text"]

    combined = max(alias_score, text_score)
    return combined if combined > 0 else 0.0


def _sort_key(item: ScoreResult) -> tuple:
    return (-item.score, not item.record.enabled, item.record.alias.casefold())


def rank_with_scores(
    records: Iterable[ShortcutRecord],
    query: str,
    *,
    thresholds: Optional[SubsequenceThresholds] = None,
    debug: bool = False,
) -> List[ScoreResult]:
    """
    Does: Score every record, keep positives, and sort (stable, so records
          tied on score, enabled flag and alias stay in input order).
    Returns: List of ScoreResult, every score > 0. The one exception is a
             blank query, which means "show everything": all records come
             back in input order, each with score 0.0.
    """
    items: Sequence[ShortcutRecord] = list(records)
    q = (query or "").strip()
    if not q:
        return [ScoreResult(r, 0.0) for r in items]

    scored = [ScoreResult(r, score_shortcut(r, q, thresholds=thresholds)) for r in items]
    kept = [s for s in scored if s.score > 0]
    kept.sort(key=_sort_key)

    if debug:
        log.debug("[RANK] q=%r kept %d/%d", q, len(kept), len(items))
        for s in kept[:10]:
            log.debug("  %8.1f  !%s%s", s.score, s.record.alias, "" if s.record.enabled else " (disabled)")
    return kept


def rank_and_filter(
    records: Iterable[ShortcutRecord],
    query: str,
    *,
    thresholds: Optional[SubsequenceThresholds] = None,
    debug: bool = False,
) -> List[ShortcutRecord]:
    """
    Does: Search view over a record collection. Blank query → all records in
          input order; otherwise matches only, best first.
    Returns: List of ShortcutRecord.
    """
    return [s.record for s in rank_with_scores(records, query, thresholds=thresholds, debug=debug)]
