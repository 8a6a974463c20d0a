# src/snippet_expander/expansion/general/fuzzy/suggest.py
from __future__ import annotations

"""
suggest.py

Does: "Did you mean" lookup for a typed token that is not a known alias.
Returns: suggest_alias() → closest enabled alias or None.
Used by: Orchestrator (expand_text) and the CLI `expand` command.
"""

import logging
from typing import Optional

from rapidfuzz import fuzz, process  # performant, no numpy dependency

from snippet_expander.expansion.general.types import AliasMap

__all__ = ["suggest_alias", "SUGGEST_THRESHOLD"]

__docformat__ = "google"

# ── Logging ──────────────────────────────────────────────────────────────────
log = logging.getLogger(__name__)

# ── Tunables ─────────────────────────────────────────────────────────────────
SUGGEST_THRESHOLD = 80     # fuzz.ratio in [0, 100]
LENGTH_DELTA_SKIP = 3      # candidates this much longer/shorter are never suggested


def suggest_alias(
    token: str,
    alias_map: AliasMap,
    *,
    threshold: int = SUGGEST_THRESHOLD,
    debug: bool = False,
) -> Optional[str]:
    """
    Does: Exact case-insensitive hit first, then best fuzz.ratio among map keys
          of similar length.
    Returns: The alias key, or None for an empty token/map or a score below threshold.
    """
    raw = (token or "").strip().lower()
    if not raw or not alias_map:
        return None
    if raw in alias_map:
        return raw

    candidates = [a for a in alias_map if abs(len(a) - len(raw)) <= LENGTH_DELTA_SKIP]
    if not candidates:
        if debug:
            log.debug("[SUGGEST] %r: no candidate within length gate", raw)
        return None

    best = process.extractOne(raw, candidates, scorer=fuzz.ratio, score_cutoff=threshold)
    if best is None:
        if debug:
            log.debug("[SUGGEST] %r: nothing ≥ %d", raw, threshold)
        return None

    choice, best_score, _ = best
    if debug:
        log.debug("[SUGGEST] %r → %r (%.1f)", raw, choice, best_score)
    return choice
