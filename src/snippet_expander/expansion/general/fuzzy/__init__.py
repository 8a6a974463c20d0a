# src/snippet_expander/expansion/general/fuzzy/__init__.py
"""
fuzzy.

Does: Facade over the lexical scorer, the bounded edit-distance approximator,
and alias suggestions.

Returns: Public API for tiered scoring, typo-tolerant scoring, and
"did you mean" lookups.
Used by: Ranking aggregator, orchestrator, CLI.
"""

from __future__ import annotations

# ── Edit distance ────────────────────────────────────────────────────────────
from .edit_distance import (
    allowed_edit_distance,
    approx_alias_score,
    approx_token_score,
    bounded_edit_distance,
    max_length_gap,
)

# ── Scoring ──────────────────────────────────────────────────────────────────
from .scoring import (
    TIERS,
    SubsequenceThresholds,
    boundary_hit,
    clear_scoring_cache,
    default_thresholds,
    load_scoring_config,
    match_tier,
    score,
    subsequence_score,
)

# ── Suggestions ──────────────────────────────────────────────────────────────
from .suggest import suggest_alias

__all__ = [
    # Edit distance
    "allowed_edit_distance",
    "bounded_edit_distance",
    "max_length_gap",
    "approx_alias_score",
    "approx_token_score",
    # Scoring
    "score",
    "match_tier",
    "subsequence_score",
    "boundary_hit",
    "TIERS",
    "SubsequenceThresholds",
    "default_thresholds",
    "load_scoring_config",
    "clear_scoring_cache",
    # Suggestions
    "suggest_alias",
]

__docformat__ = "google"
