# snippet_expander/expansion/__init__.py

"""
expansion.
==========

Does: Public facade of the alias expansion and shortcut search core.
Returns: Token scanning/substitution, tiered and typo-tolerant scoring,
         ranking, record types, and orchestration helpers.
Used by: The CLI and embedding applications.
"""
from __future__ import annotations

from .general.fuzzy import (
    allowed_edit_distance,
    approx_alias_score,
    approx_token_score,
    bounded_edit_distance,
    match_tier,
    score,
    suggest_alias,
)
from .general.ranking import (
    rank_and_filter,
    rank_with_scores,
    score_shortcut,
)
from .general.token import (
    Segment,
    extract_tokens,
    is_escaped_literal,
    scan_segments,
    substitute,
    unescape,
    unknown_tokens,
)
from .general.types import (
    AliasMap,
    InvalidAliasError,
    RecordFormatError,
    ScoreResult,
    ShortcutRecord,
    is_valid_alias,
    new_shortcut,
)
from .orchestrator import (
    ExpansionResult,
    build_alias_map,
    expand_text,
    replace_tokens,
    search_shortcuts,
)

__all__ = [
    # tokens
    "Segment",
    "scan_segments",
    "extract_tokens",
    "is_escaped_literal",
    "substitute",
    "unescape",
    "unknown_tokens",
    # scoring
    "score",
    "match_tier",
    "allowed_edit_distance",
    "bounded_edit_distance",
    "approx_alias_score",
    "approx_token_score",
    "suggest_alias",
    # ranking
    "score_shortcut",
    "rank_and_filter",
    "rank_with_scores",
    # types
    "AliasMap",
    "ShortcutRecord",
    "ScoreResult",
    "InvalidAliasError",
    "RecordFormatError",
    "is_valid_alias",
    "new_shortcut",
    # orchestration
    "ExpansionResult",
    "build_alias_map",
    "replace_tokens",
    "expand_text",
    "search_shortcuts",
]
__docformat__ = "google"
