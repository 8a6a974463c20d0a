"""
ranking.

Does: Per-record score aggregation and deterministic result ordering.
Exports: score_shortcut, rank_and_filter, rank_with_scores
"""

from __future__ import annotations

from .aggregate import (
    rank_and_filter,
    rank_with_scores,
    score_shortcut,
)

__all__ = [
    "score_shortcut",
    "rank_and_filter",
    "rank_with_scores",
]
