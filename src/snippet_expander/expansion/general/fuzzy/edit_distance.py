# src/snippet_expander/expansion/general/fuzzy/edit_distance.py
from __future__ import annotations

"""
edit_distance.py

Does: Typo tolerance for search: length-scaled edit budget, bounded Levenshtein
      with early abort, and approximate scores for aliases and body-text words.
Returns: allowed_edit_distance, bounded_edit_distance, approx_alias_score,
         approx_token_score.
Used by: Ranking aggregator (score_shortcut).
"""

import math

from snippet_expander.expansion.general.token.normalize import (
    MIN_WORD_LEN,
    fold,
    fold_query,
    word_tokens,
)

__all__ = [
    "allowed_edit_distance",
    "max_length_gap",
    "bounded_edit_distance",
    "approx_alias_score",
    "approx_token_score",
]

__docformat__ = "google"

# ── Tunables ─────────────────────────────────────────────────────────────────
MIN_APPROX_QUERY_LEN = 3    # queries of 1–2 chars never get typo slack
LEN_GAP_MIN = 2             # length-difference gate: max(2, floor(q * 0.4))
LEN_GAP_RATIO = 0.4
ALIAS_APPROX_BASE = 920
TOKEN_APPROX_BASE = 780     # typo hit in body text is a weaker signal
PER_EDIT_PENALTY = 80
SAME_LENGTH_BONUS = 10


def allowed_edit_distance(length: int) -> int:
    """
    Does: Edit budget for a query of `length` chars: 0 (≤2), 1 (≤7), else 2.
    Returns: Int.
    """
    if length <= 2:
        return 0
    if length <= 7:
        return 1
    return 2


def max_length_gap(query_len: int) -> int:
    """Does: Largest |len(candidate) - len(query)| worth computing a distance for."""
    return max(LEN_GAP_MIN, math.floor(query_len * LEN_GAP_RATIO))


def bounded_edit_distance(a: str, b: str, max_dist: int) -> int:
    """
    Does: Levenshtein distance (unit insert/delete/substitute) with two rolling
          rows sized by the shorter string. Gives up early when the length
          difference, or the minimum of a finished row, already exceeds `max_dist`.
    Returns: Exact distance when ≤ max_dist, otherwise the sentinel max_dist + 1.
    """
    max_dist = max(0, max_dist)
    if a == b:
        return 0
    over = max_dist + 1
    if abs(len(a) - len(b)) > max_dist:
        return over

    # rows are indexed by the shorter string
    if len(a) < len(b):
        a, b = b, a
    width = len(b) + 1
    prev = list(range(width))
    curr = [0] * width

    for i, ca in enumerate(a, start=1):
        curr[0] = i
        row_min = i
        for j in range(1, width):
            cost = 0 if ca == b[j - 1] else 1
            v = prev[j] + 1
            ins = curr[j - 1] + 1
            if ins < v:
                v = ins
            sub = prev[j - 1] + cost
            if sub < v:
                v = sub
            curr[j] = v
            if v < row_min:
                row_min = v
        if row_min > max_dist:
            return over
        prev, curr = curr, prev

    return min(prev[width - 1], over)


def approx_alias_score(alias: str, query: str) -> float:
    """
    Does: Typo-tolerant alias match: 920 − 80·distance (+10 when lengths match).
    Returns: Score, or 0 for short queries, length gaps, or too many edits.
    """
    a = fold(alias)
    q = fold_query(query)
    qlen = len(q)
    if qlen < MIN_APPROX_QUERY_LEN:
        return 0.0
    if abs(len(a) - qlen) > max_length_gap(qlen):
        return 0.0

    max_dist = allowed_edit_distance(qlen)
    d = bounded_edit_distance(a, q, max_dist)
    if d > max_dist:
        return 0.0
    bonus = SAME_LENGTH_BONUS if len(a) == qlen else 0
    return float(ALIAS_APPROX_BASE - PER_EDIT_PENALTY * d + bonus)


def approx_token_score(text: str, query: str) -> float:
    """
    Does: Best typo-tolerant hit of `query` against words (≥3 alnum chars) of `text`.
    Returns: 780 − 80·min_distance, or 0 when nothing is within tolerance.
    """
    q = fold_query(query)
    qlen = len(q)
    if qlen < MIN_APPROX_QUERY_LEN:
        return 0.0
    tokens = word_tokens(text, MIN_WORD_LEN)
    if not tokens:
        return 0.0

    max_dist = allowed_edit_distance(qlen)
    gap = max_length_gap(qlen)
    best = max_dist + 1
    for tok in tokens:
        if abs(len(tok) - qlen) > gap:
            continue
        d = bounded_edit_distance(tok, q, max_dist)
        if d < best:
            best = d
            if best == 0:
                break

    if best > max_dist:
        return 0.0
    return float(TOKEN_APPROX_BASE - PER_EDIT_PENALTY * best)
