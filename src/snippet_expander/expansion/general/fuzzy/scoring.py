# src/snippet_expander/expansion/general/fuzzy/scoring.py
from __future__ import annotations

"""
scoring.py

Does: Tiered lexical scoring of a (text, query) pair: exact → prefix →
      substring → ordered subsequence. Each tier owns a disjoint score band, so
      a hit in a higher tier always outranks any hit in a lower one.
Returns: score(), match_tier(), subsequence_score(), boundary_hit(), plus the
         SubsequenceThresholds tunables and their config loader.
Used by: Ranking aggregator, CLI search.
"""

import logging
import math
from dataclasses import dataclass, fields
from functools import lru_cache
from typing import Any, Callable, Dict, Optional, Tuple

from snippet_expander.expansion.general.token.normalize import (
    fold,
    fold_query,
    is_alnum_ascii,
)
from snippet_expander.expansion.general.utils.load_config import (
    ConfigFileNotFound,
    DataDirNotFound,
    load_config,
)

__all__ = [
    "SubsequenceThresholds",
    "TIERS",
    "boundary_hit",
    "clear_scoring_cache",
    "default_thresholds",
    "load_scoring_config",
    "match_tier",
    "score",
    "subsequence_score",
]

__docformat__ = "google"

# ── Logging ──────────────────────────────────────────────────────────────────
log = logging.getLogger(__name__)

# ── Tier bands ───────────────────────────────────────────────────────────────
EXACT_BASE = 1200
PREFIX_BASE = 1000
SUBSTRING_BASE = 800
SUBSTRING_BOUNDARY_BONUS = 20
SUBSTRING_EARLY_WINDOW = 20   # +1 per char the hit starts before index 20
SUBSEQ_BASE = 400
SUBSEQ_PER_CHAR = 5
SUBSEQ_ADJACENCY_BONUS = 12
SUBSEQ_BOUNDARY_BONUS = 8
SUBSEQ_GAP_PENALTY = 0.5

DEFAULT_WEIGHTS = {"alias": 1.6, "text": 1.0}


# ─────────────────────────────────────────────────────────────────────────────
# Tunables
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SubsequenceThresholds:
    """
    Acceptance filters for loose (subsequence) matches.

    Empirically tuned; the defaults reproduce the shipped behavior and can be
    overridden through ``data/scoring.json`` or per call.
    """

    min_query_len: int = 3
    window_slack_min: int = 2
    window_slack_ratio: float = 0.5
    short_query_max: int = 4
    medium_query_max: int = 6
    density_short: float = 0.66
    density_medium: float = 0.6
    density_long: float = 0.55
    gap_ratio: float = 1.0

    def max_window(self, qlen: int) -> int:
        return qlen + max(self.window_slack_min, math.floor(qlen * self.window_slack_ratio))

    def min_density(self, qlen: int) -> float:
        if qlen <= self.short_query_max:
            return self.density_short
        if qlen <= self.medium_query_max:
            return self.density_medium
        return self.density_long

    def max_gap(self, qlen: int) -> float:
        return qlen * self.gap_ratio


_THRESHOLD_KEYS = frozenset(f.name for f in fields(SubsequenceThresholds))


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _validate_scoring(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Does: Check scoring.json: known numeric subsequence keys, positive weights.
    Returns: {"subsequence": {...}, "weights": {"alias": float, "text": float}}.
    """
    sub = data.get("subsequence", {})
    if not isinstance(sub, dict):
        raise TypeError("'subsequence' must be an object")
    unknown = set(sub) - _THRESHOLD_KEYS
    if unknown:
        raise ValueError(f"unknown subsequence keys: {sorted(unknown)}")
    bad = [k for k, v in sub.items() if not _is_number(v)]
    if bad:
        raise TypeError(f"non-numeric subsequence values: {sorted(bad)}")

    raw_weights = data.get("weights", {})
    if not isinstance(raw_weights, dict):
        raise TypeError("'weights' must be an object")
    weights = dict(DEFAULT_WEIGHTS)
    for key, value in raw_weights.items():
        if key not in weights:
            raise ValueError(f"unknown weight {key!r}")
        if not _is_number(value) or value <= 0:
            raise ValueError(f"weight {key!r} must be a positive number")
        weights[key] = float(value)

    return {"subsequence": dict(sub), "weights": weights}


@lru_cache(maxsize=1)
def load_scoring_config() -> Dict[str, Any]:
    """
    Does: Load and validate data/scoring.json once.
    Returns: Validated dict; built-in defaults when no data dir/file is found.
    """
    try:
        return load_config("scoring", validator=_validate_scoring)
    except (DataDirNotFound, ConfigFileNotFound) as e:
        log.warning("scoring config unavailable, using built-in defaults: %s", e)
        return {"subsequence": {}, "weights": dict(DEFAULT_WEIGHTS)}


@lru_cache(maxsize=1)
def default_thresholds() -> SubsequenceThresholds:
    return SubsequenceThresholds(**load_scoring_config()["subsequence"])


def clear_scoring_cache() -> None:
    """Forget the loaded scoring config (tests, hot reload)."""
    default_thresholds.cache_clear()
    load_scoring_config.cache_clear()


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def boundary_hit(text: str, index: int) -> bool:
    """Does: True at index 0 or right after a non-ASCII-alphanumeric char."""
    if index <= 0:
        return True
    return not is_alnum_ascii(text[index - 1])


def subsequence_score(
    text: str,
    query: str,
    thresholds: Optional[SubsequenceThresholds] = None,
) -> float:
    """
    Does: Greedy in-order match of query chars in text, rewarding adjacency and
          word-start hits, penalizing spread. Rejects short queries and loose
          matches (window size, density, no anchor, total gap).
    Returns: Score in the subsequence band, or 0.
    """
    th = thresholds or default_thresholds()
    t = fold(text)
    q = fold_query(query)
    qlen = len(q)
    if qlen < th.min_query_len:
        return 0.0

    qi = 0
    first = last = -1
    adjacencies = boundaries = total_gap = 0
    for ti, ch in enumerate(t):
        if ch != q[qi]:
            continue
        if first < 0:
            first = ti
        else:
            gap = ti - last - 1
            if gap == 0:
                adjacencies += 1
            else:
                total_gap += gap
        if boundary_hit(t, ti):
            boundaries += 1
        last = ti
        qi += 1
        if qi == qlen:
            break

    if qi < qlen:
        return 0.0

    window = last - first + 1
    if window > th.max_window(qlen):
        return 0.0
    if qlen / window < th.min_density(qlen):
        return 0.0
    if not adjacencies and not boundaries:
        return 0.0
    if total_gap > th.max_gap(qlen):
        return 0.0

    return (
        SUBSEQ_BASE
        + SUBSEQ_PER_CHAR * qlen
        + SUBSEQ_ADJACENCY_BONUS * adjacencies
        + SUBSEQ_BOUNDARY_BONUS * boundaries
        - max(0, window - qlen)
        - SUBSEQ_GAP_PENALTY * total_gap
    )


# ─────────────────────────────────────────────────────────────────────────────
# Tiers (folded text, folded query) → score | None when the tier does not apply
# ─────────────────────────────────────────────────────────────────────────────

Tier = Callable[[str, str, SubsequenceThresholds], Optional[float]]


def _exact(t: str, q: str, th: SubsequenceThresholds) -> Optional[float]:
    return float(EXACT_BASE + len(q)) if t == q else None


def _prefix(t: str, q: str, th: SubsequenceThresholds) -> Optional[float]:
    return float(PREFIX_BASE + len(q)) if t.startswith(q) else None


def _substring(t: str, q: str, th: SubsequenceThresholds) -> Optional[float]:
    idx = t.find(q)
    if idx < 0:
        return None
    bonus = SUBSTRING_BOUNDARY_BONUS if boundary_hit(t, idx) else 0
    return float(SUBSTRING_BASE + bonus + max(0, SUBSTRING_EARLY_WINDOW - idx))


def _subsequence(t: str, q: str, th: SubsequenceThresholds) -> Optional[float]:
    return subsequence_score(t, q, th)


# highest priority first; the first tier that applies decides the score
TIERS: Tuple[Tuple[str, Tier], ...] = (
    ("exact", _exact),
    ("prefix", _prefix),
    ("substring", _substring),
    ("subsequence", _subsequence),
)


def _first_tier(
    text: str,
    query: str,
    thresholds: Optional[SubsequenceThresholds],
) -> Tuple[Optional[str], float]:
    t = fold(text)
    q = fold_query(query)
    if not q:
        return None, 0.0
    th = thresholds or default_thresholds()
    for name, tier in TIERS:
        result = tier(t, q, th)
        if result is not None:
            return (name if result > 0 else None), result
    return None, 0.0


def score(
    text: str,
    query: str,
    *,
    thresholds: Optional[SubsequenceThresholds] = None,
) -> float:
    """
    Does: Case-insensitive tiered score of `query` against `text`.
    Returns: 0 for no match (including an empty query); higher is better.
    """
    return _first_tier(text, query, thresholds)[1]


def match_tier(
    text: str,
    query: str,
    *,
    thresholds: Optional[SubsequenceThresholds] = None,
) -> Optional[str]:
    """Does: Name of the tier that matched ("exact", "prefix", ...) or None."""
    return _first_tier(text, query, thresholds)[0]
