# expansion/general/token/normalize.py
# ──────────────────────────────────────────────────────────────
# Shared utilities for case folding and word tokenization
# ──────────────────────────────────────────────────────────────
"""
normalize.

Does: Case-fold text for comparison and split body text into ASCII
      alphanumeric words for typo-tolerant matching.
Returns: fold(), fold_query(), word_tokens(), is_alnum_ascii().
Used by: Lexical scorer, edit-distance approximator, ranking.
"""

from __future__ import annotations

import re

__all__ = [
    "fold",
    "fold_query",
    "word_tokens",
    "is_alnum_ascii",
    "MIN_WORD_LEN",
]

# Words shorter than this are noise for typo matching
MIN_WORD_LEN = 3

_WORD_RE = re.compile(r"[a-z0-9]+")


def fold(text: str) -> str:
    """Does: Lower-case for comparison. Returns: '' for non-strings."""
    if not isinstance(text, str):
        return ""
    return text.lower()


def fold_query(query: str) -> str:
    """Does: Lower-case and trim a search query."""
    return fold(query).strip()


def is_alnum_ascii(ch: str) -> bool:
    """Does: True for a single ASCII letter or digit."""
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ("0" <= ch <= "9")


def word_tokens(text: str, min_len: int = MIN_WORD_LEN) -> list[str]:
    """
    Does: Extract maximal [a-z0-9] runs from folded `text`, keeping runs of at
          least `min_len` characters.
    Returns: List of tokens in text order (duplicates kept).
    """
    return [tok for tok in _WORD_RE.findall(fold(text)) if len(tok) >= min_len]
