# expansion/general/token/__init__.py
"""
token.
=====

Does: Provide the alias token scanner, the substitution engine, and text
      normalization helpers.
Exports: scan_segments, iter_segments, extract_tokens, is_escaped_literal,
         substitute, unescape, unknown_tokens, fold, fold_query, word_tokens
Used by: Fuzzy scoring, ranking, orchestration.
"""

from __future__ import annotations

from .normalize import (
    fold,
    fold_query,
    is_alnum_ascii,
    word_tokens,
)
from .scanner import (
    ESCAPED,
    LITERAL,
    TOKEN,
    Segment,
    extract_tokens,
    is_escaped_literal,
    iter_segments,
    scan_segments,
)
from .substitute import (
    substitute,
    unescape,
    unknown_tokens,
)

__all__ = [
    # normalize
    "fold",
    "fold_query",
    "is_alnum_ascii",
    "word_tokens",
    # scanner
    "LITERAL",
    "TOKEN",
    "ESCAPED",
    "Segment",
    "iter_segments",
    "scan_segments",
    "extract_tokens",
    "is_escaped_literal",
    # substitution
    "substitute",
    "unescape",
    "unknown_tokens",
]
