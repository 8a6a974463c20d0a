# expansion/general/token/scanner.py
# ──────────────────────────────────────────────────────────────
# Alias token scanner
# Single left-to-right pass that splits text into literal, token
# and escaped-token segments.
# ──────────────────────────────────────────────────────────────
"""
scanner.

Does: Recognize `!alias` tokens and `!!alias` escaped tokens in free text.
      A token is '!' (or '!!' when escaped) at start-of-string or after
      whitespace, followed by 2–24 chars of [a-zA-Z0-9_-], followed by a char
      outside that class or end of input. Three or more '!' never form a token.
Returns: iter_segments()/scan_segments(), extract_tokens(), is_escaped_literal().
Used by: Substitution engine, orchestrator, CLI.

Notes:
- Joining every segment's `.text` gives back the input exactly; the boundary
  whitespace before a token stays in the preceding literal.
- Escaped spans are their own segment kind, so the expansion pass never sees
  them as tokens.
"""

from __future__ import annotations

from typing import Iterator, Literal, NamedTuple, Optional

from snippet_expander.expansion.general.types import (
    ALIAS_CHARS,
    ALIAS_MAX_LEN,
    ALIAS_MIN_LEN,
)

__all__ = [
    "LITERAL",
    "TOKEN",
    "ESCAPED",
    "Segment",
    "iter_segments",
    "scan_segments",
    "extract_tokens",
    "is_escaped_literal",
]

SegmentKind = Literal["literal", "token", "escaped"]

LITERAL: SegmentKind = "literal"
TOKEN: SegmentKind = "token"
ESCAPED: SegmentKind = "escaped"

_BANG = "!"


class Segment(NamedTuple):
    kind: SegmentKind
    text: str
    # alias as written (no leading '!'); None for literals
    alias: Optional[str] = None


def _match_at(text: str, start: int) -> Optional[tuple[SegmentKind, int, str]]:
    """
    Does: Try to read a token or escaped token whose first '!' is at `start`.
    Returns: (kind, end, alias) or None.
    """
    n = len(text)
    j = start
    while j < n and text[j] == _BANG:
        j += 1
    bangs = j - start
    if bangs > 2:
        return None

    k = j
    while k < n and text[k] in ALIAS_CHARS:
        k += 1
    # k sits on a non-alias char or at end, so the trailing boundary holds
    # whenever the run itself has a legal length
    run = k - j
    if run < ALIAS_MIN_LEN or run > ALIAS_MAX_LEN:
        return None
    return (TOKEN if bangs == 1 else ESCAPED), k, text[j:k]


def iter_segments(text: str) -> Iterator[Segment]:
    """
    Does: Lazily split `text` into LITERAL / TOKEN / ESCAPED segments.
    Returns: Iterator of Segment; a fresh call restarts the scan.
    """
    if not isinstance(text, str) or not text:
        return

    n = len(text)
    lit_start = 0
    i = text.find(_BANG)
    while 0 <= i < n:
        if i == 0 or text[i - 1].isspace():
            hit = _match_at(text, i)
            if hit is not None:
                kind, end, alias = hit
                if lit_start < i:
                    yield Segment(LITERAL, text[lit_start:i])
                yield Segment(kind, text[i:end], alias)
                lit_start = end
                i = text.find(_BANG, end)
                continue
        i = text.find(_BANG, i + 1)

    if lit_start < n:
        yield Segment(LITERAL, text[lit_start:])


def scan_segments(text: str) -> list[Segment]:
    """Does: Materialize iter_segments(). Returns: List of Segment."""
    return list(iter_segments(text))


def extract_tokens(text: str) -> list[str]:
    """
    Does: Collect alias names (as written, without '!') of every unescaped token.
    Returns: List in left-to-right order; duplicates kept.
    """
    return [seg.alias for seg in iter_segments(text) if seg.kind == TOKEN and seg.alias]


def is_escaped_literal(segment: str) -> bool:
    """Does: True iff `segment` contains at least one `!!alias` occurrence."""
    return any(seg.kind == ESCAPED for seg in iter_segments(segment))
