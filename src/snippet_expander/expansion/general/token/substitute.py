# expansion/general/token/substitute.py
"""
substitute.

Does: Expand known `!alias` tokens using a caller-supplied alias map, then
      un-escape `!!alias` → `!alias` in the expanded result.
Returns: substitute(), unescape(), unknown_tokens().
Used by: Orchestrator (replace_tokens/expand_text) and the CLI `expand` command.
"""

from __future__ import annotations

import logging
from typing import List

from snippet_expander.expansion.general.token.scanner import (
    ESCAPED,
    TOKEN,
    extract_tokens,
    iter_segments,
)
from snippet_expander.expansion.general.types import AliasMap

__all__ = [
    "substitute",
    "unescape",
    "unknown_tokens",
]

__docformat__ = "google"

# ── Logging ──────────────────────────────────────────────────────────────────
log = logging.getLogger(__name__)


def unescape(text: str) -> str:
    """
    Does: Replace every escaped token `!!alias` with the literal `!alias`.
    Returns: New string; text outside escaped spans is untouched.
    """
    return "".join(
        "!" + seg.alias if seg.kind == ESCAPED and seg.alias else seg.text
        for seg in iter_segments(text)
    )


def substitute(text: str, alias_map: AliasMap, *, debug: bool = False) -> str:
    """
    Does: Two passes.
          1) Every token whose lower-cased alias is in `alias_map` is replaced by
             that record's expansion text. Unknown tokens, escaped tokens and
             all other text are copied verbatim.
          2) The result of pass 1 is rescanned and `!!alias` becomes `!alias`.
          An empty map returns `text` unchanged without scanning.
    Returns: Expanded string. Never raises for str input and a mapping of records.
    """
    if not alias_map or not text:
        return text

    parts: List[str] = []
    for seg in iter_segments(text):
        if seg.kind == TOKEN and seg.alias:
            record = alias_map.get(seg.alias.lower())
            if record is not None:
                if debug:
                    log.debug("[EXPAND] %r → %d chars", seg.text, len(record.expansion_text))
                parts.append(record.expansion_text)
                continue
            if debug:
                log.debug("[UNKNOWN] %r left as-is", seg.text)
        parts.append(seg.text)

    return unescape("".join(parts))


def unknown_tokens(text: str, alias_map: AliasMap) -> list[str]:
    """
    Does: List tokens in `text` that have no entry in `alias_map`.
    Returns: Aliases as written, in order, duplicates kept.
    """
    return [alias for alias in extract_tokens(text) if alias.lower() not in alias_map]
