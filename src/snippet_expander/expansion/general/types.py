# snippet_expander/expansion/general/types.py
from __future__ import annotations

"""
types.py.

Does: Define the shortcut record, the alias-map snapshot type, score results,
      and the alias grammar shared by the scanner and record construction.
Returns: ShortcutRecord, AliasMap, ScoreResult, is_valid_alias(), new_shortcut().
Used by: Token substitution, ranking, orchestration, and the CLI.
"""

import re
import time
import uuid
from dataclasses import dataclass
from typing import Any, Mapping, NamedTuple, Optional, Tuple

__all__ = [
    "ALIAS_MIN_LEN",
    "ALIAS_MAX_LEN",
    "ALIAS_CHARS",
    "ALIAS_PATTERN",
    "AliasMap",
    "InvalidAliasError",
    "RecordFormatError",
    "ScoreResult",
    "ShortcutRecord",
    "is_valid_alias",
    "new_shortcut",
]

__docformat__ = "google"

# ── Alias grammar ────────────────────────────────────────────────────────────
ALIAS_MIN_LEN = 2
ALIAS_MAX_LEN = 24
# case-insensitive when scanning text; stored aliases are lower-case
ALIAS_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_-")
ALIAS_PATTERN = re.compile(rf"[a-z0-9_-]{{{ALIAS_MIN_LEN},{ALIAS_MAX_LEN}}}")


class InvalidAliasError(ValueError):
    """Raise when an alias does not match [a-z0-9_-]{2,24}."""


class RecordFormatError(ValueError):
    """Raise when a stored record dict lacks a usable alias or text."""


@dataclass(frozen=True)
class ShortcutRecord:
    """
    One alias → snippet binding.

    Timestamps are epoch milliseconds and, like ``usage_count``, are managed by
    the caller's store. The core only reads ``alias``, ``expansion_text`` and
    ``enabled``.
    """

    id: str
    alias: str
    expansion_text: str
    enabled: bool = True
    created_at: int = 0
    updated_at: int = 0
    usage_count: int = 0
    site_scope: Optional[Tuple[str, ...]] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ShortcutRecord:
        """
        Does: Build a record from the stored camelCase shape
              (id, alias, text, enabled, createdAt, updatedAt, usageCount, siteScope).
        Returns: ShortcutRecord. Raises RecordFormatError on missing alias/text.
        """
        alias = data.get("alias")
        text = data.get("text", data.get("expansion_text"))
        if not isinstance(alias, str):
            raise RecordFormatError(f"record has no string 'alias': {data!r}")
        if not isinstance(text, str):
            raise RecordFormatError(f"record {alias!r} has no string 'text'")

        scope = data.get("siteScope")
        return cls(
            id=str(data.get("id") or uuid.uuid4().hex),
            alias=alias,
            expansion_text=text,
            enabled=bool(data.get("enabled", True)),
            created_at=int(data.get("createdAt", 0) or 0),
            updated_at=int(data.get("updatedAt", 0) or 0),
            usage_count=int(data.get("usageCount", 0) or 0),
            site_scope=tuple(scope) if scope else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Does: Inverse of from_dict (camelCase storage shape)."""
        out: dict[str, Any] = {
            "id": self.id,
            "alias": self.alias,
            "text": self.expansion_text,
            "enabled": self.enabled,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "usageCount": self.usage_count,
        }
        if self.site_scope:
            out["siteScope"] = list(self.site_scope)
        return out


# lower-cased alias → enabled record; treated as an immutable snapshot per call
AliasMap = Mapping[str, ShortcutRecord]


class ScoreResult(NamedTuple):
    record: ShortcutRecord
    score: float


def is_valid_alias(alias: str) -> bool:
    """
    Does: Full-string check against [a-z0-9_-]{2,24} (lower-case only).
    Returns: Boolean.
    """
    if not isinstance(alias, str):
        return False
    return ALIAS_PATTERN.fullmatch(alias) is not None


def new_shortcut(
    alias: str,
    expansion_text: str,
    *,
    enabled: bool = True,
    now: Optional[int] = None,
) -> ShortcutRecord:
    """
    Does: Create a fresh record with a random hex id and matching timestamps.
    Returns: ShortcutRecord. Raises InvalidAliasError for a bad alias.
    """
    alias = (alias or "").strip()
    if not is_valid_alias(alias):
        raise InvalidAliasError(
            f"alias must match [a-z0-9_-]{{{ALIAS_MIN_LEN},{ALIAS_MAX_LEN}}}: {alias!r}"
        )
    ts = int(time.time() * 1000) if now is None else now
    return ShortcutRecord(
        id=uuid.uuid4().hex,
        alias=alias,
        expansion_text=expansion_text,
        enabled=enabled,
        created_at=ts,
        updated_at=ts,
    )
