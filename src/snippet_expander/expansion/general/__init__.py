"""
general.
=======

Shared building blocks of the expansion stack: record types, token scanning
and substitution, fuzzy scoring, ranking, config and logging utilities.

Exports:
- ShortcutRecord, ScoreResult, AliasMap: core data types.
"""

from .types import AliasMap, ScoreResult, ShortcutRecord

__all__ = ["AliasMap", "ScoreResult", "ShortcutRecord"]
