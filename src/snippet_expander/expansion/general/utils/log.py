"""
log.py.

Does: Topic-gated stderr trace lines for the CLI. SNIPPET_DEBUG_TOPICS picks
      the topics (comma list, 'all' or '*'); unset means every topic prints.
Returns: debug(), reload_topics(), topic_enabled().
"""

import os
import sys
from datetime import datetime
from typing import TextIO

__all__ = ["debug", "reload_topics", "topic_enabled"]

ENV_VAR = "SNIPPET_DEBUG_TOPICS"
_WILDCARDS = frozenset({"all", "*"})


def _parse_topics(raw: str) -> frozenset[str]:
    return frozenset(t.strip().lower() for t in raw.split(",") if t.strip())


_topics = _parse_topics(os.getenv(ENV_VAR, ""))


def reload_topics() -> None:
    """Does: Re-read SNIPPET_DEBUG_TOPICS."""
    global _topics
    _topics = _parse_topics(os.getenv(ENV_VAR, ""))


def topic_enabled(topic: str) -> bool:
    if not _topics or _topics & _WILDCARDS:
        return True
    return topic.strip().lower() in _topics


def debug(
    msg: str,
    *args: object,
    topic: str = "expansion",
    level: str = "DEBUG",
    stream: TextIO | None = None,
) -> None:
    """
    Does: Print one "[time] [topic][LEVEL] message" line when `topic` is enabled.
          `msg` is %-formatted with `args` only if the line is printed.
    """
    if not topic_enabled(topic):
        return
    text = msg % args if args else msg
    stamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{stamp}] [{topic.strip().lower()}][{level.upper()}] {text}", file=stream or sys.stderr)
