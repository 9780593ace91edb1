"""
log.py.

Does: Opt-in tracing for the palette core, separate from `logging` so a UI can
      turn on one area without raising every logger to DEBUG.
      Topics in use:
        * "constraints": detection fallbacks in picker.constraints
        * "cli":         how each palette-demo argument was resolved to a hex
      Enable with PALETTE_DEBUG_TOPICS="constraints,cli" (or "all").
Returns: One "[time] [topic][LEVEL] message" line per call on stderr (or `stream`).
"""

import os
import sys
from datetime import datetime
from typing import TextIO

__all__ = ["debug", "reload_topics", "topic_enabled"]

_ENV_VAR = "PALETTE_DEBUG_TOPICS"


def _norm_topic(topic: str) -> str:
    return topic.strip().lower()


def _load_topics() -> frozenset[str]:
    raw = os.getenv(_ENV_VAR, "")
    return frozenset(_norm_topic(t) for t in raw.split(",") if t.strip())


_TOPICS = _load_topics()


def reload_topics() -> None:
    """Does: Re-read PALETTE_DEBUG_TOPICS (tests and long-lived UIs call this)."""
    global _TOPICS
    _TOPICS = _load_topics()


def topic_enabled(topic: str) -> bool:
    if not _TOPICS:
        return False
    return "all" in _TOPICS or _norm_topic(topic) in _TOPICS


def debug(
    msg: str,
    topic: str = "picker",
    *,
    level: str = "DEBUG",
    stream: TextIO | None = None,
) -> None:
    """Does: Write `msg` under `topic` when that topic is enabled; otherwise nothing."""
    if not topic_enabled(topic):
        return
    stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    print(
        f"[{stamp}] [{_norm_topic(topic)}][{level.upper()}] {msg}",
        file=stream if stream is not None else sys.stderr,
    )
