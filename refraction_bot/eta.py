"""Answers for anyone who asks about an ETA."""

from __future__ import annotations

import re
import time

_ETA = re.compile(r"\beta\b", re.IGNORECASE)

EMOJI = "<:pofat:1031701005559144458>"

MESSAGES = (
    "Sometime",
    "Some day",
    "Not far",
    "The future",
    "Never",
    "Perhaps tomorrow?",
    "There are no ETAs",
    "No",
    "Nah",
    "Yes",
    "Yas",
    "Next month",
    "Next year",
    "Next week",
    "In Prism Launcher 2.0.0",
    "At the appropriate juncture, in due course, in the fullness of time",
)


def mentions_eta(content: str) -> bool:
    """Return whether ``content`` contains the word "eta" in any case."""
    return _ETA.search(content) is not None


def eta_response(now_ms: int | None = None) -> str:
    """Pick a reply from the clock; ``now_ms`` is milliseconds since the epoch."""
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return f"{MESSAGES[now_ms % len(MESSAGES)]} {EMOJI}"