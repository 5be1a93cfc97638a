"""Keyword classification of event names into draft event types.

Buckets are checked in a fixed order (comedy, sports, theater, movie) and
the first bucket with a whole-word or phrase hit wins; no hit means
``concert``.  An upstream vendor classification, when present, is trusted
over the keywords.
"""

from __future__ import annotations

import re

from eventdraft.config.reference_tables import (
    CATEGORY_KEYWORDS,
    CATEGORY_LABELS,
    DEFAULT_EVENT_TYPE,
)

_NON_WORD = re.compile(r"[^a-z0-9']+")


def _normalize(text: str) -> str:
    return " ".join(_NON_WORD.split(text.lower())).strip()


# Keywords normalized once so "stand-up" and "stand up" compare equal.
_BUCKETS: tuple[tuple[str, frozenset[str]], ...] = tuple(
    (event_type, frozenset(_normalize(keyword) for keyword in keywords))
    for event_type, keywords in CATEGORY_KEYWORDS
)


def keyword_event_type(name: str) -> str:
    """Return the first bucket whose keyword appears in *name*, or ``""``."""
    padded = f" {_normalize(name)} "
    for event_type, keywords in _BUCKETS:
        if any(f" {keyword} " in padded for keyword in keywords):
            return event_type
    return ""


def category_label(event_type: str) -> str:
    """Display category for an event type (``movie`` -> ``Film``)."""
    return CATEGORY_LABELS.get(event_type, CATEGORY_LABELS["event"])


def classify_event(
    name: str,
    upstream_type: str = "",
    default: str = DEFAULT_EVENT_TYPE,
) -> tuple[str, str]:
    """Decide ``(event_type, category)`` for an event.

    Args:
        name: Event name (title or slug-derived).
        upstream_type: Event type reported by a vendor, if any.  Unknown
            values are ignored.
        default: Type used when no keyword matches; marketplaces that list
            mostly non-music events register ``"event"`` here.

    Returns:
        The event type and its display category.
    """
    if upstream_type in CATEGORY_LABELS:
        event_type = upstream_type
    else:
        event_type = keyword_event_type(name) or default
    return event_type, category_label(event_type)
