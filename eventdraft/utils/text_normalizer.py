"""Text normalization utilities for scraped and slug-derived event fields.

This module handles four distinct normalization concerns:

1. **Markup text cleanup** -- Decodes HTML entities and collapses
   whitespace in values pulled out of meta tags and JSON-LD blocks.

2. **Title casing** -- Turns slug tokens ("the-mayhem-ball") into display
   names ("The Mayhem Ball") while keeping small words lower-case.

3. **Date/price parsing** -- Splits ISO-ish timestamps into the draft's
   ``YYYY-MM-DD`` / ``HH:MM`` pair and pulls numbers out of price strings.

4. **Name matching** -- rapidfuzz similarity used to pick the best search
   result for a slug-derived search phrase.
"""

from __future__ import annotations

import html
import re
from datetime import datetime

from rapidfuzz import fuzz, process, utils

from eventdraft.config.reference_tables import HEADLINER_STOP_WORDS, SMALL_WORDS

_WHITESPACE = re.compile(r"\s+")
_ISO_DATE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
_CLOCK = re.compile(r"[T\s](\d{1,2}):(\d{2})")
_NUMBER = re.compile(r"\d+(?:\.\d+)?")

# " | Ticketmaster", " - TicketNetwork Tickets", " :: Eventbrite"
_VENDOR_SUFFIX = re.compile(
    r"\s*[-|–:]{1,2}\s*(?:ticketmaster|ticketnetwork|seatgeek|eventbrite|stubhub|"
    r"vivid\s*seats|fandango|sulekha|live\s*nation)\b.*$",
    re.IGNORECASE,
)
# " in Dallas, TX at American Airlines Center on 4/9/2026"
_LOCATION_SUFFIX = re.compile(r"\s+in\s+[^,]+,\s*[A-Z]{2}\s+at\s+.+$", re.IGNORECASE)
_TICKETS_SUFFIX = re.compile(r"\s+tickets?$", re.IGNORECASE)


def clean_text(value: object) -> str:
    """Decode entities and collapse whitespace; non-strings become ``""``."""
    if not isinstance(value, str):
        return ""
    return _WHITESPACE.sub(" ", html.unescape(value)).strip()


def title_case(words: list[str]) -> str:
    """Title-case slug tokens, keeping small words lower-case unless first.

    >>> title_case(["the", "mayhem", "ball", "at", "night"])
    'The Mayhem Ball at Night'
    """
    cased: list[str] = []
    for index, word in enumerate(w for w in words if w):
        lower = word.lower()
        if index > 0 and lower in SMALL_WORDS:
            cased.append(lower)
        else:
            cased.append(lower[:1].upper() + lower[1:])
    return " ".join(cased)


def clean_event_title(title: str) -> str:
    """Strip vendor branding, location/venue suffixes and a trailing "Tickets"."""
    cleaned = clean_text(title)
    cleaned = _VENDOR_SUFFIX.sub("", cleaned)
    cleaned = _LOCATION_SUFFIX.sub("", cleaned)
    cleaned = _TICKETS_SUFFIX.sub("", cleaned)
    return cleaned.strip(" -|")


def split_iso_datetime(value: object) -> tuple[str, str]:
    """Split an ISO-8601-ish timestamp into ``("YYYY-MM-DD", "HH:MM")``.

    Either part is ``""`` when it cannot be recovered; a bare date yields
    no time.
    """
    raw = clean_text(value)
    if not raw:
        return "", ""
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        parsed = None
    if parsed is not None:
        has_clock = bool(_CLOCK.search(raw))
        return parsed.date().isoformat(), parsed.strftime("%H:%M") if has_clock else ""

    date_match = _ISO_DATE.search(raw)
    if not date_match:
        return "", ""
    day = date_match.group(0)
    try:
        datetime.strptime(day, "%Y-%m-%d")
    except ValueError:
        return "", ""
    clock_match = _CLOCK.search(raw[date_match.end():])
    if clock_match:
        hour, minute = int(clock_match.group(1)), int(clock_match.group(2))
        if hour < 24 and minute < 60:
            return day, f"{hour:02d}:{minute:02d}"
    return day, ""


def normalize_clock(value: object) -> str:
    """Normalize ``"19:30:00"`` / ``"7:30"`` to ``"HH:MM"``; ``""`` if invalid."""
    raw = clean_text(value)
    match = re.match(r"^(\d{1,2}):(\d{2})", raw)
    if not match:
        return ""
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return ""
    return f"{hour:02d}:{minute:02d}"


def parse_price(value: object) -> float | None:
    """Return the first plausible price in *value* (number or string)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMBER.search(value.replace(",", ""))
        if not match:
            return None
        number = float(match.group(0))
    else:
        return None
    return number if 0 < number <= 100000 else None


def fuzzy_match(
    query: str,
    candidates: list[str],
    threshold: float = 0.6,
) -> tuple[str, float] | None:
    """Find the best fuzzy match for a query among candidates.

    Uses rapidfuzz ``token_set_ratio`` so a short slug phrase ("lady gaga")
    matches a longer vendor title ("Lady Gaga: The MAYHEM Ball").

    Args:
        query: The string to match.
        candidates: List of candidate strings to match against.
        threshold: Minimum similarity score (0.0--1.0) to accept a match.

    Returns:
        A (best_match, score) tuple if a match meets the threshold, else None.
    """
    if not candidates or not query:
        return None

    result = process.extractOne(
        query,
        candidates,
        scorer=fuzz.token_set_ratio,
        processor=utils.default_process,
        score_cutoff=threshold * 100,
    )
    if result is None:
        return None

    _, score, index = result
    return candidates[index], score / 100.0


def guess_headliner(title: str) -> str:
    """Guess the performer from the leading words of a concert/comedy title.

    Takes words up to the first stop word ("live", "tour", "the", ...), at
    most four; returns ``""`` when the title starts with a stop word.
    """
    words: list[str] = []
    for word in title.split():
        if word.lower().strip(":,") in HEADLINER_STOP_WORDS:
            break
        words.append(word.strip(":,"))
        if len(words) == 4:
            break
    return " ".join(words)
