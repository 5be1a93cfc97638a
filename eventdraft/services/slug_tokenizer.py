"""URL slug decomposition into event name, date, city and state.

Marketplace URLs usually encode the event in one hyphen-delimited path
segment, e.g.::

    /lady-gaga-the-mayhem-ball-glendale-arizona-02-14-2026/event/1900632...

:func:`tokenize_slug` applies the positional heuristics:

1. split on ``-``;
2. scan from the end for a 3-token date run (``MM-DD-YYYY`` on US hosts,
   ``DD-MM-YYYY`` on day-first hosts, ``YYYY-MM-DD`` anywhere) and drop it;
3. if the new last token (or last two, for ``new-york``) is a state name or
   code, consume it as the state and the token before it as the city;
4. title-case what is left as the event name.

City/state extraction is skipped when it would leave fewer than two name
tokens.  A name that happens to end in a state-like token ("...-night-in")
is still read as a location: the heuristic has no principled way to tell
them apart and is kept as-is.

The ``read_*_slug`` functions pick the right path segment(s) for each
marketplace's URL scheme and return a :class:`SlugParts`.
"""

from __future__ import annotations

import re
from datetime import date
from urllib.parse import unquote

from eventdraft.config.reference_tables import (
    CITY_PREFIXES,
    US_STATE_LOOKUP,
    US_STATE_NAMES,
)
from eventdraft.models.slug import SlugParts
from eventdraft.utils.text_normalizer import title_case

_TOKEN_CHARS = re.compile(r"[^a-z0-9']")
_FILE_EXTENSION = re.compile(r"\.(?:html?|php|aspx?|jsp)$", re.IGNORECASE)
_TICKET_WORDS = frozenset({"ticket", "tickets"})
_MIN_NAME_TOKENS = 2


# ---------------------------------------------------------------------------
# Core tokenizer
# ---------------------------------------------------------------------------


def split_tokens(segment: str) -> list[str]:
    """Split a slug segment on ``-`` into lower-case alphanumeric tokens."""
    cleaned = _FILE_EXTENSION.sub("", unquote(segment).strip().lower())
    tokens = (_TOKEN_CHARS.sub("", part) for part in cleaned.split("-"))
    return [token for token in tokens if token]


def _as_date(year: str, month: str, day: str) -> str:
    try:
        return date(int(year), int(month), int(day)).isoformat()
    except ValueError:
        return ""


def _parse_date_run(first: str, second: str, third: str, day_first: bool) -> str:
    if not (first.isdigit() and second.isdigit() and third.isdigit()):
        return ""
    if len(first) == 4 and len(second) <= 2 and len(third) <= 2:
        return _as_date(first, second, third)
    if len(third) == 4 and len(first) <= 2 and len(second) <= 2:
        # Try the host's locale order first, then the other one
        # (13-02-2026 on a US host can only be day-first).
        orders = ((second, first), (first, second)) if day_first else ((first, second), (second, first))
        for month, day in orders:
            parsed = _as_date(third, month, day)
            if parsed:
                return parsed
    return ""


def extract_date(tokens: list[str], day_first: bool = False) -> tuple[str, list[str]]:
    """Find the right-most 3-token date run; return it and the other tokens."""
    for start in range(len(tokens) - 3, -1, -1):
        parsed = _parse_date_run(*tokens[start:start + 3], day_first=day_first)
        if parsed:
            return parsed, tokens[:start] + tokens[start + 3:]
    return "", tokens


def extract_location(tokens: list[str]) -> tuple[str, str, list[str]]:
    """Consume trailing ``<city> <state>`` tokens when the name can spare them.

    Returns ``(city, state_code, remaining_tokens)``; city and state are
    ``""`` when nothing was consumed.
    """
    state = ""
    state_width = 0
    if len(tokens) >= _MIN_NAME_TOKENS + 3:
        two_words = " ".join(tokens[-2:])
        if two_words in US_STATE_NAMES:
            state, state_width = US_STATE_NAMES[two_words], 2
    if not state and len(tokens) >= _MIN_NAME_TOKENS + 2:
        state = US_STATE_LOOKUP.get(tokens[-1], "")
        state_width = 1 if state else 0
    if not state:
        return "", "", tokens

    rest = tokens[:-state_width]
    city_tokens = [rest.pop()]
    if rest and rest[-1] in CITY_PREFIXES and len(rest) - 1 >= _MIN_NAME_TOKENS:
        city_tokens.insert(0, rest.pop())
    return title_case(city_tokens), state, rest


def tokenize_slug(
    segment: str,
    day_first: bool = False,
    with_location: bool = True,
) -> SlugParts:
    """Decompose one hyphen-delimited slug segment.

    Args:
        segment: The path segment, e.g. ``"event-name-dallas-texas-04-09-2026"``.
        day_first: Read ``NN-NN-YYYY`` runs as day-month-year first.
        with_location: Try to consume trailing city/state tokens.

    Returns:
        The decomposed :class:`SlugParts`.
    """
    tokens = split_tokens(segment)
    event_date, tokens = extract_date(tokens, day_first=day_first)
    city = state = ""
    if with_location:
        city, state, tokens = extract_location(tokens)
    return SlugParts(
        name=title_case(tokens),
        date=event_date,
        city=city,
        state=state,
        tokens=tuple(tokens),
    )


# ---------------------------------------------------------------------------
# Per-marketplace segment selection
# ---------------------------------------------------------------------------


def _segments(path: str) -> list[str]:
    return [unquote(part) for part in path.split("/") if part.strip()]


def _strip_id_tokens(segment: str) -> str:
    """Drop trailing ``tickets`` words and long numeric ids from a segment."""
    parts = segment.split("-")
    while parts and (
        parts[-1].lower() in _TICKET_WORDS or (parts[-1].isdigit() and len(parts[-1]) >= 5)
    ):
        parts.pop()
    return "-".join(parts)


def pick_slug_segment(path: str) -> str:
    """Return the most informative (most hyphenated) path segment."""
    candidates = [
        _strip_id_tokens(_FILE_EXTENSION.sub("", segment))
        for segment in _segments(path)
    ]
    candidates = [c for c in candidates if c and not c.replace("-", "").isdigit()]
    if not candidates:
        return ""
    # max() keeps the first of equals; reversing prefers the later segment.
    return max(reversed(candidates), key=lambda c: c.count("-"))


def read_generic_slug(path: str, day_first: bool = False) -> SlugParts:
    return tokenize_slug(pick_slug_segment(path), day_first=day_first)


def read_ticketmaster_slug(path: str, day_first: bool = False) -> SlugParts:
    """``/<name>-<city>-<state>-<mm>-<dd>-<yyyy>/event/<id>``."""
    segments = _segments(path)
    for index, segment in enumerate(segments):
        if segment.lower() == "event" and index > 0:
            return tokenize_slug(segments[index - 1], day_first=day_first)
    return read_generic_slug(path, day_first=day_first)


def read_sulekha_slug(path: str, day_first: bool = False) -> SlugParts:
    """``/<name>_event-in_<city>-<st>_<id>``."""
    segments = _segments(path)
    last = segments[-1] if segments else ""
    event_part, _, location_part = last.partition("_event-in_")
    parts = tokenize_slug(event_part, day_first=day_first, with_location=False)

    city = state = ""
    location_tokens = split_tokens(location_part.split("_")[0]) if location_part else []
    if len(location_tokens) >= 2 and location_tokens[-1] in US_STATE_LOOKUP:
        state = US_STATE_LOOKUP[location_tokens[-1]]
        city = title_case(location_tokens[:-1])
    return SlugParts(
        name=parts.name,
        date=parts.date,
        city=city,
        state=state,
        tokens=parts.tokens,
    )


_MOVIE_YEAR_ID = re.compile(r"-(?:19|20)\d{2}-\d+$")
_TRAILING_ID = re.compile(r"-\d+$")


def read_fandango_slug(path: str, day_first: bool = False) -> SlugParts:
    """``/<movie-name>-<year>-<id>/movie-overview``; the name keeps every token."""
    segments = _segments(path)
    movie_slug = ""
    for index, segment in enumerate(segments):
        following = segments[index + 1] if index + 1 < len(segments) else ""
        if following == "movie-overview" or _MOVIE_YEAR_ID.search(segment):
            movie_slug = segment
            break
    if not movie_slug:
        movie_slug = pick_slug_segment(path)
    movie_slug = _TRAILING_ID.sub("", _MOVIE_YEAR_ID.sub("", movie_slug))
    return tokenize_slug(movie_slug, day_first=day_first, with_location=False)


_EVENTBRITE_SUFFIX = re.compile(r"-tickets-\d+$", re.IGNORECASE)


def read_eventbrite_slug(path: str, day_first: bool = False) -> SlugParts:
    """``/e/<name>-tickets-<id>``."""
    segments = _segments(path)
    for index, segment in enumerate(segments):
        if segment == "e" and index + 1 < len(segments):
            return tokenize_slug(
                _EVENTBRITE_SUFFIX.sub("", segments[index + 1]), day_first=day_first
            )
    return read_generic_slug(path, day_first=day_first)


def read_seatgeek_slug(path: str, day_first: bool = False) -> SlugParts:
    """``/<name>-tickets/<city>-<state>-<venue>-<yyyy>-<mm>-<dd>-<time>/<type>/<id>``.

    The name lives in the ``-tickets`` segment, date and location in the
    segment after it.
    """
    segments = _segments(path)
    for index, segment in enumerate(segments):
        if not segment.lower().endswith("-tickets"):
            continue
        name_tokens = split_tokens(_strip_id_tokens(segment))
        detail = split_tokens(segments[index + 1]) if index + 1 < len(segments) else []
        event_date, detail = extract_date(detail, day_first=day_first)
        city = state = ""
        # The state token sits right after a one- to three-word city.
        for position in range(1, min(4, len(detail))):
            code = US_STATE_LOOKUP.get(detail[position], "")
            if code:
                city, state = title_case(detail[:position]), code
                break
        return SlugParts(
            name=title_case(name_tokens),
            date=event_date,
            city=city,
            state=state,
            tokens=tuple(name_tokens),
        )
    return read_generic_slug(path, day_first=day_first)
