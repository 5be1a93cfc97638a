"""Static reference tables for slug decomposition and category synthesis.

# ─── PURPOSE ───────────────────────────────────────────────────────────
#
# Pure data, no logic.  Everything here is built once at import time and
# thereafter accessed through O(1) dict/set lookups:
#
#   - US state names / codes  -> two-letter abbreviation
#   - city prefixes that belong to a multi-word city ("san", "los", ...)
#   - host suffixes whose slugs carry day-first dates
#   - title-casing small words
#   - ordered category keyword buckets and their display labels
#   - category-driven synthetic defaults (capacity, show time, tiers)
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations


# ═════════════════════════════════════════════════════════════════════════
# 1. US STATES
# ═════════════════════════════════════════════════════════════════════════

US_STATE_NAMES: dict[str, str] = {
    "alabama": "AL",
    "alaska": "AK",
    "arizona": "AZ",
    "arkansas": "AR",
    "california": "CA",
    "colorado": "CO",
    "connecticut": "CT",
    "delaware": "DE",
    "district of columbia": "DC",
    "florida": "FL",
    "georgia": "GA",
    "hawaii": "HI",
    "idaho": "ID",
    "illinois": "IL",
    "indiana": "IN",
    "iowa": "IA",
    "kansas": "KS",
    "kentucky": "KY",
    "louisiana": "LA",
    "maine": "ME",
    "maryland": "MD",
    "massachusetts": "MA",
    "michigan": "MI",
    "minnesota": "MN",
    "mississippi": "MS",
    "missouri": "MO",
    "montana": "MT",
    "nebraska": "NE",
    "nevada": "NV",
    "new hampshire": "NH",
    "new jersey": "NJ",
    "new mexico": "NM",
    "new york": "NY",
    "north carolina": "NC",
    "north dakota": "ND",
    "ohio": "OH",
    "oklahoma": "OK",
    "oregon": "OR",
    "pennsylvania": "PA",
    "rhode island": "RI",
    "south carolina": "SC",
    "south dakota": "SD",
    "tennessee": "TN",
    "texas": "TX",
    "utah": "UT",
    "vermont": "VT",
    "virginia": "VA",
    "washington": "WA",
    "west virginia": "WV",
    "wisconsin": "WI",
    "wyoming": "WY",
}

# Two-letter codes map to themselves so one lookup covers both spellings.
US_STATE_CODES: dict[str, str] = {code.lower(): code for code in US_STATE_NAMES.values()}

US_STATE_LOOKUP: dict[str, str] = {**US_STATE_NAMES, **US_STATE_CODES}

# Leading words of multi-word US city names ("san-antonio", "st-louis").
CITY_PREFIXES: frozenset[str] = frozenset({
    "san", "santa", "los", "las", "new", "st", "saint", "fort", "ft",
    "el", "la", "salt", "grand", "palm", "long", "kansas", "oklahoma",
    "colorado", "baton", "corpus", "virginia", "west", "east", "north",
    "south", "sioux", "cedar", "green", "little", "ann", "atlantic",
})


# ═════════════════════════════════════════════════════════════════════════
# 2. LOCALES
# ═════════════════════════════════════════════════════════════════════════

# Hosts ending in one of these write slug dates day-first (DD-MM-YYYY).
DAY_FIRST_HOST_SUFFIXES: tuple[str, ...] = (
    ".co.uk", ".uk", ".ie", ".com.au", ".au", ".co.nz", ".nz",
    ".de", ".at", ".ch", ".fr", ".be", ".nl", ".es", ".it", ".se",
    ".no", ".dk", ".fi", ".pl", ".co.za", ".ae", ".in",
)


# ═════════════════════════════════════════════════════════════════════════
# 3. TITLE CASING
# ═════════════════════════════════════════════════════════════════════════

SMALL_WORDS: frozenset[str] = frozenset({
    "a", "an", "and", "as", "at", "but", "by", "for", "from", "in", "into",
    "of", "on", "or", "the", "to", "vs", "via", "with",
})


# ═════════════════════════════════════════════════════════════════════════
# 4. CATEGORY BUCKETS
# ═════════════════════════════════════════════════════════════════════════
# Order is significant: the classifier returns the first bucket with a
# whole-word (or phrase) hit.  Phrases are written with spaces because the
# classifier runs on the title-cased event name, not the raw slug.

CATEGORY_KEYWORDS: tuple[tuple[str, frozenset[str]], ...] = (
    ("comedy", frozenset({
        "comedy", "comedian", "comedians", "comic", "stand up", "standup",
        "stand-up", "improv", "laugh", "laughs", "roast", "funny",
    })),
    ("sports", frozenset({
        "nba", "nfl", "mlb", "nhl", "mls", "wnba", "ncaa", "fifa", "ufc",
        "wwe", "aew", "mma", "boxing", "wrestling", "soccer", "football",
        "basketball", "baseball", "hockey", "rodeo", "motocross", "monster jam",
        "nascar", "tennis", "golf", "world cup", "playoffs", "championship",
        "fight night", "vs", "versus",
    })),
    ("theater", frozenset({
        "musical", "broadway", "theater", "theatre", "play", "opera", "ballet",
        "symphony", "orchestra", "nutcracker", "cirque", "off broadway",
        "hamilton", "wicked", "les miserables", "phantom of the opera",
    })),
    ("movie", frozenset({
        "movie", "movies", "film", "films", "screening", "cinema", "imax",
        "premiere", "matinee", "double feature",
    })),
)

DEFAULT_EVENT_TYPE = "concert"

CATEGORY_LABELS: dict[str, str] = {
    "comedy": "Comedy",
    "sports": "Sports",
    "theater": "Theater",
    "movie": "Film",
    "concert": "Music",
    "event": "Other",
}

# Upstream vendor classifications -> our event types.
VENDOR_SEGMENT_TYPES: dict[str, str] = {
    "music": "concert",
    "concert": "concert",
    "concerts": "concert",
    "sports": "sports",
    "sport": "sports",
    "arts & theatre": "theater",
    "arts & theater": "theater",
    "theater": "theater",
    "theatre": "theater",
    "broadway_tickets_national": "theater",
    "film": "movie",
    "movie": "movie",
    "comedy": "comedy",
    "miscellaneous": "event",
    "family": "event",
}


# ═════════════════════════════════════════════════════════════════════════
# 5. SYNTHETIC DEFAULTS
# ═════════════════════════════════════════════════════════════════════════
# (level, base price, sections).  Tiers run from most to least expensive.

DEFAULT_TIERS: dict[str, tuple[tuple[str, float, tuple[str, ...]], ...]] = {
    "comedy": (
        ("VIP", 75.0, ("Front Tables",)),
        ("Premium", 50.0, ("Center",)),
        ("General Admission", 35.0, ()),
    ),
    "sports": (
        ("Premium", 250.0, ("Courtside", "Club")),
        ("Lower Level", 120.0, ("Lower Bowl",)),
        ("Upper Level", 60.0, ("Upper Bowl",)),
    ),
    "theater": (
        ("VIP", 250.0, ("VIP",)),
        ("Orchestra", 150.0, ("Orchestra",)),
        ("Mezzanine", 100.0, ("Mezzanine",)),
        ("Balcony", 75.0, ("Balcony",)),
    ),
    "movie": (
        ("Premium", 25.0, ()),
        ("Standard", 15.0, ()),
    ),
    "concert": (
        ("VIP", 150.0, ()),
        ("Premium", 100.0, ()),
        ("General", 75.0, ()),
    ),
    "event": (
        ("VIP", 150.0, ()),
        ("General Admission", 50.0, ()),
    ),
}

DEFAULT_CAPACITY: dict[str, int] = {
    "comedy": 400,
    "sports": 20000,
    "theater": 1500,
    "movie": 300,
    "concert": 5000,
    "event": 1000,
}

DEFAULT_SHOW_TIME: dict[str, str] = {
    "comedy": "20:00",
    "sports": "19:00",
    "theater": "19:30",
    "movie": "19:30",
    "concert": "20:00",
    "event": "19:00",
}

SERVICE_FEE_RATE = 0.10
TAX_RATE_PERCENT = 8.0

# Words that end the headliner part of a concert/comedy title.
HEADLINER_STOP_WORDS: frozenset[str] = frozenset({
    "live", "tour", "the", "with", "presents", "in", "at", "and", "world",
    "comedy", "concert", "show", "night", "-", "–", ":",
})

# Gallery placeholder when no channel yields an image: the first keyword
# found (whole word) in the title, venue name or event type wins.
FALLBACK_IMAGES: tuple[tuple[str, str], ...] = (
    ("soccer", "https://picsum.photos/seed/soccer/800/450"),
    ("fifa", "https://picsum.photos/seed/soccer/800/450"),
    ("world cup", "https://picsum.photos/seed/soccer/800/450"),
    ("nfl", "https://picsum.photos/seed/stadium/800/450"),
    ("football", "https://picsum.photos/seed/stadium/800/450"),
    ("nba", "https://picsum.photos/seed/basketball/800/450"),
    ("basketball", "https://picsum.photos/seed/basketball/800/450"),
    ("mlb", "https://picsum.photos/seed/baseball/800/450"),
    ("baseball", "https://picsum.photos/seed/baseball/800/450"),
    ("nhl", "https://picsum.photos/seed/hockey/800/450"),
    ("hockey", "https://picsum.photos/seed/hockey/800/450"),
    ("concert", "https://picsum.photos/seed/concert/800/450"),
    ("music", "https://picsum.photos/seed/concert/800/450"),
    ("tour", "https://picsum.photos/seed/concert/800/450"),
    ("theater", "https://picsum.photos/seed/theater/800/450"),
    ("comedy", "https://picsum.photos/seed/comedy/800/450"),
)
DEFAULT_FALLBACK_IMAGE = "https://picsum.photos/seed/event/800/450"
