"""Canonical normalization of a merged PartialEvent into an EventDraft.

The strategy chain leaves a :class:`PartialEvent` with whatever fields the
reachable channels could supply.  :class:`EventDraftNormalizer` fills every
remaining gap from category-driven defaults so the result is always a
complete :class:`EventDraft`:

- title falls back to the configured placeholder ("Imported Event");
- city/state fall back to the configured default location;
- date falls back to *today + offset* from an injectable clock, time to the
  category's usual show time;
- pricing tiers come from the category table, rescaled to any observed
  min/max price, with a 10% service fee and 8% tax;
- description is generated from a per-category template;
- performers are guessed from the title for concerts and comedy;
- an empty gallery gets one keyword-picked placeholder image.

The same partial record and the same clock always produce the same draft.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date, timedelta
from typing import Any

from eventdraft.config.reference_tables import (
    DEFAULT_CAPACITY,
    DEFAULT_EVENT_TYPE,
    DEFAULT_FALLBACK_IMAGE,
    DEFAULT_SHOW_TIME,
    DEFAULT_TIERS,
    FALLBACK_IMAGES,
    SERVICE_FEE_RATE,
    TAX_RATE_PERCENT,
)
from eventdraft.models.event_draft import (
    DraftVenue,
    EventDraft,
    LayoutConfig,
    LayoutLevel,
    PricingTier,
)
from eventdraft.models.partial import PartialEvent
from eventdraft.services.category_classifier import classify_event
from eventdraft.services.html_content_extractor import normalize_state
from eventdraft.utils.confidence import draft_confidence
from eventdraft.utils.logging import get_logger
from eventdraft.utils.text_normalizer import guess_headliner

logger = get_logger(__name__)

_DEFAULT_SOURCE = "default"
_SEATED_TYPES = frozenset({"theater", "sports", "movie"})
_FIRST_LEVEL_SHARE = 0.10

_DESCRIPTION_TEMPLATES: dict[str, str] = {
    "comedy": (
        "Get ready to laugh! {title} brings a night of stand-up comedy to {where}."
    ),
    "sports": "Catch {title} live at {where} and cheer from the stands.",
    "theater": "Experience {title} on stage at {where}.",
    "movie": "Join us for a screening of {title} at {where}.",
    "concert": "Don't miss {title} performing live at {where}.",
    "event": "Join us for {title} at {where}.",
}


class EventDraftNormalizer:
    """Turns a merged :class:`PartialEvent` into a complete :class:`EventDraft`.

    Parameters
    ----------
    config:
        Resolved configuration; reads the ``extraction`` section.
    clock:
        Returns "today"; used for the placeholder date.
    """

    def __init__(
        self,
        config: dict[str, Any],
        clock: Callable[[], date] | None = None,
    ) -> None:
        extraction = config.get("extraction", {})
        self._fallback_title: str = extraction.get("fallback_title", "Imported Event")
        self._default_city: str = extraction.get("default_city", "Dallas")
        self._default_state: str = extraction.get("default_state", "TX")
        self._date_offset = timedelta(days=int(extraction.get("placeholder_date_offset_days", 30)))
        self._fallback_images = bool(extraction.get("fallback_images", True))
        self._clock = clock or date.today

    def placeholder_date(self) -> str:
        return (self._clock() + self._date_offset).isoformat()

    def normalize(
        self,
        partial: PartialEvent,
        default_type: str = DEFAULT_EVENT_TYPE,
        source: str = "",
        error: str = "",
    ) -> EventDraft:
        """Build the draft.

        Args:
            partial: Merged chain output (may be empty).
            default_type: Event type when neither a vendor classification
                nor a keyword applies.
            source: Overrides the provenance-derived ``source`` tag.
            error: Request-level error message, ``""`` on success.
        """
        field_sources = dict(partial.provenance)

        def take(field: str, value: Any, fallback: Any) -> Any:
            if value:
                return value
            field_sources[field] = _DEFAULT_SOURCE
            return fallback

        title = take("title", partial.title, self._fallback_title)
        event_type, category = classify_event(title, partial.event_type, default_type)
        city = take("venue_city", partial.venue_city, self._default_city)
        state = take("venue_state", normalize_state(partial.venue_state), self._default_state)
        event_date = take("date", partial.date, self.placeholder_date())
        event_time = take("time", partial.time, DEFAULT_SHOW_TIME[event_type])
        capacity = take("venue_capacity", partial.venue_capacity, DEFAULT_CAPACITY[event_type])

        description = partial.description
        if not description:
            where = partial.venue_name or f"{city}, {state}"
            description = _DESCRIPTION_TEMPLATES[event_type].format(title=title, where=where)
            field_sources["description"] = _DEFAULT_SOURCE

        performers = list(partial.performers)
        if not performers and partial.title and event_type in ("concert", "comedy"):
            headliner = guess_headliner(title)
            if headliner:
                performers = [headliner]
                field_sources["performers"] = _DEFAULT_SOURCE

        image_urls = list(partial.image_urls)
        if not image_urls and self._fallback_images:
            image_urls = [fallback_image(title, partial.venue_name, event_type)]
            field_sources["image_urls"] = _DEFAULT_SOURCE

        pricing = build_pricing(event_type, partial.price_min, partial.price_max)
        if partial.price_min is None and partial.price_max is None:
            field_sources["pricing"] = _DEFAULT_SOURCE

        draft = EventDraft(
            title=title,
            description=description,
            date=event_date,
            time=event_time,
            venue=DraftVenue(
                name=partial.venue_name,
                address=partial.venue_address,
                city=city,
                state=state,
                capacity=capacity,
            ),
            pricing=pricing,
            performers=performers,
            image_urls=image_urls,
            event_type=event_type,
            category=category,
            source=source or _winning_source(partial),
            confidence=draft_confidence(field_sources).value,
            field_sources=field_sources,
            layout_config=build_layout(event_type, pricing, capacity),
            error=error,
        )
        logger.debug(
            "draft_normalized",
            event_type=event_type,
            source=draft.source,
            defaults=sorted(k for k, v in field_sources.items() if v == _DEFAULT_SOURCE),
        )
        return draft


def fallback_image(title: str, venue_name: str = "", event_type: str = "") -> str:
    """Placeholder image for the first keyword found in the event text."""
    text = f" {title} {venue_name} {event_type} ".lower()
    for keyword, url in FALLBACK_IMAGES:
        if re.search(rf"\b{re.escape(keyword)}\b", text):
            return url
    return DEFAULT_FALLBACK_IMAGE


def _winning_source(partial: PartialEvent) -> str:
    provenance = partial.provenance
    return provenance.get("venue_name") or provenance.get("title") or _DEFAULT_SOURCE


def _tier(level: str, price: float, sections: tuple[str, ...]) -> PricingTier:
    price = round(price, 2)
    return PricingTier(
        level=level,
        price=price,
        service_fee=round(price * SERVICE_FEE_RATE, 2),
        tax=TAX_RATE_PERCENT,
        sections=list(sections),
    )


def build_pricing(
    event_type: str,
    price_min: float | None = None,
    price_max: float | None = None,
) -> list[PricingTier]:
    """Category tiers, rescaled to the observed price range when known.

    With both bounds the tiers are mapped linearly onto ``[min, max]``; with
    one bound the tiers are scaled so the cheapest (or dearest) tier matches.
    """
    table = DEFAULT_TIERS.get(event_type, DEFAULT_TIERS["event"])
    top, bottom = table[0][1], table[-1][1]

    if price_min is not None and price_max is not None and price_max > price_min and top > bottom:
        span = (price_max - price_min) / (top - bottom)
        return [_tier(level, price_min + (base - bottom) * span, sections)
                for level, base, sections in table]
    if price_min is not None:
        factor = price_min / bottom
    elif price_max is not None:
        factor = price_max / top
    else:
        factor = 1.0
    return [_tier(level, base * factor, sections) for level, base, sections in table]


def build_layout(event_type: str, pricing: list[PricingTier], capacity: int) -> LayoutConfig:
    """Seating layout hint with one level per pricing tier.

    The first (premium) level gets 10% of capacity; the rest is split evenly
    with any remainder on the last level.
    """
    seated = event_type in _SEATED_TYPES
    layout_type = "seating_chart" if seated else "general_admission"
    if len(pricing) == 1:
        return LayoutConfig(
            type=layout_type,
            levels=[LayoutLevel(name=pricing[0].level, capacity=capacity, seated=seated)],
        )

    first = int(capacity * _FIRST_LEVEL_SHARE)
    others = len(pricing) - 1
    share, remainder = divmod(capacity - first, others)
    capacities = [first] + [share] * others
    capacities[-1] += remainder
    return LayoutConfig(
        type=layout_type,
        levels=[
            LayoutLevel(name=tier.level, capacity=cap, seated=seated)
            for tier, cap in zip(pricing, capacities, strict=True)
        ],
    )
