"""Ticketmaster Discovery API provider.

Implements :class:`IMarketplaceProvider` against the Discovery API v2
(``/events/{id}.json`` and ``/events.json?keyword=``).  Requires an API key
from https://developer.ticketmaster.com/; without one the provider reports
itself unavailable and the strategy chain skips it.
"""

from __future__ import annotations

import re
from typing import Any

import httpx

from eventdraft.config.reference_tables import VENDOR_SEGMENT_TYPES
from eventdraft.models.partial import PartialEvent
from eventdraft.providers.marketplace.base import JsonMarketplaceProvider, as_dict, as_list
from eventdraft.utils.text_normalizer import clean_text, normalize_clock, parse_price

_DEFAULT_API_BASE = "https://app.ticketmaster.com/discovery/v2"
_EVENT_ID = re.compile(r"/event/([A-Z0-9]+)", re.IGNORECASE)
_SEARCH_SIZE = 5
_MIN_IMAGE_WIDTH = 300
_MAX_IMAGES = 5


class TicketmasterProvider(JsonMarketplaceProvider):
    """Event lookup and keyword search via the Ticketmaster Discovery API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str = "",
        api_base: str = _DEFAULT_API_BASE,
        timeout: float = 8.0,
    ) -> None:
        super().__init__(http_client, timeout=timeout)
        self._api_key = api_key
        self._api_base = api_base.rstrip("/")

    def extract_event_id(self, path: str) -> str:
        match = _EVENT_ID.search(path)
        return match.group(1) if match else ""

    async def lookup_event(self, event_id: str) -> PartialEvent | None:
        payload = await self._get_json(
            f"{self._api_base}/events/{event_id}.json",
            params={"apikey": self._api_key},
            allow_not_found=True,
        )
        if not payload:
            return None
        self._logger.info("ticketmaster_event_found", event_id=event_id)
        return self._map_payload(self._to_partial, payload)

    async def search_events(
        self,
        phrase: str,
        on_date: str = "",
        city: str = "",
    ) -> list[tuple[str, PartialEvent]]:
        params: dict[str, Any] = {
            "apikey": self._api_key,
            "keyword": phrase,
            "size": _SEARCH_SIZE,
        }
        if city:
            params["city"] = city
        if on_date:
            params["startDateTime"] = f"{on_date}T00:00:00Z"
            params["endDateTime"] = f"{on_date}T23:59:59Z"

        payload = await self._get_json(f"{self._api_base}/events.json", params=params)
        results = self._map_payload(self._search_results, payload or {})
        self._logger.debug("ticketmaster_search", phrase=phrase, results=len(results))
        return results

    def get_provider_name(self) -> str:
        return "ticketmaster"

    def is_available(self) -> bool:
        return bool(self._api_key)

    # -- Payload mapping -------------------------------------------------------

    def _search_results(self, payload: dict[str, Any]) -> list[tuple[str, PartialEvent]]:
        events = as_list(as_dict(payload.get("_embedded")).get("events"))
        return [
            (clean_text(event.get("name")), self._to_partial(event))
            for event in events
            if isinstance(event, dict)
        ]

    @staticmethod
    def _to_partial(event: dict[str, Any]) -> PartialEvent:
        start = as_dict(as_dict(event.get("dates")).get("start"))
        embedded = as_dict(event.get("_embedded"))
        venues = [v for v in as_list(embedded.get("venues")) if isinstance(v, dict)]
        venue = venues[0] if venues else {}
        price_ranges = [r for r in as_list(event.get("priceRanges")) if isinstance(r, dict)]

        mins = [parse_price(r.get("min")) for r in price_ranges]
        maxes = [parse_price(r.get("max")) for r in price_ranges]
        mins = [p for p in mins if p is not None]
        maxes = [p for p in maxes if p is not None]

        images = sorted(
            (
                img
                for img in as_list(event.get("images"))
                if isinstance(img, dict) and isinstance(img.get("url"), str) and img["url"]
            ),
            key=_image_width,
            reverse=True,
        )
        image_urls = tuple(
            img["url"] for img in images if _image_width(img) >= _MIN_IMAGE_WIDTH
        )[:_MAX_IMAGES]

        performers = tuple(
            clean_text(a.get("name"))
            for a in as_list(embedded.get("attractions"))
            if isinstance(a, dict) and clean_text(a.get("name"))
        )

        capacity = venue.get("capacity")
        return PartialEvent(
            title=clean_text(event.get("name")),
            description=clean_text(event.get("description") or event.get("info")),
            date=clean_text(start.get("localDate")),
            time=normalize_clock(start.get("localTime")),
            venue_name=clean_text(venue.get("name")),
            venue_address=clean_text(as_dict(venue.get("address")).get("line1")),
            venue_city=clean_text(as_dict(venue.get("city")).get("name")),
            venue_state=clean_text(as_dict(venue.get("state")).get("stateCode")),
            venue_capacity=capacity if isinstance(capacity, int) and capacity > 0 else None,
            price_min=min(mins) if mins else None,
            price_max=max(maxes) if maxes else None,
            performers=performers,
            image_urls=image_urls,
            event_type=_segment_type(as_list(event.get("classifications"))),
        )


def _image_width(image: dict[str, Any]) -> int:
    width = image.get("width")
    return width if isinstance(width, int) else 0


def _segment_type(classifications: list[Any]) -> str:
    """Map the primary classification to an event type.

    A known genre (``Comedy`` under ``Arts & Theatre``) wins over the
    segment (``Music``).
    """
    entries = [c for c in classifications if isinstance(c, dict)]
    primary = next((c for c in entries if c.get("primary")), entries[0] if entries else {})
    for level in ("genre", "segment"):
        name = clean_text(as_dict(primary.get(level)).get("name")).lower()
        if name in VENDOR_SEGMENT_TYPES:
            return VENDOR_SEGMENT_TYPES[name]
    return ""
