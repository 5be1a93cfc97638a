"""Eventbrite public embed endpoint provider.

Eventbrite's own event pages hydrate from the destination events endpoint
(``/api/v3/destination/events/?event_ids=...``), which answers without an
OAuth token.  Only id lookup is supported; there is no keyword search.
"""

from __future__ import annotations

import re
from typing import Any

import httpx

from eventdraft.models.partial import PartialEvent
from eventdraft.providers.marketplace.base import JsonMarketplaceProvider, as_dict, as_list
from eventdraft.utils.text_normalizer import clean_text, normalize_clock, parse_price

_DEFAULT_EMBED_BASE = "https://www.eventbrite.com/api/v3/destination/events/"
_EVENT_ID = re.compile(r"-(\d{6,})(?:/|$)")
_EXPAND = "primary_venue,ticket_availability,image"

# Eventbrite category tags -> event types.
_CATEGORY_TYPES: dict[str, str] = {
    "music": "concert",
    "comedy": "comedy",
    "film, media & entertainment": "movie",
    "performing & visual arts": "theater",
    "sports & fitness": "sports",
}


class EventbriteProvider(JsonMarketplaceProvider):
    """Event lookup via Eventbrite's unauthenticated destination endpoint."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        embed_base: str = _DEFAULT_EMBED_BASE,
        timeout: float = 8.0,
    ) -> None:
        super().__init__(http_client, timeout=timeout)
        self._embed_base = embed_base

    def extract_event_id(self, path: str) -> str:
        match = _EVENT_ID.search(path)
        return match.group(1) if match else ""

    async def lookup_event(self, event_id: str) -> PartialEvent | None:
        payload = await self._get_json(
            self._embed_base,
            params={"event_ids": event_id, "expand": _EXPAND},
            allow_not_found=True,
        )
        if not payload:
            return None
        return self._map_payload(self._first_event, payload)

    async def search_events(
        self,
        phrase: str,
        on_date: str = "",
        city: str = "",
    ) -> list[tuple[str, PartialEvent]]:
        return []

    def get_provider_name(self) -> str:
        return "eventbrite"

    def is_available(self) -> bool:
        """No credential needed."""
        return True

    # -- Payload mapping -------------------------------------------------------

    def _first_event(self, payload: dict[str, Any]) -> PartialEvent | None:
        events = as_list(payload.get("events"))
        if not events or not isinstance(events[0], dict):
            return None
        return self._to_partial(events[0])

    @staticmethod
    def _to_partial(event: dict[str, Any]) -> PartialEvent:
        venue = as_dict(event.get("primary_venue"))
        address = as_dict(venue.get("address"))
        tickets = as_dict(event.get("ticket_availability"))
        image = as_dict(event.get("image"))
        name = event.get("name")
        if isinstance(name, dict):
            name = name.get("text")

        image_url = image.get("url") or as_dict(image.get("original")).get("url")
        return PartialEvent(
            title=clean_text(name),
            description=clean_text(event.get("summary")),
            date=clean_text(event.get("start_date")),
            time=normalize_clock(event.get("start_time")),
            venue_name=clean_text(venue.get("name")),
            venue_address=clean_text(address.get("address_1")),
            venue_city=clean_text(address.get("city")),
            venue_state=clean_text(address.get("region")),
            price_min=parse_price(as_dict(tickets.get("minimum_ticket_price")).get("major_value")),
            price_max=parse_price(as_dict(tickets.get("maximum_ticket_price")).get("major_value")),
            image_urls=(image_url,) if isinstance(image_url, str) and image_url else (),
            event_type=_category_type(as_list(event.get("tags"))),
        )


def _category_type(tags: list[Any]) -> str:
    for tag in tags:
        if isinstance(tag, dict) and tag.get("prefix") == "EventbriteCategory":
            return _CATEGORY_TYPES.get(clean_text(tag.get("display_name")).lower(), "")
    return ""
