"""SeatGeek platform API provider.

Implements :class:`IMarketplaceProvider` against ``api.seatgeek.com/2``.
Every call is authenticated with a ``client_id`` query parameter; without
one the provider reports itself unavailable.
"""

from __future__ import annotations

import re
from typing import Any

import httpx

from eventdraft.config.reference_tables import VENDOR_SEGMENT_TYPES
from eventdraft.models.partial import PartialEvent
from eventdraft.providers.marketplace.base import JsonMarketplaceProvider, as_dict, as_list
from eventdraft.utils.text_normalizer import clean_text, parse_price, split_iso_datetime

_DEFAULT_API_BASE = "https://api.seatgeek.com/2"
_EVENT_ID = re.compile(r"/(\d{4,})(?:/|$)")
_SEARCH_SIZE = 5
_SPORTS_TYPES = frozenset({"nba", "nfl", "mlb", "nhl", "mls", "wnba", "ufc", "boxing", "soccer"})


class SeatGeekProvider(JsonMarketplaceProvider):
    """Event lookup and keyword search via the SeatGeek API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        client_id: str = "",
        api_base: str = _DEFAULT_API_BASE,
        timeout: float = 8.0,
    ) -> None:
        super().__init__(http_client, timeout=timeout)
        self._client_id = client_id
        self._api_base = api_base.rstrip("/")

    def extract_event_id(self, path: str) -> str:
        matches = _EVENT_ID.findall(path)
        return matches[-1] if matches else ""

    async def lookup_event(self, event_id: str) -> PartialEvent | None:
        payload = await self._get_json(
            f"{self._api_base}/events/{event_id}",
            params={"client_id": self._client_id},
            allow_not_found=True,
        )
        if not payload:
            return None
        self._logger.info("seatgeek_event_found", event_id=event_id)
        return self._map_payload(self._to_partial, payload)

    async def search_events(
        self,
        phrase: str,
        on_date: str = "",
        city: str = "",
    ) -> list[tuple[str, PartialEvent]]:
        params: dict[str, Any] = {
            "client_id": self._client_id,
            "q": phrase,
            "per_page": _SEARCH_SIZE,
        }
        if on_date:
            params["datetime_local.gte"] = f"{on_date}T00:00:00"
            params["datetime_local.lte"] = f"{on_date}T23:59:59"
        if city:
            params["venue.city"] = city

        payload = await self._get_json(f"{self._api_base}/events", params=params)
        return self._map_payload(self._search_results, payload or {})

    def get_provider_name(self) -> str:
        return "seatgeek"

    def is_available(self) -> bool:
        return bool(self._client_id)

    # -- Payload mapping -------------------------------------------------------

    def _search_results(self, payload: dict[str, Any]) -> list[tuple[str, PartialEvent]]:
        return [
            (clean_text(event.get("title")), self._to_partial(event))
            for event in as_list(payload.get("events"))
            if isinstance(event, dict)
        ]

    @staticmethod
    def _to_partial(event: dict[str, Any]) -> PartialEvent:
        venue = as_dict(event.get("venue"))
        stats = as_dict(event.get("stats"))
        performers = [p for p in as_list(event.get("performers")) if isinstance(p, dict)]
        event_date, event_time = split_iso_datetime(event.get("datetime_local"))

        images: list[str] = []
        for performer in performers:
            image = performer.get("image")
            if isinstance(image, str) and image.startswith("http") and image not in images:
                images.append(image)

        capacity = venue.get("capacity")
        return PartialEvent(
            title=clean_text(event.get("title") or event.get("short_title")),
            description=clean_text(event.get("description")),
            date=event_date,
            time=event_time,
            venue_name=clean_text(venue.get("name")),
            venue_address=clean_text(venue.get("address")),
            venue_city=clean_text(venue.get("city")),
            venue_state=clean_text(venue.get("state")),
            venue_capacity=capacity if isinstance(capacity, int) and capacity > 0 else None,
            price_min=parse_price(stats.get("lowest_price")),
            price_max=parse_price(stats.get("highest_price")),
            performers=tuple(clean_text(p.get("name")) for p in performers if clean_text(p.get("name"))),
            image_urls=tuple(images),
            event_type=_event_type(clean_text(event.get("type")).lower()),
        )


def _event_type(vendor_type: str) -> str:
    if vendor_type in _SPORTS_TYPES or vendor_type.startswith("ncaa"):
        return "sports"
    return VENDOR_SEGMENT_TYPES.get(vendor_type, "")
