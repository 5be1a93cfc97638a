"""BeautifulSoup-based structured data parser for event pages.

Reads, in priority order:

1. JSON-LD ``<script type="application/ld+json">`` blocks typed as an
   Event (``@graph`` containers and top-level lists are flattened).
2. Open Graph / named ``<meta>`` tags for title, description and venue.
3. Vendor markup fragments: elements whose class mentions "venue", then
   "at <Name> Arena/Stadium/Theater..." phrases in the page text.
4. Open Graph / Twitter images, collected independently of 1-3.

A ``datetime="..."`` attribute is the date fallback when no JSON-LD
``startDate`` exists.  Broken JSON blocks (including ones nested too deep
to decode) are skipped and missing pieces stay empty; markup that cannot be
walked at all raises :class:`StructuredDataError`.
"""

from __future__ import annotations

import json
import re
from typing import Any

from bs4 import BeautifulSoup

from eventdraft.interfaces.structured_data_parser import IStructuredDataParser, PageHints
from eventdraft.utils.errors import StructuredDataError
from eventdraft.utils.logging import get_logger
from eventdraft.utils.text_normalizer import clean_text, parse_price

logger = get_logger(__name__)

# JSON-LD @type -> event type; plain "Event" carries no category.
_JSONLD_EVENT_TYPES: dict[str, str] = {
    "Event": "",
    "MusicEvent": "concert",
    "ComedyEvent": "comedy",
    "TheaterEvent": "theater",
    "SportsEvent": "sports",
    "ScreeningEvent": "movie",
    "DanceEvent": "",
    "Festival": "",
}

_VENUE_META_KEYS = ("event:venue", "og:venue", "venue", "event:location")
_IMAGE_META_KEYS = ("og:image", "og:image:secure_url", "twitter:image", "twitter:image:src")

_VENUE_KINDS = (
    "Stadium|Arena|Center|Centre|Theatre|Theater|Hall|Amphitheatre|Amphitheater|"
    "Pavilion|Auditorium|Ballroom|Coliseum|Garden|Gardens|Field|Park|Dome|Club"
)
_VENUE_PHRASE = re.compile(
    rf"\bat\s+((?:the\s+)?[A-Z][\w'&.\-]*(?:\s+[A-Z][\w'&.\-]*){{0,5}}\s+(?:{_VENUE_KINDS}))\b"
)
_MAX_VENUE_LENGTH = 120

_PARSE_ERRORS = (TypeError, AttributeError, KeyError, ValueError, RecursionError)


class MarkupParser(IStructuredDataParser):
    """Structured data extraction over ``html.parser`` soups."""

    def parse(self, html: str) -> PageHints:
        if not html or not html.strip():
            return PageHints()
        try:
            return self._parse(html)
        except _PARSE_ERRORS as exc:
            raise StructuredDataError(
                message=f"Unreadable page markup: {type(exc).__name__}",
                provider_name=self.get_provider_name(),
            ) from exc

    def _parse(self, html: str) -> PageHints:
        soup = BeautifulSoup(html, "html.parser")
        event = self._best_jsonld_event(self._parse_jsonld(soup))
        meta = self._meta_tags(soup)

        location = self._jsonld_location(event.get("location")) if event else {}
        price_min, price_max = self._jsonld_price_range(event.get("offers")) if event else (None, None)

        title = clean_text(event.get("name")) if event else ""
        title = title or meta.get("og:title", "") or meta.get("twitter:title", "")
        if not title and soup.title is not None:
            title = clean_text(soup.title.get_text())

        description = clean_text(event.get("description")) if event else ""
        description = description or meta.get("og:description", "") or meta.get("description", "")

        start_date = clean_text(event.get("startDate")) if event else ""
        if not start_date:
            start_date = self._datetime_attribute(soup)

        venue_name = location.get("name", "")
        if not venue_name:
            venue_name = next((meta[key] for key in _VENUE_META_KEYS if meta.get(key)), "")
        if not venue_name:
            venue_name = self._venue_from_fragments(soup)

        images = self._jsonld_images(event.get("image")) if event else []
        images.extend(meta[key] for key in _IMAGE_META_KEYS if meta.get(key))

        return PageHints(
            title=title,
            description=description,
            start_date=start_date,
            venue_name=venue_name,
            venue_address=location.get("address", ""),
            venue_city=location.get("city", ""),
            venue_state=location.get("state", ""),
            price_min=price_min,
            price_max=price_max,
            performers=tuple(self._jsonld_performers(event.get("performer"))) if event else (),
            image_urls=tuple(_dedupe_urls(images)),
            event_type=self._jsonld_event_type(event) if event else "",
        )

    def get_provider_name(self) -> str:
        return "markup"

    # -- JSON-LD ---------------------------------------------------------------

    @staticmethod
    def _parse_jsonld(soup: BeautifulSoup) -> list[dict[str, Any]]:
        results: list[dict[str, Any]] = []
        for script in soup.select('script[type="application/ld+json"]'):
            try:
                data = json.loads(script.string or "")
            except (json.JSONDecodeError, TypeError, RecursionError):
                logger.debug("jsonld_block_unparseable")
                continue

            entries = data if isinstance(data, list) else [data]
            for entry in entries:
                if not isinstance(entry, dict):
                    continue
                graph = entry.get("@graph")
                if isinstance(graph, list):
                    results.extend(item for item in graph if isinstance(item, dict))
                else:
                    results.append(entry)
        return results

    @staticmethod
    def _type_names(item: dict[str, Any]) -> list[str]:
        item_type = item.get("@type")
        if isinstance(item_type, list):
            return [t for t in item_type if isinstance(t, str)]
        return [item_type] if isinstance(item_type, str) else []

    def _best_jsonld_event(self, items: list[dict[str, Any]]) -> dict[str, Any]:
        candidates = [
            item for item in items
            if any(t in _JSONLD_EVENT_TYPES for t in self._type_names(item))
        ]
        if not candidates:
            return {}

        def score(candidate: dict[str, Any]) -> int:
            value = 0
            if candidate.get("startDate"):
                value += 4
            if candidate.get("location"):
                value += 2
            if candidate.get("offers"):
                value += 2
            if candidate.get("image"):
                value += 1
            return value

        return max(candidates, key=score)

    def _jsonld_event_type(self, event: dict[str, Any]) -> str:
        for type_name in self._type_names(event):
            mapped = _JSONLD_EVENT_TYPES.get(type_name, "")
            if mapped:
                return mapped
        return ""

    @staticmethod
    def _jsonld_location(location: Any) -> dict[str, str]:
        if isinstance(location, list):
            location = next((loc for loc in location if isinstance(loc, dict)), None)
        if not isinstance(location, dict):
            return {"name": clean_text(location)} if isinstance(location, str) else {}

        result = {"name": clean_text(location.get("name"))}
        address = location.get("address")
        if isinstance(address, dict):
            result["address"] = clean_text(address.get("streetAddress"))
            result["city"] = clean_text(address.get("addressLocality"))
            result["state"] = clean_text(address.get("addressRegion"))
        elif isinstance(address, str):
            result["address"] = clean_text(address)
        return {key: value for key, value in result.items() if value}

    @staticmethod
    def _jsonld_price_range(offers: Any) -> tuple[float | None, float | None]:
        offer_items = offers if isinstance(offers, list) else [offers]
        prices: list[float] = []
        for offer in offer_items:
            if not isinstance(offer, dict):
                continue
            for key in ("price", "lowPrice", "highPrice"):
                price = parse_price(offer.get(key))
                if price is not None:
                    prices.append(price)
        if not prices:
            return None, None
        return min(prices), max(prices)

    @staticmethod
    def _jsonld_images(image: Any) -> list[str]:
        entries = image if isinstance(image, list) else [image]
        urls: list[str] = []
        for entry in entries:
            if isinstance(entry, str):
                urls.append(entry.strip())
            elif isinstance(entry, dict) and isinstance(entry.get("url"), str):
                urls.append(entry["url"].strip())
        return urls

    @staticmethod
    def _jsonld_performers(performer: Any) -> list[str]:
        entries = performer if isinstance(performer, list) else [performer]
        names: list[str] = []
        for entry in entries:
            name = clean_text(entry.get("name")) if isinstance(entry, dict) else clean_text(entry)
            if name and name not in names:
                names.append(name)
        return names

    # -- Meta tags and fragments -----------------------------------------------

    @staticmethod
    def _meta_tags(soup: BeautifulSoup) -> dict[str, str]:
        """Map ``property``/``name`` -> content; the first occurrence wins."""
        meta: dict[str, str] = {}
        for tag in soup.find_all("meta"):
            key = tag.get("property") or tag.get("name")
            content = clean_text(tag.get("content"))
            if isinstance(key, str) and content:
                meta.setdefault(key.strip().lower(), content)
        return meta

    @staticmethod
    def _datetime_attribute(soup: BeautifulSoup) -> str:
        tag = soup.find(attrs={"datetime": True})
        return clean_text(tag.get("datetime")) if tag is not None else ""

    @staticmethod
    def _venue_from_fragments(soup: BeautifulSoup) -> str:
        for element in soup.select('[class*="venue"]'):
            text = clean_text(element.get_text(" "))
            if text and len(text) <= _MAX_VENUE_LENGTH:
                return text

        body = soup.body or soup
        match = _VENUE_PHRASE.search(clean_text(body.get_text(" ")))
        return match.group(1) if match else ""


def _dedupe_urls(urls: list[str]) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for url in urls:
        if url.startswith(("http://", "https://")) and url not in seen:
            seen.add(url)
            unique.append(url)
    return unique
