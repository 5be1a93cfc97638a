"""HTML content extraction: page fetch + structured-data parse -> PartialEvent.

Fetching is delegated to an :class:`IPageProvider` and markup parsing to an
:class:`IStructuredDataParser`; this service only turns the resulting
:class:`PageHints` into a :class:`PartialEvent` (title cleanup, date split,
state normalization, "in City, ST" title fallback).  It never raises: any
fetch or parse failure yields an empty partial record.
"""

from __future__ import annotations

import re

from eventdraft.config.reference_tables import US_STATE_LOOKUP
from eventdraft.interfaces.page_provider import IPageProvider
from eventdraft.interfaces.structured_data_parser import IStructuredDataParser, PageHints
from eventdraft.models.partial import PartialEvent
from eventdraft.utils.errors import EventDraftError
from eventdraft.utils.logging import get_logger
from eventdraft.utils.text_normalizer import clean_event_title, split_iso_datetime

logger = get_logger(__name__)

# "Lady Gaga Tickets in Glendale, AZ at State Farm Stadium"
_TITLE_LOCATION = re.compile(r"\bin\s+([A-Z][A-Za-z.' ]+?),\s*([A-Z]{2})\b")
_DEFAULT_MAX_IMAGES = 5


def normalize_state(value: str) -> str:
    """Return the two-letter code for a state name or code; else *value*."""
    return US_STATE_LOOKUP.get(value.strip().lower(), value.strip())


class HtmlContentExtractor:
    """Reads event hints from a rendered event page."""

    def __init__(
        self,
        page_provider: IPageProvider,
        parser: IStructuredDataParser,
        max_images: int = _DEFAULT_MAX_IMAGES,
    ) -> None:
        self._page_provider = page_provider
        self._parser = parser
        self._max_images = max_images

    async def extract(self, url: str) -> PartialEvent:
        """Fetch *url* and return whatever event fields its markup exposes."""
        try:
            html = await self._page_provider.fetch_html(url)
        except EventDraftError as exc:
            logger.warning("html_fetch_failed", url=url, error=str(exc))
            return PartialEvent()

        try:
            hints = self._parser.parse(html)
        except EventDraftError as exc:
            logger.warning("html_parse_failed", url=url, error=str(exc))
            return PartialEvent()

        partial = self.hints_to_partial(hints)
        logger.debug("html_extracted", url=url, fields=partial.filled_fields())
        return partial

    def hints_to_partial(self, hints: PageHints) -> PartialEvent:
        event_date, event_time = split_iso_datetime(hints.start_date)

        city, state = hints.venue_city, normalize_state(hints.venue_state)
        if not city or not state:
            match = _TITLE_LOCATION.search(hints.title)
            if match:
                city = city or match.group(1).strip()
                state = state or match.group(2)

        return PartialEvent(
            title=clean_event_title(hints.title),
            description=hints.description,
            date=event_date,
            time=event_time,
            venue_name=hints.venue_name,
            venue_address=hints.venue_address,
            venue_city=city,
            venue_state=state,
            price_min=hints.price_min,
            price_max=hints.price_max,
            performers=hints.performers,
            image_urls=hints.image_urls[: self._max_images],
            event_type=hints.event_type,
        )
