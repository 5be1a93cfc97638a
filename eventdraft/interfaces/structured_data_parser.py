"""Abstract base class for structured-data extraction from page markup.

Markup parsing is kept behind this narrow interface (``html -> PageHints``)
so the HTML extraction step does not depend on BeautifulSoup or on any
vendor's page layout.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PageHints:
    """Raw event hints pulled out of one HTML page.

    Attributes
    ----------
    title:
        Event name (JSON-LD ``name`` or ``og:title``), not yet cleaned.
    description:
        JSON-LD / meta description.
    start_date:
        Raw start timestamp (JSON-LD ``startDate`` or a ``datetime``
        attribute), ISO-8601-ish.
    venue_name, venue_address, venue_city, venue_state:
        Location details; state is whatever the page used (name or code).
    price_min, price_max:
        Offer price range, when the page exposes one.
    performers:
        Performer names from JSON-LD.
    image_urls:
        JSON-LD, Open Graph and Twitter images, deduplicated, page order.
    event_type:
        Event type implied by the JSON-LD ``@type`` (``ComedyEvent`` ->
        ``comedy``), or ``""``.
    """

    title: str = ""
    description: str = ""
    start_date: str = ""
    venue_name: str = ""
    venue_address: str = ""
    venue_city: str = ""
    venue_state: str = ""
    price_min: float | None = None
    price_max: float | None = None
    performers: tuple[str, ...] = ()
    image_urls: tuple[str, ...] = ()
    event_type: str = ""


# Concrete implementation: MarkupParser (eventdraft/providers/structured_data/)
class IStructuredDataParser(ABC):
    """Contract for turning page markup into :class:`PageHints`."""

    @abstractmethod
    def parse(self, html: str) -> PageHints:
        """Extract event hints from *html*.

        Implementations return an empty :class:`PageHints` for markup that
        carries no event data.  Markup that cannot be read at all raises
        :class:`~eventdraft.utils.errors.StructuredDataError`.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier used in logs."""
