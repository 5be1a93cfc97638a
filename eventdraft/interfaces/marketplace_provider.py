"""Abstract base class for ticket-marketplace data providers.

A marketplace provider wraps one vendor's structured channel: an
authenticated discovery API (Ticketmaster, SeatGeek) or a public embed
endpoint (Eventbrite).  Results come back as :class:`PartialEvent` records
so the strategy chain can merge them without knowing the vendor's payload.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from eventdraft.models.partial import PartialEvent


# Concrete implementations: TicketmasterProvider, SeatGeekProvider,
# EventbriteProvider (eventdraft/providers/marketplace/)
class IMarketplaceProvider(ABC):
    """Contract for vendor event lookup and keyword search."""

    @abstractmethod
    def extract_event_id(self, path: str) -> str:
        """Return the vendor's event id embedded in a URL *path*, or ``""``."""

    @abstractmethod
    async def lookup_event(self, event_id: str) -> PartialEvent | None:
        """Fetch one event by its vendor id.

        Returns
        -------
        PartialEvent or None
            ``None`` when the vendor knows no such event.

        Raises
        ------
        eventdraft.utils.errors.UpstreamUnavailableError
            On transport errors, non-2xx or non-JSON responses.
        """

    @abstractmethod
    async def search_events(
        self,
        phrase: str,
        on_date: str = "",
        city: str = "",
    ) -> list[tuple[str, PartialEvent]]:
        """Keyword search for events.

        Parameters
        ----------
        phrase:
            Search phrase (slug name without date/location tokens).
        on_date:
            Optional ISO date to restrict results to.
        city:
            Optional city filter.  Providers that cannot filter by city
            ignore it.

        Returns
        -------
        list[tuple[str, PartialEvent]]
            ``(vendor title, partial record)`` pairs in vendor order; the
            caller picks the best match by name similarity.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the vendor key (``"ticketmaster"``, ``"seatgeek"`` ...)."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` when the vendor credential (if any) is configured."""
