"""Abstract base class for raw page fetchers.

The HTML extraction step never talks to httpx directly; it asks an
``IPageProvider`` for the markup of a URL so tests can serve canned pages.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementation: HttpPageProvider (eventdraft/providers/page/)
class IPageProvider(ABC):
    """Contract for fetching the HTML body of an event page."""

    @abstractmethod
    async def fetch_html(self, url: str) -> str:
        """Fetch *url* and return its decoded body.

        Parameters
        ----------
        url:
            Absolute http(s) URL of the event page.

        Returns
        -------
        str
            The response body.

        Raises
        ------
        eventdraft.utils.errors.UpstreamUnavailableError
            On transport errors, timeouts or non-2xx responses.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier used in logs and error messages."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` when the fetcher can be used."""
