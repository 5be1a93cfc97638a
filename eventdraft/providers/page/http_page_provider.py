"""Event page fetcher using httpx.

Fetches raw HTML for the HTML extraction step.  Marketplaces serve
stripped or blocked pages to obvious bots, so requests carry a desktop
browser header set.
"""

from __future__ import annotations

import httpx

from eventdraft.interfaces.page_provider import IPageProvider
from eventdraft.utils.errors import UpstreamUnavailableError
from eventdraft.utils.logging import get_logger

logger = get_logger(__name__)

_DEFAULT_TIMEOUT = 8.0
BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


class HttpPageProvider(IPageProvider):
    """Page fetcher backed by a shared ``httpx.AsyncClient``.

    When no client is injected a private one is created with the browser
    headers and a bounded timeout.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._timeout = timeout
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers=BROWSER_HEADERS,
            follow_redirects=True,
        )

    async def fetch_html(self, url: str) -> str:
        """GET *url* with browser headers and return the body text."""
        try:
            response = await self._client.get(
                url,
                headers=BROWSER_HEADERS,
                timeout=self._timeout,
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise UpstreamUnavailableError(
                message=f"Timeout fetching {url}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise UpstreamUnavailableError(
                message=f"HTTP {exc.response.status_code} for {url}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(
                message=f"HTTP error fetching {url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        logger.debug("page_fetched", url=url, length=len(response.text))
        return response.text

    def get_provider_name(self) -> str:
        return "http_page"

    def is_available(self) -> bool:
        """Always available; no credentials required."""
        return True
