"""Unit tests for the HTML content extractor and the page fetcher."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from eventdraft.interfaces.structured_data_parser import PageHints
from eventdraft.providers.page.http_page_provider import HttpPageProvider
from eventdraft.providers.structured_data.markup_parser import MarkupParser
from eventdraft.services.html_content_extractor import HtmlContentExtractor, normalize_state
from eventdraft.utils.errors import StructuredDataError, UpstreamUnavailableError
from tests.conftest import unreachable


def _page_provider(html: str = "", error: Exception | None = None) -> MagicMock:
    provider = MagicMock()
    provider.fetch_html = AsyncMock(return_value=html, side_effect=error)
    return provider


# ======================================================================
# HtmlContentExtractor
# ======================================================================


class TestHtmlContentExtractor:
    @pytest.mark.asyncio
    async def test_extracts_partial_from_page(self, event_page_html: str) -> None:
        extractor = HtmlContentExtractor(_page_provider(event_page_html), MarkupParser())
        partial = await extractor.extract("https://www.ticketnetwork.com/tickets/laugh-riot-live")

        assert partial.title == "Laugh Riot Live"
        assert (partial.date, partial.time) == ("2026-05-02", "20:00")
        assert partial.venue_name == "Paramount Theatre"
        assert (partial.venue_city, partial.venue_state) == ("Austin", "TX")
        assert partial.event_type == "comedy"
        assert len(partial.image_urls) == 2

    @pytest.mark.asyncio
    async def test_fetch_failure_yields_empty_partial(self) -> None:
        provider = _page_provider(error=UpstreamUnavailableError("HTTP 403", provider_name="http_page"))
        extractor = HtmlContentExtractor(provider, MarkupParser())
        partial = await extractor.extract("https://example.com/event")
        assert partial.is_empty()

    @pytest.mark.asyncio
    async def test_parse_failure_yields_empty_partial(self) -> None:
        parser = MagicMock()
        parser.parse.side_effect = StructuredDataError("Unreadable page markup", provider_name="markup")
        extractor = HtmlContentExtractor(_page_provider("<html></html>"), parser)
        partial = await extractor.extract("https://example.com/event")
        assert partial.is_empty()

    def test_title_location_fallback(self) -> None:
        extractor = HtmlContentExtractor(_page_provider(), MarkupParser())
        partial = extractor.hints_to_partial(
            PageHints(title="Lady Gaga Tickets in Glendale, AZ at State Farm Stadium")
        )
        assert partial.title == "Lady Gaga"
        assert (partial.venue_city, partial.venue_state) == ("Glendale", "AZ")

    def test_page_location_beats_title(self) -> None:
        extractor = HtmlContentExtractor(_page_provider(), MarkupParser())
        partial = extractor.hints_to_partial(
            PageHints(title="Show in Austin, TX", venue_city="Dallas", venue_state="Texas")
        )
        assert (partial.venue_city, partial.venue_state) == ("Dallas", "TX")

    def test_images_capped(self) -> None:
        extractor = HtmlContentExtractor(_page_provider(), MarkupParser(), max_images=2)
        urls = tuple(f"https://cdn.example.com/{i}.jpg" for i in range(4))
        partial = extractor.hints_to_partial(PageHints(image_urls=urls))
        assert partial.image_urls == urls[:2]


class TestNormalizeState:
    def test_names_and_codes(self) -> None:
        assert normalize_state("Texas") == "TX"
        assert normalize_state(" new york ") == "NY"
        assert normalize_state("tx") == "TX"

    def test_unknown_passes_through(self) -> None:
        assert normalize_state("Ontario") == "Ontario"
        assert normalize_state("") == ""


# ======================================================================
# HttpPageProvider
# ======================================================================


class TestHttpPageProvider:
    @pytest.mark.asyncio
    async def test_fetches_with_browser_headers(
        self, make_client: Callable[..., httpx.AsyncClient]
    ) -> None:
        seen: dict[str, str] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["user_agent"] = request.headers["User-Agent"]
            return httpx.Response(200, text="<html>ok</html>")

        async with make_client(handler) as client:
            html = await HttpPageProvider(client).fetch_html("https://example.com/event")

        assert html == "<html>ok</html>"
        assert seen["user_agent"].startswith("Mozilla/5.0")

    @pytest.mark.asyncio
    async def test_http_error_status(self, make_client: Callable[..., httpx.AsyncClient]) -> None:
        async with make_client(lambda request: httpx.Response(403)) as client:
            with pytest.raises(UpstreamUnavailableError, match="HTTP 403"):
                await HttpPageProvider(client).fetch_html("https://example.com/event")

    @pytest.mark.asyncio
    async def test_connection_error(self, make_client: Callable[..., httpx.AsyncClient]) -> None:
        async with make_client(unreachable) as client:
            with pytest.raises(UpstreamUnavailableError) as exc_info:
                await HttpPageProvider(client).fetch_html("https://example.com/event")
        assert exc_info.value.provider_name == "http_page"

    @pytest.mark.asyncio
    async def test_timeout(self, make_client: Callable[..., httpx.AsyncClient]) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        async with make_client(handler) as client:
            with pytest.raises(UpstreamUnavailableError, match="Timeout"):
                await HttpPageProvider(client).fetch_html("https://example.com/event")

    def test_always_available(self) -> None:
        provider = HttpPageProvider(MagicMock())
        assert provider.is_available()
        assert provider.get_provider_name() == "http_page"
