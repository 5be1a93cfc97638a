"""End-to-end extraction tests: URL in, EventDraft out.

The whole stack runs for real (registry, chains, providers, parser,
normalizer); only the network is replaced with ``httpx.MockTransport``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import patch

import httpx
import pytest

from eventdraft.config.settings import Settings
from eventdraft.main import build_service
from eventdraft.models.event_draft import EventType
from eventdraft.providers.structured_data.markup_parser import MarkupParser
from eventdraft.services.extraction_service import EventExtractionService, validate_event_url
from eventdraft.utils.errors import InvalidEventURLError
from tests.conftest import EVENT_PAGE_HTML, fixed_clock, json_response, unreachable

TM_URL = (
    "https://www.ticketmaster.com/lady-gaga-the-mayhem-ball-glendale-arizona-"
    "02-14-2026/event/190063247D573A45"
)
FANDANGO_URL = "https://www.fandango.com/one-battle-after-another-2025-241516/movie-overview"
SULEKHA_URL = (
    "https://events.sulekha.com/abhijeet-bhattacharya-retro-90-s-live-in-dallas"
    "_event-in_euless-tx_396749"
)
SEATGEEK_URL = (
    "https://seatgeek.com/taylor-swift-tickets/houston-texas-nrg-stadium-2026-04-20-7-pm"
    "/concert/17012345"
)
GENERIC_URL = "https://tickets.example.com/event-name-dallas-texas-04-09-2026"


def _service(
    settings: Settings,
    config: dict[str, Any],
    handler: Callable[[httpx.Request], httpx.Response],
) -> EventExtractionService:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return build_service(settings, config, client, clock=fixed_clock)


# ======================================================================
# URL validation
# ======================================================================


class TestValidateEventUrl:
    def test_accepts_http_urls(self) -> None:
        assert validate_event_url("  https://seatgeek.com/x  ") == "https://seatgeek.com/x"

    @pytest.mark.parametrize("raw", ["", "   ", "not a url", "ftp://example.com/x", "https://"])
    def test_rejects(self, raw: str) -> None:
        with pytest.raises(InvalidEventURLError):
            validate_event_url(raw)


# ======================================================================
# Offline fallbacks
# ======================================================================


class TestSlugFallback:
    @pytest.mark.asyncio
    async def test_slug_only_generic_url(
        self, mock_config: dict[str, Any], settings_no_keys: Settings
    ) -> None:
        service = _service(settings_no_keys, mock_config, unreachable)
        draft = await service.extract(GENERIC_URL)

        assert draft.error == ""
        assert draft.title == "Event Name"
        assert draft.date == "2026-04-09"
        assert (draft.venue.city, draft.venue.state) == ("Dallas", "TX")
        assert draft.venue.name == ""
        assert draft.source == "slug"
        assert draft.field_sources["title"] == "slug"

    @pytest.mark.asyncio
    async def test_total_network_failure_still_drafts(
        self, mock_config: dict[str, Any], settings_with_keys: Settings
    ) -> None:
        service = _service(settings_with_keys, mock_config, unreachable)
        draft = await service.extract(TM_URL)

        assert draft.error == ""
        assert draft.title == "Lady Gaga the Mayhem Ball"
        assert draft.date == "2026-02-14"
        assert (draft.venue.city, draft.venue.state) == ("Glendale", "AZ")
        assert draft.event_type is EventType.CONCERT
        assert len(draft.pricing) == 3

    @pytest.mark.asyncio
    async def test_fandango_movie_title(
        self, mock_config: dict[str, Any], settings_no_keys: Settings
    ) -> None:
        service = _service(settings_no_keys, mock_config, unreachable)
        draft = await service.extract(FANDANGO_URL)

        assert draft.title == "One Battle After Another - Movie Screening"
        assert draft.event_type is EventType.MOVIE
        assert draft.category == "Film"
        assert draft.layout_config.type == "seating_chart"

    @pytest.mark.asyncio
    async def test_sulekha_location(
        self, mock_config: dict[str, Any], settings_no_keys: Settings
    ) -> None:
        service = _service(settings_no_keys, mock_config, unreachable)
        draft = await service.extract(SULEKHA_URL)

        assert (draft.venue.city, draft.venue.state) == ("Euless", "TX")
        assert draft.title.startswith("Abhijeet Bhattacharya Retro")
        assert draft.event_type is EventType.EVENT


# ======================================================================
# Network channels
# ======================================================================


class TestNetworkChannels:
    @pytest.mark.asyncio
    async def test_html_comedy_page(
        self, mock_config: dict[str, Any], settings_no_keys: Settings
    ) -> None:
        service = _service(
            settings_no_keys, mock_config, lambda request: httpx.Response(200, text=EVENT_PAGE_HTML)
        )
        draft = await service.extract("https://www.ticketnetwork.com/tickets/laugh-riot-live-austin-tx")

        assert draft.title == "Laugh Riot Live"
        assert draft.event_type is EventType.COMEDY
        assert draft.venue.name == "Paramount Theatre"
        assert (draft.venue.city, draft.venue.state) == ("Austin", "TX")
        assert (draft.date, draft.time) == ("2026-05-02", "20:00")
        assert [tier.price for tier in draft.pricing] == pytest.approx([95.0, 57.5, 35.0])
        assert draft.performers == ["Jo Koy"]
        assert draft.source == "html"

    @pytest.mark.asyncio
    async def test_lookup_short_circuits_page_fetch(
        self,
        mock_config: dict[str, Any],
        settings_with_keys: Settings,
        ticketmaster_event: dict[str, Any],
    ) -> None:
        hosts: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            hosts.append(request.url.host)
            if request.url.host == "app.ticketmaster.com":
                return json_response(ticketmaster_event)
            return httpx.Response(200, text=EVENT_PAGE_HTML)

        service = _service(settings_with_keys, mock_config, handler)
        draft = await service.extract(TM_URL)

        assert hosts == ["app.ticketmaster.com"]
        assert draft.venue.name == "State Farm Stadium"
        assert draft.source == "ticketmaster_lookup"
        assert draft.confidence == "very_high"
        assert draft.time == "19:30"
        assert draft.image_urls == ["https://img.tm/large.jpg", "https://img.tm/medium.jpg"]

    @pytest.mark.asyncio
    async def test_search_used_when_lookup_misses(
        self,
        mock_config: dict[str, Any],
        settings_with_keys: Settings,
        ticketmaster_event: dict[str, Any],
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/events.json"):
                return json_response({"_embedded": {"events": [ticketmaster_event]}})
            if request.url.host == "app.ticketmaster.com":
                return json_response({}, 404)
            return httpx.Response(403)

        service = _service(settings_with_keys, mock_config, handler)
        draft = await service.extract(TM_URL)

        assert draft.venue.name == "State Farm Stadium"
        assert draft.source == "ticketmaster_search"


# ======================================================================
# Unexpected upstream shapes
# ======================================================================


class TestUnexpectedUpstreamShapes:
    @pytest.mark.asyncio
    async def test_seatgeek_null_search_results_keep_slug_data(
        self, mock_config: dict[str, Any], settings_with_keys: Settings
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "api.seatgeek.com":
                if request.url.path == "/2/events":
                    return json_response({"events": None})
                return json_response({}, 404)
            return httpx.Response(403)

        service = _service(settings_with_keys, mock_config, handler)
        draft = await service.extract(SEATGEEK_URL)

        assert draft.error == ""
        assert draft.source == "slug"
        assert draft.title == "Taylor Swift"
        assert draft.date == "2026-04-20"
        assert (draft.venue.city, draft.venue.state) == ("Houston", "TX")

    @pytest.mark.asyncio
    async def test_ticketmaster_string_address(
        self,
        mock_config: dict[str, Any],
        settings_with_keys: Settings,
        ticketmaster_event: dict[str, Any],
    ) -> None:
        ticketmaster_event["_embedded"]["venues"][0]["address"] = "1 Main St"
        service = _service(settings_with_keys, mock_config, lambda request: json_response(ticketmaster_event))
        draft = await service.extract(TM_URL)

        assert draft.error == ""
        assert draft.source == "ticketmaster_lookup"
        assert draft.venue.name == "State Farm Stadium"
        assert draft.venue.address == ""

    @pytest.mark.asyncio
    async def test_unreadable_page_falls_back_to_slug(
        self, mock_config: dict[str, Any], settings_no_keys: Settings
    ) -> None:
        service = _service(
            settings_no_keys, mock_config, lambda request: httpx.Response(200, text=EVENT_PAGE_HTML)
        )
        with patch.object(MarkupParser, "_meta_tags", side_effect=RecursionError("too deep")):
            draft = await service.extract(GENERIC_URL)

        assert draft.error == ""
        assert draft.title == "Event Name"
        assert draft.date == "2026-04-09"
        assert draft.source == "slug"


# ======================================================================
# Request boundary
# ======================================================================


class TestRequestBoundary:
    @pytest.mark.asyncio
    async def test_malformed_url_gives_error_draft(
        self, mock_config: dict[str, Any], settings_no_keys: Settings
    ) -> None:
        service = _service(settings_no_keys, mock_config, unreachable)
        draft = await service.extract("not a url")

        assert draft.error != ""
        assert draft.source == "input_error"
        assert draft.description == "Event imported from not a url"
        assert draft.title == "Imported Event"
        assert len(draft.pricing) >= 1

    @pytest.mark.asyncio
    async def test_idempotent(
        self, mock_config: dict[str, Any], settings_no_keys: Settings
    ) -> None:
        service = _service(settings_no_keys, mock_config, unreachable)
        first = await service.extract(TM_URL)
        second = await service.extract(TM_URL)
        assert first == second

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_contained(
        self, mock_config: dict[str, Any], settings_no_keys: Settings
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise RuntimeError("transport bug")

        service = _service(settings_no_keys, mock_config, handler)
        draft = await service.extract("https://www.example.com/some-show-austin-tx")

        assert draft.error == "Extraction failed: transport bug"
        assert draft.source == "input_error"
