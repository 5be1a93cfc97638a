"""Unit tests for the strategy steps and the chain executor."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from eventdraft.interfaces.extraction_step import ExtractionContext, IExtractionStep
from eventdraft.models.partial import PartialEvent
from eventdraft.models.slug import SlugParts
from eventdraft.pipeline.steps import (
    EmbedStep,
    HtmlExtractionStep,
    LookupStep,
    SearchStep,
    SlugHeuristicStep,
)
from eventdraft.pipeline.strategy_chain import StrategyChain
from eventdraft.utils.errors import ConfigurationError, UpstreamUnavailableError

SLUG = SlugParts(
    name="Lady Gaga the Mayhem Ball",
    date="2026-02-14",
    city="Glendale",
    state="AZ",
    tokens=("lady", "gaga", "the", "mayhem", "ball"),
)


def _context(slug: SlugParts = SLUG) -> ExtractionContext:
    return ExtractionContext(
        url="https://www.ticketmaster.com/lady-gaga/event/190063247D573A45",
        host="ticketmaster.com",
        marketplace="ticketmaster",
        path="/lady-gaga/event/190063247D573A45",
        slug=slug,
    )


class FakeStep(IExtractionStep):
    """Scripted step recording how often it ran."""

    def __init__(
        self,
        name: str,
        result: PartialEvent | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
        available: bool = True,
        network: bool = True,
    ) -> None:
        self._name = name
        self._result = result
        self._error = error
        self._delay = delay
        self._available = available
        self.requires_network = network
        self.calls = 0

    @property
    def name(self) -> str:
        return self._name

    def is_available(self) -> bool:
        return self._available

    async def attempt(self, context: ExtractionContext) -> PartialEvent | None:
        self.calls += 1
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        return self._result


def _provider(name: str = "ticketmaster", event_id: str = "190063247D573A45") -> MagicMock:
    provider = MagicMock()
    provider.get_provider_name.return_value = name
    provider.is_available.return_value = True
    provider.extract_event_id.return_value = event_id
    provider.lookup_event = AsyncMock(return_value=PartialEvent(title="From API"))
    provider.search_events = AsyncMock(return_value=[])
    return provider


# ======================================================================
# Steps
# ======================================================================


class TestLookupStep:
    def test_names(self) -> None:
        assert LookupStep(_provider()).name == "ticketmaster_lookup"
        assert EmbedStep(_provider("eventbrite")).name == "eventbrite_embed"

    @pytest.mark.asyncio
    async def test_looks_up_id_from_path(self) -> None:
        provider = _provider()
        result = await LookupStep(provider).attempt(_context())
        assert result == PartialEvent(title="From API")
        provider.extract_event_id.assert_called_once_with("/lady-gaga/event/190063247D573A45")
        provider.lookup_event.assert_awaited_once_with("190063247D573A45")

    @pytest.mark.asyncio
    async def test_no_id_no_call(self) -> None:
        provider = _provider(event_id="")
        assert await LookupStep(provider).attempt(_context()) is None
        provider.lookup_event.assert_not_awaited()

    def test_availability_follows_provider(self) -> None:
        provider = _provider()
        provider.is_available.return_value = False
        assert not LookupStep(provider).is_available()


class TestSearchStep:
    @pytest.mark.asyncio
    async def test_prefers_same_day_match(self) -> None:
        provider = _provider()
        provider.search_events.return_value = [
            ("Lady Gaga: The MAYHEM Ball", PartialEvent(date="2026-02-15", venue_name="Other Arena")),
            ("Lady Gaga: The MAYHEM Ball", PartialEvent(date="2026-02-14", venue_name="State Farm Stadium")),
        ]
        result = await SearchStep(provider).attempt(_context())

        assert result is not None
        assert result.venue_name == "State Farm Stadium"
        provider.search_events.assert_awaited_once_with(
            "lady gaga the mayhem ball", on_date="2026-02-14", city="Glendale"
        )

    @pytest.mark.asyncio
    async def test_no_similar_title(self) -> None:
        provider = _provider()
        provider.search_events.return_value = [("Monster Jam", PartialEvent(venue_name="AT&T Stadium"))]
        assert await SearchStep(provider, match_threshold=0.8).attempt(_context()) is None

    @pytest.mark.asyncio
    async def test_empty_phrase_skips_search(self) -> None:
        provider = _provider()
        assert await SearchStep(provider).attempt(_context(SlugParts())) is None
        provider.search_events.assert_not_awaited()

    def test_name(self) -> None:
        assert SearchStep(_provider("seatgeek")).name == "seatgeek_search"


class TestHtmlExtractionStep:
    @pytest.mark.asyncio
    async def test_empty_page_is_no_data(self) -> None:
        extractor = MagicMock()
        extractor.extract = AsyncMock(return_value=PartialEvent())
        assert await HtmlExtractionStep(extractor).attempt(_context()) is None

    @pytest.mark.asyncio
    async def test_passes_page_data(self) -> None:
        extractor = MagicMock()
        extractor.extract = AsyncMock(return_value=PartialEvent(venue_name="Paramount Theatre"))
        result = await HtmlExtractionStep(extractor).attempt(_context())
        assert result is not None
        assert result.venue_name == "Paramount Theatre"
        extractor.extract.assert_awaited_once_with(_context().url)


class TestSlugHeuristicStep:
    @pytest.mark.asyncio
    async def test_reads_slug(self) -> None:
        step = SlugHeuristicStep()
        result = await step.attempt(_context())
        assert result is not None
        assert result.title == "Lady Gaga the Mayhem Ball"
        assert (result.date, result.venue_city, result.venue_state) == ("2026-02-14", "Glendale", "AZ")
        assert not step.requires_network

    @pytest.mark.asyncio
    async def test_forced_type_and_suffix(self) -> None:
        step = SlugHeuristicStep(event_type="movie", title_suffix=" - Movie Screening")
        result = await step.attempt(_context(SlugParts(name="One Battle After Another")))
        assert result is not None
        assert result.title == "One Battle After Another - Movie Screening"
        assert result.event_type == "movie"

    @pytest.mark.asyncio
    async def test_no_name_no_suffix(self) -> None:
        step = SlugHeuristicStep(title_suffix=" - Movie Screening")
        result = await step.attempt(_context(SlugParts()))
        assert result is not None
        assert result.title == ""


# ======================================================================
# StrategyChain
# ======================================================================


def _slug_step() -> FakeStep:
    return FakeStep("slug", PartialEvent(title="Slug Title", venue_city="Dallas"), network=False)


class TestStrategyChainConstruction:
    def test_requires_steps(self) -> None:
        with pytest.raises(ConfigurationError):
            StrategyChain("empty", [])

    def test_requires_offline_terminal_step(self) -> None:
        with pytest.raises(ConfigurationError):
            StrategyChain("bad", [_slug_step(), FakeStep("html")])

    def test_step_names(self) -> None:
        chain = StrategyChain("x", [FakeStep("ticketmaster_lookup"), FakeStep("html"), _slug_step()])
        assert chain.step_names == ["ticketmaster_lookup", "html", "slug"]
        assert chain.marketplace == "x"


class TestStrategyChainRun:
    @pytest.mark.asyncio
    async def test_earlier_steps_win(self) -> None:
        chain = StrategyChain("x", [
            FakeStep("ticketmaster_search", PartialEvent(title="API Title", date="2026-02-14")),
            FakeStep("html", PartialEvent(title="Page Title", description="From page")),
            _slug_step(),
        ])
        merged = await chain.run(_context())

        assert merged.title == "API Title"
        assert merged.description == "From page"
        assert merged.venue_city == "Dallas"
        assert merged.provenance == {
            "title": "ticketmaster_search",
            "date": "ticketmaster_search",
            "description": "html",
            "venue_city": "slug",
        }

    @pytest.mark.asyncio
    async def test_short_circuits_after_venue_name(self) -> None:
        lookup = FakeStep("ticketmaster_lookup", PartialEvent(title="API", venue_name="State Farm Stadium"))
        html = FakeStep("html", PartialEvent(description="never read"))
        slug = _slug_step()
        merged = await StrategyChain("x", [lookup, html, slug]).run(_context())

        assert html.calls == 0
        assert slug.calls == 1
        assert merged.description == ""
        assert merged.venue_city == "Dallas"

    @pytest.mark.asyncio
    async def test_failures_fall_through(self) -> None:
        failing = FakeStep("ticketmaster_lookup", error=UpstreamUnavailableError("HTTP 503"))
        html = FakeStep("html", PartialEvent(venue_name="Paramount Theatre"))
        merged = await StrategyChain("x", [failing, html, _slug_step()]).run(_context())

        assert failing.calls == 1
        assert merged.venue_name == "Paramount Theatre"
        assert merged.provenance["venue_name"] == "html"

    @pytest.mark.asyncio
    async def test_unavailable_steps_skipped(self) -> None:
        lookup = FakeStep("ticketmaster_lookup", PartialEvent(title="API"), available=False)
        merged = await StrategyChain("x", [lookup, _slug_step()]).run(_context())
        assert lookup.calls == 0
        assert merged.title == "Slug Title"

    @pytest.mark.asyncio
    async def test_step_timeout(self) -> None:
        slow = FakeStep("html", PartialEvent(venue_name="Too Late"), delay=1.0)
        chain = StrategyChain("x", [slow, _slug_step()], step_timeout=0.05)
        merged = await chain.run(_context())

        assert slow.calls == 1
        assert merged.venue_name == ""
        assert merged.title == "Slug Title"

    @pytest.mark.asyncio
    async def test_budget_exhausted_skips_network(self) -> None:
        html = FakeStep("html", PartialEvent(venue_name="Arena"))
        slug = _slug_step()
        merged = await StrategyChain("x", [html, slug], request_budget=0.0).run(_context())

        assert html.calls == 0
        assert slug.calls == 1
        assert merged.title == "Slug Title"

    @pytest.mark.asyncio
    async def test_empty_results_leave_no_provenance(self) -> None:
        chain = StrategyChain("x", [
            FakeStep("html", PartialEvent()),
            FakeStep("slug", PartialEvent(), network=False),
        ])
        merged = await chain.run(_context())
        assert merged.is_empty()
        assert merged.provenance == {}
