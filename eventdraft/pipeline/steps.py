"""Concrete strategy steps.

Each step reads one channel and returns a :class:`PartialEvent` or ``None``:

- :class:`LookupStep` -- vendor discovery API by the id in the URL.
- :class:`SearchStep` -- vendor keyword search on the slug-derived phrase,
  best hit picked by fuzzy name similarity.
- :class:`EmbedStep` -- vendor public embed endpoint by id (no credential).
- :class:`HtmlExtractionStep` -- rendered page markup.
- :class:`SlugHeuristicStep` -- the URL slug alone; never touches the network
  and always answers, so it terminates every chain.
"""

from __future__ import annotations

from eventdraft.interfaces.extraction_step import ExtractionContext, IExtractionStep
from eventdraft.interfaces.marketplace_provider import IMarketplaceProvider
from eventdraft.models.partial import PartialEvent
from eventdraft.services.html_content_extractor import HtmlContentExtractor
from eventdraft.utils.logging import get_logger
from eventdraft.utils.text_normalizer import fuzzy_match

logger = get_logger(__name__)


class LookupStep(IExtractionStep):
    """Fetch the event by the vendor id embedded in the URL path."""

    kind = "lookup"

    def __init__(self, provider: IMarketplaceProvider) -> None:
        self._provider = provider

    @property
    def name(self) -> str:
        return f"{self._provider.get_provider_name()}_{self.kind}"

    def is_available(self) -> bool:
        return self._provider.is_available()

    async def attempt(self, context: ExtractionContext) -> PartialEvent | None:
        event_id = self._provider.extract_event_id(context.path)
        if not event_id:
            logger.debug("no_event_id", step=self.name, path=context.path)
            return None
        return await self._provider.lookup_event(event_id)


class EmbedStep(LookupStep):
    """Same id lookup, against a public embed endpoint."""

    kind = "embed"


class SearchStep(IExtractionStep):
    """Keyword search with the slug name; date and city narrow the query."""

    def __init__(self, provider: IMarketplaceProvider, match_threshold: float = 0.6) -> None:
        self._provider = provider
        self._match_threshold = match_threshold

    @property
    def name(self) -> str:
        return f"{self._provider.get_provider_name()}_search"

    def is_available(self) -> bool:
        return self._provider.is_available()

    async def attempt(self, context: ExtractionContext) -> PartialEvent | None:
        phrase = context.slug.search_phrase
        if not phrase:
            return None

        results = await self._provider.search_events(
            phrase, on_date=context.slug.date, city=context.slug.city
        )
        if context.slug.date:
            # Vendors may ignore the date filter; same-day hits come first.
            same_day = [r for r in results if r[1].date == context.slug.date]
            results = same_day or results

        titles = [title for title, _ in results]
        match = fuzzy_match(phrase, titles, threshold=self._match_threshold)
        if match is None:
            logger.debug("search_no_match", step=self.name, phrase=phrase, results=len(results))
            return None

        best_title, score = match
        logger.info("search_matched", step=self.name, title=best_title, score=round(score, 2))
        return results[titles.index(best_title)][1]


class HtmlExtractionStep(IExtractionStep):
    """Scrape the submitted page itself."""

    def __init__(self, extractor: HtmlContentExtractor) -> None:
        self._extractor = extractor

    @property
    def name(self) -> str:
        return "html"

    async def attempt(self, context: ExtractionContext) -> PartialEvent | None:
        partial = await self._extractor.extract(context.url)
        return None if partial.is_empty() else partial


class SlugHeuristicStep(IExtractionStep):
    """Title, date and location straight from the slug decomposition.

    Parameters
    ----------
    event_type:
        Forced event type (``"movie"`` for a movie-ticketing site).
    title_suffix:
        Appended to the slug-derived name, e.g. ``" - Movie Screening"``.
    """

    requires_network = False

    def __init__(self, event_type: str = "", title_suffix: str = "") -> None:
        self._event_type = event_type
        self._title_suffix = title_suffix

    @property
    def name(self) -> str:
        return "slug"

    async def attempt(self, context: ExtractionContext) -> PartialEvent | None:
        slug = context.slug
        return PartialEvent(
            title=f"{slug.name}{self._title_suffix}" if slug.name else "",
            date=slug.date,
            venue_city=slug.city,
            venue_state=slug.state,
            event_type=self._event_type,
        )
