"""Public interface definitions for the extraction pipeline's collaborators.

Every outbound channel (vendor APIs, page fetches, markup parsing) and every
strategy step is reached through the abstract base classes defined here.
Concrete adapters live in ``eventdraft/providers/`` and
``eventdraft/pipeline/steps.py`` and are wired together in
``eventdraft/main.py``, so tests can inject fakes without real network calls.

CONCRETE PROVIDER MAP:
    Interface                  ->  Concrete implementations
    ─────────────────────────────────────────────────────────────────────
    IMarketplaceProvider       ->  TicketmasterProvider, SeatGeekProvider,
                                   EventbriteProvider
    IPageProvider              ->  HttpPageProvider
    IStructuredDataParser      ->  MarkupParser
    IExtractionStep            ->  LookupStep, SearchStep, EmbedStep,
                                   HtmlExtractionStep, SlugHeuristicStep
"""

from eventdraft.interfaces.extraction_step import ExtractionContext, IExtractionStep
from eventdraft.interfaces.marketplace_provider import IMarketplaceProvider
from eventdraft.interfaces.page_provider import IPageProvider
from eventdraft.interfaces.structured_data_parser import IStructuredDataParser, PageHints

__all__ = [
    "ExtractionContext",
    "IExtractionStep",
    "IMarketplaceProvider",
    "IPageProvider",
    "IStructuredDataParser",
    "PageHints",
]
