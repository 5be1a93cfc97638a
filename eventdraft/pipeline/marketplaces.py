"""Marketplace registrations: which steps run, in which order, per host.

Ordering policy for every chain: vendor discovery API, vendor keyword
search, vendor embed endpoint, HTML extraction, then slug heuristics.
Marketplaces without an API of their own borrow the Ticketmaster and
SeatGeek keyword searches before falling back to their page markup.
"""

from __future__ import annotations

from typing import Any

import httpx

from eventdraft.config.settings import Settings
from eventdraft.interfaces.extraction_step import IExtractionStep
from eventdraft.pipeline.dispatcher import (
    GENERIC,
    MarketplaceEntry,
    SourceRegistry,
    any_of,
    domain_family,
    host_in,
)
from eventdraft.pipeline.steps import (
    EmbedStep,
    HtmlExtractionStep,
    LookupStep,
    SearchStep,
    SlugHeuristicStep,
)
from eventdraft.pipeline.strategy_chain import StrategyChain
from eventdraft.providers.marketplace import (
    EventbriteProvider,
    SeatGeekProvider,
    TicketmasterProvider,
)
from eventdraft.providers.page import HttpPageProvider
from eventdraft.providers.structured_data import MarkupParser
from eventdraft.services.html_content_extractor import HtmlContentExtractor
from eventdraft.services.slug_tokenizer import (
    read_eventbrite_slug,
    read_fandango_slug,
    read_generic_slug,
    read_seatgeek_slug,
    read_sulekha_slug,
    read_ticketmaster_slug,
)


def build_registry(
    config: dict[str, Any],
    settings: Settings,
    http_client: httpx.AsyncClient,
) -> SourceRegistry:
    """Wire providers and steps into the full marketplace registry.

    Args:
        config: Resolved configuration from :func:`load_config`.
        settings: Credentials and network bounds.
        http_client: Shared client for every outbound call.
    """
    network = config.get("network", {})
    extraction = config.get("extraction", {})
    markets = config.get("marketplaces", {})
    fetch_timeout = float(network.get("fetch_timeout_seconds", settings.fetch_timeout_seconds))
    step_timeout = float(network.get("step_timeout_seconds", settings.step_timeout_seconds))
    budget = float(network.get("request_budget_seconds", settings.request_budget_seconds))
    threshold = float(extraction.get("search_match_threshold", 0.6))

    ticketmaster = TicketmasterProvider(
        http_client,
        api_key=settings.ticketmaster_api_key,
        api_base=markets.get("ticketmaster", {}).get("api_base", "https://app.ticketmaster.com/discovery/v2"),
        timeout=fetch_timeout,
    )
    seatgeek = SeatGeekProvider(
        http_client,
        client_id=settings.seatgeek_client_id,
        api_base=markets.get("seatgeek", {}).get("api_base", "https://api.seatgeek.com/2"),
        timeout=fetch_timeout,
    )
    eventbrite = EventbriteProvider(
        http_client,
        embed_base=markets.get("eventbrite", {}).get(
            "embed_base", "https://www.eventbrite.com/api/v3/destination/events/"
        ),
        timeout=fetch_timeout,
    )
    html = HtmlExtractionStep(
        HtmlContentExtractor(
            HttpPageProvider(http_client, timeout=fetch_timeout),
            MarkupParser(),
            max_images=int(extraction.get("max_images", 5)),
        )
    )

    def chain(key: str, *steps: IExtractionStep, slug: SlugHeuristicStep | None = None) -> StrategyChain:
        return StrategyChain(
            key,
            [*steps, slug or SlugHeuristicStep()],
            step_timeout=step_timeout,
            request_budget=budget,
        )

    registry = SourceRegistry(
        MarketplaceEntry(
            key=GENERIC,
            matches=lambda host: True,
            chain=chain(GENERIC, html),
            slug_reader=read_generic_slug,
        )
    )
    registry.register(MarketplaceEntry(
        key="ticketmaster",
        matches=any_of(domain_family("ticketmaster"), host_in("livenation.com")),
        chain=chain(
            "ticketmaster",
            LookupStep(ticketmaster),
            SearchStep(ticketmaster, threshold),
            html,
        ),
        slug_reader=read_ticketmaster_slug,
        domains=("ticketmaster.com", "livenation.com"),
    ))
    registry.register(MarketplaceEntry(
        key="seatgeek",
        matches=host_in("seatgeek.com"),
        chain=chain(
            "seatgeek",
            LookupStep(seatgeek),
            SearchStep(seatgeek, threshold),
            html,
        ),
        slug_reader=read_seatgeek_slug,
        domains=("seatgeek.com",),
    ))
    registry.register(MarketplaceEntry(
        key="eventbrite",
        matches=domain_family("eventbrite"),
        chain=chain("eventbrite", EmbedStep(eventbrite), html),
        slug_reader=read_eventbrite_slug,
        default_type="event",
        domains=("eventbrite.com",),
    ))
    registry.register(MarketplaceEntry(
        key="ticketnetwork",
        matches=host_in("ticketnetwork.com"),
        chain=chain("ticketnetwork", SearchStep(ticketmaster, threshold), html),
        domains=("ticketnetwork.com",),
    ))
    registry.register(MarketplaceEntry(
        key="sulekha",
        matches=host_in("sulekha.com"),
        chain=chain("sulekha", html),
        slug_reader=read_sulekha_slug,
        default_type="event",
        domains=("events.sulekha.com",),
    ))
    registry.register(MarketplaceEntry(
        key="fandango",
        matches=host_in("fandango.com"),
        chain=chain(
            "fandango",
            html,
            slug=SlugHeuristicStep(event_type="movie", title_suffix=" - Movie Screening"),
        ),
        slug_reader=read_fandango_slug,
        default_type="movie",
        domains=("fandango.com",),
    ))
    for key, domain in (("stubhub", "stubhub.com"), ("vividseats", "vividseats.com")):
        registry.register(MarketplaceEntry(
            key=key,
            matches=host_in(domain),
            chain=chain(
                key,
                SearchStep(ticketmaster, threshold),
                SearchStep(seatgeek, threshold),
                html,
            ),
            domains=(domain,),
        ))
    return registry
