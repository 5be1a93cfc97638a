"""Source dispatcher: a registry of hostname predicates -> strategy chains.

Adding a marketplace means registering one :class:`MarketplaceEntry`; the
dispatcher itself has no per-vendor branches.  Resolution fails closed:
unparseable URLs and unknown hosts route to the ``generic`` entry.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

import httpx

from eventdraft.config.reference_tables import DAY_FIRST_HOST_SUFFIXES, DEFAULT_EVENT_TYPE
from eventdraft.interfaces.extraction_step import ExtractionContext
from eventdraft.models.slug import SlugParts
from eventdraft.pipeline.strategy_chain import StrategyChain
from eventdraft.services.slug_tokenizer import read_generic_slug
from eventdraft.utils.logging import get_logger

logger = get_logger(__name__)

GENERIC = "generic"

HostPredicate = Callable[[str], bool]
SlugReader = Callable[[str, bool], SlugParts]


def parse_host(url: str) -> str:
    """Lower-cased hostname without ``www.``; ``""`` when unparseable."""
    try:
        host = httpx.URL(url).host
    except (httpx.InvalidURL, TypeError, ValueError):
        return ""
    host = host.lower().rstrip(".")
    return host[4:] if host.startswith("www.") else host


def host_in(*domains: str) -> HostPredicate:
    """Predicate matching the given domains and their subdomains."""

    def predicate(host: str) -> bool:
        return any(host == d or host.endswith(f".{d}") for d in domains)

    return predicate


def domain_family(brand: str) -> HostPredicate:
    """Predicate matching a brand under any TLD (``ticketmaster.co.uk``)."""
    pattern = re.compile(rf"(?:^|\.){re.escape(brand)}\.[a-z]{{2,}}(?:\.[a-z]{{2,}})?$")
    return lambda host: bool(pattern.search(host))


def any_of(*predicates: HostPredicate) -> HostPredicate:
    return lambda host: any(p(host) for p in predicates)


def is_day_first_host(host: str) -> bool:
    return host.endswith(DAY_FIRST_HOST_SUFFIXES)


@dataclass(frozen=True)
class MarketplaceEntry:
    """One registered marketplace.

    Attributes
    ----------
    key:
        Marketplace name (``"ticketmaster"``).
    matches:
        Hostname predicate.
    chain:
        The marketplace's strategy chain; chains hold no request state.
    slug_reader:
        Picks and decomposes the slug for this URL scheme.
    default_type:
        Event type when no vendor classification or keyword applies.
    domains:
        Display domains for the capability descriptor.
    """

    key: str
    matches: HostPredicate
    chain: StrategyChain
    slug_reader: SlugReader = read_generic_slug
    default_type: str = DEFAULT_EVENT_TYPE
    domains: tuple[str, ...] = ()


class SourceRegistry:
    """Ordered marketplace registry with a generic fallback."""

    def __init__(self, generic: MarketplaceEntry) -> None:
        self._generic = generic
        self._entries: list[MarketplaceEntry] = []

    def register(self, entry: MarketplaceEntry) -> None:
        """Add *entry*; earlier registrations win when predicates overlap."""
        if entry.key == GENERIC or any(e.key == entry.key for e in self._entries):
            raise ValueError(f"Marketplace {entry.key!r} is already registered")
        self._entries.append(entry)

    @property
    def entries(self) -> list[MarketplaceEntry]:
        return [*self._entries, self._generic]

    def classify_host(self, host: str) -> str:
        return self.resolve_host(host).key

    def resolve_host(self, host: str) -> MarketplaceEntry:
        if host:
            for entry in self._entries:
                if entry.matches(host):
                    return entry
        return self._generic

    def resolve(self, url: str) -> MarketplaceEntry:
        """Entry for *url*; never raises."""
        return self.resolve_host(parse_host(url))

    def build_context(self, url: str) -> tuple[MarketplaceEntry, ExtractionContext]:
        """Resolve *url* and decompose its slug with the entry's reader."""
        host = parse_host(url)
        entry = self.resolve_host(host)
        try:
            path = httpx.URL(url).raw_path.decode("ascii", errors="ignore").split("?")[0]
        except (httpx.InvalidURL, TypeError, ValueError):
            path = "/"
        day_first = is_day_first_host(host)
        context = ExtractionContext(
            url=url,
            host=host,
            marketplace=entry.key,
            path=path or "/",
            day_first=day_first,
            slug=entry.slug_reader(path, day_first),
        )
        logger.debug(
            "source_resolved",
            marketplace=entry.key,
            host=host,
            slug_name=context.slug.name,
            slug_date=context.slug.date,
        )
        return entry, context
