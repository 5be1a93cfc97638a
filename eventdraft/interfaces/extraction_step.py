"""Abstract base class for one step of a per-source strategy chain.

A step turns the request context into a :class:`PartialEvent` (or ``None``
for "no data").  The chain executor owns ordering, timeouts and merging;
a step only knows how to read its own channel.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from eventdraft.models.partial import PartialEvent
from eventdraft.models.slug import SlugParts


@dataclass(frozen=True)
class ExtractionContext:
    """Everything a step may read about the request.

    Attributes
    ----------
    url:
        The validated absolute URL as submitted.
    host:
        Lower-cased hostname without a leading ``www.``.
    marketplace:
        Registry key the dispatcher resolved (``"ticketmaster"`` ...).
    path:
        URL path, percent-encoded as received.
    day_first:
        ``True`` when the host writes slug dates as DD-MM-YYYY.
    slug:
        Slug decomposition for this marketplace's URL scheme.
    """

    url: str
    host: str
    marketplace: str
    path: str = "/"
    day_first: bool = False
    slug: SlugParts = field(default_factory=SlugParts)


class IExtractionStep(ABC):
    """Contract for a strategy step."""

    #: Network steps are bounded by timeouts and skipped once a venue name is
    #: known; the terminal slug step sets this to ``False``.
    requires_network: bool = True

    @property
    @abstractmethod
    def name(self) -> str:
        """Step name recorded as provenance, e.g. ``"ticketmaster_lookup"``.

        The trailing ``_<kind>`` decides the step's confidence score.
        """

    @abstractmethod
    async def attempt(self, context: ExtractionContext) -> PartialEvent | None:
        """Try to read event data for *context*.

        May raise :class:`~eventdraft.utils.errors.EventDraftError`; the
        chain treats that as "no data".
        """

    def is_available(self) -> bool:
        """Return ``False`` to have the chain skip this step without trying."""
        return True
