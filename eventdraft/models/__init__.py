"""Data models for the extraction pipeline.

- :mod:`eventdraft.models.partial` -- ``PartialEvent`` and the
  ``merge_if_absent`` reducer used by the strategy chain.
- :mod:`eventdraft.models.event_draft` -- the always-complete
  ``EventDraft`` output and its nested venue/pricing/layout models.
- :mod:`eventdraft.models.slug` -- ``SlugParts`` from the slug tokenizer.
"""

from eventdraft.models.event_draft import (
    DraftVenue,
    EventDraft,
    EventType,
    LayoutConfig,
    LayoutLevel,
    PricingTier,
)
from eventdraft.models.partial import MERGEABLE_FIELDS, PartialEvent, merge_if_absent
from eventdraft.models.slug import SlugParts

__all__ = [
    "DraftVenue",
    "EventDraft",
    "EventType",
    "LayoutConfig",
    "LayoutLevel",
    "MERGEABLE_FIELDS",
    "PartialEvent",
    "PricingTier",
    "SlugParts",
    "merge_if_absent",
]
