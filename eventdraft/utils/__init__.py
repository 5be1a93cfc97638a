"""Utility modules for eventdraft.

- **confidence** -- step-kind scores, weighted averaging and level mapping
  behind a draft's ``confidence`` tag.
- **errors** -- Domain exception hierarchy rooted at EventDraftError.
- **logging** -- structlog setup: credential redaction, per-extraction
  context binding, console or JSON rendering.
- **text_normalizer** -- Entity decoding, slug title casing, ISO date
  splitting, price parsing and rapidfuzz name matching.
"""

from eventdraft.utils.confidence import (
    ConfidenceLevel,
    calculate_confidence,
    confidence_to_level,
    draft_confidence,
    step_confidence,
)
from eventdraft.utils.errors import (
    ConfigurationError,
    EventDraftError,
    ExtractionError,
    InvalidEventURLError,
    StructuredDataError,
    UpstreamUnavailableError,
)
from eventdraft.utils.logging import (
    configure_logging,
    extraction_context,
    get_logger,
    redact_credentials,
)
from eventdraft.utils.text_normalizer import (
    clean_event_title,
    clean_text,
    fuzzy_match,
    split_iso_datetime,
    title_case,
)

__all__ = [
    "ConfidenceLevel",
    "ConfigurationError",
    "EventDraftError",
    "ExtractionError",
    "InvalidEventURLError",
    "StructuredDataError",
    "UpstreamUnavailableError",
    "calculate_confidence",
    "clean_event_title",
    "clean_text",
    "configure_logging",
    "confidence_to_level",
    "draft_confidence",
    "extraction_context",
    "fuzzy_match",
    "get_logger",
    "redact_credentials",
    "split_iso_datetime",
    "step_confidence",
    "title_case",
]
