"""Request boundary for one URL -> EventDraft extraction.

:class:`EventExtractionService` validates the URL, resolves its marketplace,
runs the strategy chain and normalizes the result.  Anything the chain or
normalizer raises is wrapped in :class:`ExtractionError` and turned into a
complete draft with ``error`` set, so the caller always gets a draft.
"""

from __future__ import annotations

import httpx

from eventdraft.config.reference_tables import DEFAULT_EVENT_TYPE
from eventdraft.models.event_draft import EventDraft
from eventdraft.models.partial import PartialEvent
from eventdraft.pipeline.dispatcher import SourceRegistry
from eventdraft.services.normalizer import EventDraftNormalizer
from eventdraft.utils.errors import ExtractionError, InvalidEventURLError
from eventdraft.utils.logging import extraction_context, get_logger

logger = get_logger(__name__)

ERROR_SOURCE = "input_error"
_MAX_LABEL_LENGTH = 200


def validate_event_url(raw: str) -> str:
    """Return *raw* stripped if it is an absolute http(s) URL with a host.

    Raises:
        InvalidEventURLError: for anything else.
    """
    candidate = raw.strip() if isinstance(raw, str) else ""
    if not candidate:
        raise InvalidEventURLError("URL is empty")
    try:
        parsed = httpx.URL(candidate)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise InvalidEventURLError(f"Invalid URL format: {exc}") from exc
    if parsed.scheme not in ("http", "https"):
        raise InvalidEventURLError(f"Unsupported URL scheme: {parsed.scheme or 'none'}")
    if not parsed.host:
        raise InvalidEventURLError("URL has no host")
    return candidate


class EventExtractionService:
    """Runs the extraction pipeline for one URL at a time."""

    def __init__(self, registry: SourceRegistry, normalizer: EventDraftNormalizer) -> None:
        self._registry = registry
        self._normalizer = normalizer

    @property
    def registry(self) -> SourceRegistry:
        return self._registry

    async def extract(self, url: str) -> EventDraft:
        """Produce a draft for *url*.  Never raises for bad input or upstreams."""
        with extraction_context(url):
            try:
                validated = validate_event_url(url)
            except InvalidEventURLError as exc:
                logger.warning("invalid_event_url", error=str(exc))
                return self.error_draft(url, str(exc))

            try:
                return await self._run_pipeline(validated)
            except ExtractionError as exc:
                logger.error(
                    "extraction_failed",
                    marketplace=exc.provider_name,
                    error=exc.message,
                    exc_info=exc.__cause__,
                )
                return self.error_draft(url, f"Extraction failed: {exc.message}")

    async def _run_pipeline(self, url: str) -> EventDraft:
        """Resolve, run the chain and normalize.

        Raises:
            ExtractionError: wrapping anything the chain or normalizer raised.
        """
        marketplace: str | None = None
        try:
            entry, context = self._registry.build_context(url)
            marketplace = entry.key
            partial = await entry.chain.run(context)
            draft = self._normalizer.normalize(partial, default_type=entry.default_type)
        except Exception as exc:
            raise ExtractionError(
                message=str(exc) or type(exc).__name__,
                provider_name=marketplace,
            ) from exc

        logger.info(
            "extraction_complete",
            marketplace=marketplace,
            source=draft.source,
            confidence=draft.confidence,
            event_type=draft.event_type.value,
        )
        return draft

    def error_draft(self, raw_input: object, message: str) -> EventDraft:
        """Placeholder draft labelled with the raw input and *message*."""
        label = str(raw_input).strip()[:_MAX_LABEL_LENGTH] if raw_input else ""
        partial = PartialEvent(
            description=f"Event imported from {label}" if label else "",
            provenance={"description": ERROR_SOURCE} if label else {},
        )
        return self._normalizer.normalize(
            partial,
            default_type=DEFAULT_EVENT_TYPE,
            source=ERROR_SOURCE,
            error=message,
        )
