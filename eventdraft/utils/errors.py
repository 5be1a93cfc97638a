"""Custom exception hierarchy for eventdraft.

All application exceptions inherit from :class:`EventDraftError`, which
carries an optional ``provider_name`` so error handlers can identify which
upstream source (e.g. "ticketmaster", "seatgeek", "http_page") caused the
failure.

The hierarchy is organized by the extraction pipeline's failure taxonomy:

    EventDraftError  (base -- catch-all for any eventdraft error)
    +-- InvalidEventURLError      (input: URL cannot be parsed / has no host)
    +-- UpstreamUnavailableError  (vendor API / page fetch failed, non-2xx, non-JSON)
    +-- StructuredDataError       (page markup or a vendor payload has an unreadable shape)
    +-- ExtractionError           (unexpected strategy chain / normalization failure)
    +-- ConfigurationError        (startup / missing config)

None of these are fatal to an extraction request: the strategy chain turns
upstream and parse errors into "no data" and the request boundary turns
input and extraction errors into an error-labelled draft.
"""


class EventDraftError(Exception):
    """Base exception for all eventdraft errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which upstream source triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[ticketmaster] HTTP 401``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Input errors
# ---------------------------------------------------------------------------

class InvalidEventURLError(EventDraftError):
    """Raised when the submitted URL cannot be parsed as an absolute http(s) URL."""

    def __init__(
        self,
        message: str = "Invalid event URL",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Upstream / parsing errors
# ---------------------------------------------------------------------------

class UpstreamUnavailableError(EventDraftError):
    """Raised when a vendor API or page fetch is unreachable or answers badly.

    The strategy chain catches this and falls through to the next step.
    """

    def __init__(
        self,
        message: str = "Upstream source is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class StructuredDataError(EventDraftError):
    """Raised when page markup or a vendor JSON payload has a shape the mapper cannot read.

    The strategy chain treats it as "no data" from that step.
    """

    def __init__(
        self,
        message: str = "Structured data could not be parsed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Pipeline / configuration errors
# ---------------------------------------------------------------------------

class ExtractionError(EventDraftError):
    """Raised when the strategy chain or normalizer fails unexpectedly."""

    def __init__(
        self,
        message: str = "Event extraction failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(EventDraftError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
