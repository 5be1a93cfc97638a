"""Shared JSON transport for marketplace providers.

Vendor APIs differ in payload shape but fail the same ways: transport
errors, timeouts, non-2xx statuses and bodies that are not JSON.  All four
become :class:`UpstreamUnavailableError` here so the strategy chain has a
single error to treat as "no data".  A 2xx JSON body whose shape the
mapper does not expect becomes :class:`StructuredDataError`, which the
chain treats the same way.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from eventdraft.interfaces.marketplace_provider import IMarketplaceProvider
from eventdraft.utils.errors import StructuredDataError, UpstreamUnavailableError
from eventdraft.utils.logging import get_logger

_DEFAULT_TIMEOUT = 8.0
_JSON_HEADERS = {"Accept": "application/json"}

# What a payload mapper raises when a field has the wrong JSON type.
MAPPING_ERRORS = (TypeError, AttributeError, KeyError, IndexError, ValueError, RecursionError)

_T = TypeVar("_T")


def as_dict(value: Any) -> dict[str, Any]:
    """*value* when it is a JSON object, otherwise ``{}``."""
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> list[Any]:
    """*value* when it is a JSON array, otherwise ``[]``."""
    return value if isinstance(value, list) else []


class JsonMarketplaceProvider(IMarketplaceProvider):
    """Base class holding the injected client and the JSON GET helper."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._client = http_client
        self._timeout = timeout
        self._logger = get_logger(type(self).__module__)

    async def _get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        allow_not_found: bool = False,
    ) -> dict[str, Any] | None:
        """GET *url* and decode a JSON object body.

        Returns ``None`` for a 404 when *allow_not_found* is set.
        """
        try:
            response = await self._client.get(
                url,
                params=params,
                headers=_JSON_HEADERS,
                timeout=self._timeout,
            )
        except httpx.TimeoutException as exc:
            raise UpstreamUnavailableError(
                message=f"Timeout calling {url}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(
                message=f"HTTP error calling {url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if allow_not_found and response.status_code == 404:
            return None
        if response.is_error:
            raise UpstreamUnavailableError(
                message=f"HTTP {response.status_code} from {url}",
                provider_name=self.get_provider_name(),
            )

        try:
            payload = response.json()
        except (ValueError, RecursionError) as exc:
            raise UpstreamUnavailableError(
                message=f"Non-JSON response from {url}",
                provider_name=self.get_provider_name(),
            ) from exc
        if not isinstance(payload, dict):
            raise UpstreamUnavailableError(
                message=f"Unexpected JSON payload from {url}",
                provider_name=self.get_provider_name(),
            )
        return payload

    def _map_payload(self, mapper: Callable[[dict[str, Any]], _T], payload: dict[str, Any]) -> _T:
        """Run *mapper* over *payload*, reporting shape surprises as parse errors."""
        try:
            return mapper(payload)
        except MAPPING_ERRORS as exc:
            raise StructuredDataError(
                message=f"Unexpected payload shape: {type(exc).__name__}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
