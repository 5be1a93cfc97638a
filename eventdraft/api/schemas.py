"""Pydantic request/response schemas for the eventdraft API.

The extraction endpoint returns :class:`~eventdraft.models.EventDraft`
directly (camelCase JSON); the models here cover the request body, the
capability descriptor, health and error bodies.

# ─── CONVENTIONS ───────────────────────────────────────────────────────
#
# Request schemas end with "Request", response schemas with "Response".
# ``url`` is untyped at the schema level: a missing or blank URL is
# answered with 400 by the route, and any other unusable value (a number,
# an object) becomes a 200 error draft instead of a 422 validation error.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ScrapeEventRequest(BaseModel):
    """Body of ``POST /api/v1/scrape-event``."""

    url: Any = Field(default=None, description="Marketplace event page URL.")

    def is_blank(self) -> bool:
        return self.url is None or (isinstance(self.url, str) and not self.url.strip())


class CapabilityResponse(BaseModel):
    """Static description of the extraction endpoint."""

    message: str
    method: str
    usage: str
    supported: list[str]
    examples: list[str]
    configured_credentials: list[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    marketplaces: int


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
