"""FastAPI routes for the eventdraft extraction API.

Service dependencies are resolved from ``app.state`` via FastAPI's
``Depends`` using the ``Annotated`` pattern.

# ─── API ROUTE MAP ─────────────────────────────────────────────────────
#
# Endpoint                   Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api/v1/scrape-event       POST    URL -> EventDraft (always 200 once a
#                                    URL is supplied; failures set `error`)
# /api/v1/scrape-event       GET     Capability descriptor
# /api/v1/health             GET     Health check
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import json
from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request

from eventdraft import __version__
from eventdraft.api.schemas import (
    CapabilityResponse,
    ErrorResponse,
    HealthResponse,
    ScrapeEventRequest,
)
from eventdraft.models.event_draft import EventDraft
from eventdraft.services.extraction_service import EventExtractionService
from eventdraft.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api/v1")

EXAMPLE_URLS = [
    "https://www.ticketmaster.com/lady-gaga-the-mayhem-ball-glendale-arizona-02-14-2026/event/190063247D573A45",
    "https://events.sulekha.com/abhijeet-bhattacharya-retro-90-s-live-in-dallas_event-in_euless-tx_396749",
    "https://www.fandango.com/one-battle-after-another-2025-241516/movie-overview",
]


def _get_extraction_service(request: Request) -> EventExtractionService:
    """Return the extraction service from application state."""
    return request.app.state.extraction_service


def _get_config(request: Request) -> dict[str, Any]:
    return request.app.state.config


ServiceDep = Annotated[EventExtractionService, Depends(_get_extraction_service)]
ConfigDep = Annotated[dict[str, Any], Depends(_get_config)]


@router.post(
    "/scrape-event",
    response_model=EventDraft,
    responses={400: {"model": ErrorResponse}},
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": ScrapeEventRequest.model_json_schema()}},
        }
    },
)
async def scrape_event(request: Request, service: ServiceDep) -> EventDraft:
    """Extract an event draft from a marketplace URL.

    The body is decoded here rather than by FastAPI so that an unreadable
    body or a non-string ``url`` still answers 200 with an error draft.
    Only a missing or blank ``url`` is a malformed request (400).
    """
    raw = await request.body()
    try:
        payload = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        _logger.warning("scrape_request_unreadable", error=str(exc))
        return service.error_draft(raw.decode("utf-8", errors="replace"), "Invalid request body")

    body = ScrapeEventRequest.model_validate(payload if isinstance(payload, dict) else {})
    if body.is_blank():
        raise HTTPException(status_code=400, detail="URL is required")
    if not isinstance(body.url, str):
        _logger.warning("scrape_request_bad_url", url_type=type(body.url).__name__)
        return service.error_draft(body.url, "URL must be a string")
    return await service.extract(body.url)


@router.get("/scrape-event", response_model=CapabilityResponse)
async def describe_scrape_event(service: ServiceDep, config: ConfigDep) -> CapabilityResponse:
    """Describe the extraction endpoint and the marketplaces it knows."""
    supported = [
        domain
        for entry in service.registry.entries
        for domain in entry.domains
    ]
    return CapabilityResponse(
        message="Event scraping API",
        method="POST",
        usage='Send POST request with { "url": "event page URL" }',
        supported=supported,
        examples=EXAMPLE_URLS,
        configured_credentials=config.get("credentials", {}).get("configured", []),
    )


@router.get("/health", response_model=HealthResponse)
async def health(service: ServiceDep) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        marketplaces=len(service.registry.entries),
    )
