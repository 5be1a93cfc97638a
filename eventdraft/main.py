"""eventdraft FastAPI application entry point.

Builds the shared httpx client, the marketplace registry, the normalizer
and the :class:`EventExtractionService`, and exposes them on ``app.state``
for the routes.

# ─── STARTUP SEQUENCE ──────────────────────────────────────────────────
#
#   1. Module load: Settings + YAML config, structlog configured
#   2. create_app(): FastAPI instance, middleware, routes
#   3. Lifespan startup: _build_all() -> components on app.state
#   4. Lifespan shutdown: shared httpx client closed
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from collections.abc import Callable
from contextlib import asynccontextmanager
from datetime import date
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from eventdraft import __version__
from eventdraft.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from eventdraft.api.routes import router as api_router
from eventdraft.config.loader import load_config
from eventdraft.config.settings import Settings
from eventdraft.pipeline.marketplaces import build_registry
from eventdraft.providers.page.http_page_provider import BROWSER_HEADERS
from eventdraft.services.extraction_service import EventExtractionService
from eventdraft.services.normalizer import EventDraftNormalizer
from eventdraft.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config(settings=settings)

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Component wiring
# ---------------------------------------------------------------------------


def build_http_client(app_settings: Settings) -> httpx.AsyncClient:
    """Shared client: pooled connections, bounded timeout, browser headers."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(app_settings.fetch_timeout_seconds),
        headers=BROWSER_HEADERS,
        follow_redirects=True,
    )


def build_service(
    app_settings: Settings,
    app_config: dict[str, Any],
    http_client: httpx.AsyncClient,
    clock: Callable[[], date] | None = None,
) -> EventExtractionService:
    """Assemble an :class:`EventExtractionService` around *http_client*."""
    registry = build_registry(app_config, app_settings, http_client)
    normalizer = EventDraftNormalizer(app_config, clock=clock)
    return EventExtractionService(registry, normalizer)


def _build_all(app_settings: Settings, app_config: dict[str, Any]) -> dict[str, Any]:
    http_client = build_http_client(app_settings)
    service = build_service(app_settings, app_config, http_client)
    return {
        "http_client": http_client,
        "extraction_service": service,
        "config": app_config,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Build components on startup; close the shared client on shutdown."""
    components = _build_all(settings, config)
    for key, value in components.items():
        setattr(application.state, key, value)

    _logger.info(
        "app_startup",
        version=__version__,
        environment=settings.app_env,
        marketplaces=len(components["extraction_service"].registry.entries),
        credentials=settings.get_configured_credentials(),
    )

    yield

    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="eventdraft API",
        version=__version__,
        description=(
            "Turn a ticket-marketplace event URL into a complete, editable "
            "event draft: title, date, venue, pricing tiers, images, category."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application)

    application.include_router(api_router)
    return application


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "eventdraft.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
