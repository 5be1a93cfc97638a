"""Shared pytest fixtures for the eventdraft test suite."""

from __future__ import annotations

import copy
import json
from collections.abc import Callable
from datetime import date
from typing import Any

import httpx
import pytest

from eventdraft.config.loader import _DEFAULTS
from eventdraft.config.settings import Settings
from eventdraft.services.normalizer import EventDraftNormalizer

FIXED_TODAY = date(2026, 3, 1)


def fixed_clock() -> date:
    return FIXED_TODAY


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Built-in defaults plus tight network bounds for tests."""
    config = copy.deepcopy(_DEFAULTS)
    config["network"] = {
        "fetch_timeout_seconds": 2.0,
        "step_timeout_seconds": 2.0,
        "request_budget_seconds": 5.0,
    }
    return config


@pytest.fixture
def settings_no_keys() -> Settings:
    return Settings(_env_file=None, ticketmaster_api_key="", seatgeek_client_id="")


@pytest.fixture
def settings_with_keys() -> Settings:
    return Settings(_env_file=None, ticketmaster_api_key="tm-key", seatgeek_client_id="sg-id")


@pytest.fixture
def normalizer(mock_config: dict[str, Any]) -> EventDraftNormalizer:
    return EventDraftNormalizer(mock_config, clock=fixed_clock)


# ---------------------------------------------------------------------------
# Canned upstream payloads
# ---------------------------------------------------------------------------


@pytest.fixture
def ticketmaster_event() -> dict[str, Any]:
    """Discovery API ``/events/{id}.json`` body."""
    return {
        "id": "190063247D573A45",
        "name": "Lady Gaga: The MAYHEM Ball",
        "dates": {"start": {"localDate": "2026-02-14", "localTime": "19:30:00"}},
        "priceRanges": [{"type": "standard", "currency": "USD", "min": 89.5, "max": 450.0}],
        "images": [
            {"url": "https://img.tm/small.jpg", "width": 205, "height": 115},
            {"url": "https://img.tm/large.jpg", "width": 2048, "height": 1152},
            {"url": "https://img.tm/medium.jpg", "width": 640, "height": 360},
        ],
        "classifications": [
            {"primary": True, "segment": {"name": "Music"}, "genre": {"name": "Pop"}},
        ],
        "_embedded": {
            "venues": [
                {
                    "name": "State Farm Stadium",
                    "address": {"line1": "1 Cardinals Dr."},
                    "city": {"name": "Glendale"},
                    "state": {"name": "Arizona", "stateCode": "AZ"},
                }
            ],
            "attractions": [{"name": "Lady Gaga"}],
        },
    }


EVENT_PAGE_HTML = """
<html>
<head>
  <title>Laugh Riot Live | TicketNetwork</title>
  <meta property="og:title" content="Laugh Riot Live Tickets in Austin, TX at Paramount Theatre" />
  <meta property="og:image" content="https://cdn.example.com/og.jpg" />
  <meta name="twitter:image" content="https://cdn.example.com/og.jpg" />
  <script type="application/ld+json">
  {
    "@context": "https://schema.org",
    "@graph": [
      {"@type": "WebSite", "name": "Example"},
      {
        "@type": "ComedyEvent",
        "name": "Laugh Riot Live",
        "startDate": "2026-05-02T20:00:00-05:00",
        "location": {
          "@type": "Place",
          "name": "Paramount Theatre",
          "address": {
            "@type": "PostalAddress",
            "streetAddress": "713 Congress Ave",
            "addressLocality": "Austin",
            "addressRegion": "Texas"
          }
        },
        "image": ["https://cdn.example.com/ld.jpg"],
        "offers": [{"@type": "Offer", "lowPrice": "35.00", "highPrice": "95.00"}],
        "performer": [{"@type": "Person", "name": "Jo Koy"}]
      }
    ]
  }
  </script>
</head>
<body><h1>Laugh Riot Live</h1></body>
</html>
"""


@pytest.fixture
def event_page_html() -> str:
    return EVENT_PAGE_HTML


# ---------------------------------------------------------------------------
# httpx.MockTransport helpers
# ---------------------------------------------------------------------------

Handler = Callable[[httpx.Request], httpx.Response]


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode(),
        headers={"Content-Type": "application/json"},
    )


def unreachable(request: httpx.Request) -> httpx.Response:
    """Transport handler for a machine with no network at all."""
    raise httpx.ConnectError("network unreachable", request=request)


@pytest.fixture
def make_client() -> Callable[[Handler], httpx.AsyncClient]:
    def factory(handler: Handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory
