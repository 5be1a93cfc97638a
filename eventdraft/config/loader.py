"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ───────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. Built-in defaults   : _DEFAULTS below, so a missing file still works
#   2. config/config.yaml  : Static defaults checked into the repo
#   3. .env file / env vars: Credentials and network bounds via Settings
#
# _deep_merge does recursive dict merging:
#   base = {"extraction": {"default_city": "Dallas"}}
#   overrides = {"extraction": {"default_state": "TX"}}
#   result = {"extraction": {"default_city": "Dallas", "default_state": "TX"}}
# ──────────────────────────────────────────────────────────────────────
"""

import copy
from pathlib import Path

import yaml

from eventdraft.config.settings import Settings

_DEFAULTS: dict = {
    "extraction": {
        "fallback_title": "Imported Event",
        "default_city": "Dallas",
        "default_state": "TX",
        "placeholder_date_offset_days": 30,
        "search_match_threshold": 0.6,
        "max_images": 5,
        "fallback_images": True,
    },
    "marketplaces": {
        "ticketmaster": {
            "api_base": "https://app.ticketmaster.com/discovery/v2",
        },
        "seatgeek": {
            "api_base": "https://api.seatgeek.com/2",
        },
        "eventbrite": {
            "embed_base": "https://www.eventbrite.com/api/v3/destination/events/",
        },
    },
}


def load_config(path: str | None = None, settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Environment variables (via Settings) override YAML values where keys overlap.

    Args:
        path: Path to the YAML configuration file.  Defaults to
            ``settings.config_path``.
        settings: Settings instance; a fresh one is built when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    settings = settings or Settings()
    config = copy.deepcopy(_DEFAULTS)

    config_path = Path(path or settings.config_path)
    if config_path.exists():
        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}
        _deep_merge(config, yaml_config)

    env_overrides = {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
        },
        "network": {
            "fetch_timeout_seconds": settings.fetch_timeout_seconds,
            "step_timeout_seconds": settings.step_timeout_seconds,
            "request_budget_seconds": settings.request_budget_seconds,
        },
        "credentials": {
            "configured": settings.get_configured_credentials(),
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(config, env_overrides)
    return config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
