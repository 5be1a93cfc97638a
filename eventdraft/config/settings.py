"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ─────────────────────────────────────────────────
#
# pydantic-settings reads configuration from TWO sources (in priority order):
#
#   1. **Environment variables**: e.g., TICKETMASTER_API_KEY=abc123
#   2. **.env file**: key=value lines in the project root .env file
#
# Field ``ticketmaster_api_key`` maps to env var ``TICKETMASTER_API_KEY``.
# Defaults apply when neither source sets a value.
#
# Vendor credentials are optional: an empty string means "not configured"
# and the strategy steps that need it are skipped, never retried.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """eventdraft application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Vendor credentials ===
    ticketmaster_api_key: str = ""
    seatgeek_client_id: str = ""

    # === Network bounds ===
    # httpx timeout for a single outbound call.
    fetch_timeout_seconds: float = 8.0
    # Upper bound for one strategy step (may issue more than one call).
    step_timeout_seconds: float = 10.0
    # Upper bound for all network steps of one extraction request.
    request_budget_seconds: float = 25.0

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"
    config_path: str = "config/config.yaml"

    def get_configured_credentials(self) -> list[str]:
        """Return the vendor names whose credentials are configured."""
        configured: list[str] = []
        if self.ticketmaster_api_key:
            configured.append("ticketmaster")
        if self.seatgeek_client_id:
            configured.append("seatgeek")
        return configured
