"""API service configuration.

All runtime configuration lives in a single `Settings` object built from
environment variables (and an optional `.env` file in the working directory).
Credentials are never hardcoded: `BRAWL_API_KEY` must be supplied by the
environment or a secret store at process start.

The settings object is created once (`get_settings`) and handed to the
application factory, which builds the upstream gateway and the goal store
from it.
"""

from functools import lru_cache

from fastapi import Request
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Validated service settings.

    Field names map to upper-case environment variables, e.g. `club_tag`
    is read from `CLUB_TAG`.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    brawl_api_key: str = ""
    club_tag: str = "#JJY0QU0P"
    brawl_api_base_url: str = "https://api.brawlstars.com/v1"
    ip_echo_url: str = "https://api.ipify.org?format=json"
    upstream_timeout_seconds: float = 10.0

    goals_file: str = "metas.json"
    icon_cdn_base_url: str = "https://cdn.brawlify.com"

    # DEV CORS (browser fetch from Vite)
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    log_level: str = "INFO"
    log_json: bool = False

    host: str = "0.0.0.0"
    port: int = 3000


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, parsed on first use."""
    return Settings()


def settings_dependency(request: Request) -> Settings:
    """FastAPI dependency returning the settings the app was built with."""
    return request.app.state.settings
