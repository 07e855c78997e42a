# ABOUTME: Runtime settings for the Weathercloud client.
# ABOUTME: Reads WEATHERCLOUD_* variables from the environment, after loading a local .env file.

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

from weathercloud import __version__

DEFAULT_BASE_URL = "https://app.weathercloud.net"

_ENV_FIELDS = {
    "WEATHERCLOUD_BASE_URL": "base_url",
    "WEATHERCLOUD_TIMEOUT": "timeout",
    "WEATHERCLOUD_CREDENTIALS_FILE": "credentials_file",
    "WEATHERCLOUD_USER_AGENT": "user_agent",
}


class Settings(BaseModel):
    """Connection and persistence settings."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0
    credentials_file: Path | None = None
    user_agent: str = f"weathercloud-client/{__version__}"


def load_settings() -> Settings:
    """Build Settings from WEATHERCLOUD_* environment variables, falling back to defaults."""
    load_dotenv()

    values = {}
    for env_name, field in _ENV_FIELDS.items():
        value = os.environ.get(env_name)
        if value:
            values[field] = value
    if "base_url" in values:
        values["base_url"] = values["base_url"].rstrip("/")
    return Settings(**values)
