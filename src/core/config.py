"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) away from the CLI.
- Lets the catalog adapter and the HTTP client read config consistently.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_ADDRESS = "127.0.0.1:8500"
DEFAULT_USERNAME = "ubuntu"


class InventorySettings(BaseSettings):
    """Connection settings for the Consul catalog.

    Read from `CONSUL_ADDRESS`, `CONSUL_SCHEME`, `CONSUL_TOKEN` and
    `CONSUL_HTTP_TIMEOUT_SECONDS`. Empty variables fall back to the defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="CONSUL_",
        extra="ignore",
        case_sensitive=False,
        env_ignore_empty=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    address: str = Field(
        default=DEFAULT_ADDRESS,
        min_length=1,
        description="host:port of the Consul agent (optionally with a scheme prefix).",
    )
    scheme: Literal["http", "https"] = Field(
        default="http",
        description="URI scheme used to reach the agent.",
    )
    token: str = Field(
        default="",
        description="ACL token sent as X-Consul-Token (empty = anonymous).",
    )
    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout per request (seconds).",
    )

    @property
    def base_url(self) -> str:
        """Agent base URL; a scheme embedded in `address` wins over `scheme`."""

        address = self.address.strip().rstrip("/")
        if "://" in address:
            scheme, _, host = address.partition("://")
            if scheme not in ("http", "https"):
                raise ValueError(f"Unsupported scheme in CONSUL_ADDRESS: {scheme}")
            return f"{scheme}://{host}"
        return f"{self.scheme}://{address}"
