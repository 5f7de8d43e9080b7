"""httpx wrapper.

Why a wrapper:
- Standardizes base URL, timeouts and headers (ACL token) for the catalog.
- Eases testing: a `transport` (e.g. `httpx.MockTransport`) can be injected.
"""

from __future__ import annotations

import httpx

from core.config import InventorySettings

USER_AGENT = "consul-inventory/0.1"


def build_client(
    settings: InventorySettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create an `httpx.Client` pointed at the Consul agent.

    Why a builder:
    - Every catalog call shares the same timeout and auth header.
    - Invalid settings fail here, before any request is made.
    """

    settings = settings or InventorySettings()
    headers: dict[str, str] = {
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
    }
    if settings.token:
        headers["X-Consul-Token"] = settings.token
    return httpx.Client(
        base_url=settings.base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers=headers,
        transport=transport,
    )
