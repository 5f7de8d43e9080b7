"""Catalog adapter: Consul HTTP API.

Endpoints used:
- `GET /v1/catalog/datacenters`
- `GET /v1/catalog/service/<name>?dc=<datacenter>`

Every failure (transport, status, payload) surfaces as `CatalogError`.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from adapters.http_client import build_client
from core.config import InventorySettings
from core.domain.models import Endpoint
from core.interfaces.catalog import CatalogClient, CatalogError

logger = logging.getLogger(__name__)

_DATACENTERS = TypeAdapter(list[str])
_ENDPOINTS = TypeAdapter(list[Endpoint])


class ConsulCatalog(CatalogClient):
    """Reads datacenters and service endpoints from a Consul agent."""

    def __init__(
        self,
        settings: InventorySettings | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or InventorySettings()
        self._owns_client = client is None
        try:
            self._client = client or build_client(self._settings)
        except httpx.InvalidURL as exc:
            raise CatalogError(f"Invalid Consul address {self._settings.address!r}: {exc}") from exc

    def __enter__(self) -> "ConsulCatalog":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _get(self, path: str, params: dict[str, str] | None = None) -> Any:
        logger.debug("GET %s %s", path, params or "")
        try:
            response = self._client.get(path, params=params)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise CatalogError(f"{path}: {exc}") from exc

        if response.status_code != 200:
            body = response.text.strip()
            raise CatalogError(f"Unexpected response code: {response.status_code} ({body})")

        try:
            return response.json()
        except ValueError as exc:
            raise CatalogError(f"{path}: invalid JSON response") from exc

    def datacenters(self) -> list[str]:
        payload = self._get("/v1/catalog/datacenters")
        try:
            return _DATACENTERS.validate_python(payload)
        except ValidationError as exc:
            raise CatalogError(f"Malformed datacenter list: {exc}") from exc

    def service(self, name: str, datacenter: str) -> list[Endpoint]:
        payload = self._get(
            f"/v1/catalog/service/{quote(name, safe='')}",
            params={"dc": datacenter},
        )
        # An unknown service is an empty list, but guard against `null` too.
        if payload is None:
            return []
        try:
            return _ENDPOINTS.validate_python(payload)
        except ValidationError as exc:
            raise CatalogError(f"Malformed endpoints for service {name!r}: {exc}") from exc
