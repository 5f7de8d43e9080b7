"""Service catalog contract.

Why Protocol:
- A structural contract (duck typing) with no inheritance required.
- The Consul adapter and the in-memory fakes used in tests are
  interchangeable.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Endpoint


class CatalogError(RuntimeError):
    """Listing datacenters or service endpoints failed."""


@runtime_checkable
class CatalogClient(Protocol):
    """Minimal read-only view of a service-discovery catalog.

    Both calls are blocking and raise `CatalogError` on any failure.
    """

    def datacenters(self) -> list[str]:
        """Return every datacenter known to the catalog."""

        ...

    def service(self, name: str, datacenter: str) -> list[Endpoint]:
        """Return the endpoints registered for `name` in `datacenter`."""

        ...
