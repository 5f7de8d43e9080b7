from __future__ import annotations

import pytest

from core.domain.models import Endpoint
from core.interfaces.catalog import CatalogError


class FakeCatalog:
    """In-memory catalog: {datacenter: {service: [endpoint dicts]}}."""

    def __init__(self, data: dict[str, dict[str, list[dict]]], *, fail_on: str | None = None) -> None:
        self.data = data
        self.fail_on = fail_on
        self.calls: list[tuple[str, str]] = []

    def __enter__(self) -> "FakeCatalog":
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None

    def datacenters(self) -> list[str]:
        if self.fail_on == "datacenters":
            raise CatalogError("connection refused")
        return list(self.data)

    def service(self, name: str, datacenter: str) -> list[Endpoint]:
        self.calls.append((datacenter, name))
        if self.fail_on == name:
            raise CatalogError(f"Unexpected response code: 500 ({name})")
        raw = self.data.get(datacenter, {}).get(name, [])
        return [Endpoint.model_validate(item) for item in raw]


def endpoint(address: str, node: str, *tags: str) -> dict:
    return {"Address": address, "Node": node, "ServiceTags": list(tags)}


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    for name in ("CONSUL_ADDRESS", "CONSUL_SCHEME", "CONSUL_TOKEN", "CONSUL_HTTP_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the settings.
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def web_catalog() -> FakeCatalog:
    return FakeCatalog(
        {
            "dc1": {
                "web": [
                    endpoint("10.0.0.1", "n1", "v1"),
                    endpoint("10.0.0.2", "n2"),
                ],
            },
        }
    )
