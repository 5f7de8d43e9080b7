import httpx
import pytest

from adapters.consul_catalog import ConsulCatalog
from adapters.http_client import build_client
from core.config import InventorySettings
from core.interfaces.catalog import CatalogClient, CatalogError


def _catalog(handler, **settings):
    config = InventorySettings(**settings)
    client = build_client(config, transport=httpx.MockTransport(handler))
    return ConsulCatalog(config, client=client)


def test_lists_datacenters():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        return httpx.Response(200, json=["dc1", "dc2"])

    catalog = _catalog(handler)

    assert catalog.datacenters() == ["dc1", "dc2"]
    assert seen["url"] == "http://127.0.0.1:8500/v1/catalog/datacenters"
    assert isinstance(catalog, CatalogClient)


def test_service_endpoints_are_parsed():
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["dc"] = request.url.params.get("dc")
        return httpx.Response(
            200,
            json=[
                {"Node": "n1", "Address": "10.0.0.1", "ServiceTags": ["v1"], "ServicePort": 80},
                {"Node": "n2", "Address": "10.0.0.2", "ServiceTags": None},
            ],
        )

    endpoints = _catalog(handler).service("web", "dc2")

    assert seen == {"path": "/v1/catalog/service/web", "dc": "dc2"}
    assert [(e.address, e.node_name, set(e.tags)) for e in endpoints] == [
        ("10.0.0.1", "n1", {"v1"}),
        ("10.0.0.2", "n2", set()),
    ]


def test_token_header_and_scheme():
    seen = {}

    def handler(request):
        seen["token"] = request.headers.get("X-Consul-Token")
        seen["scheme"] = request.url.scheme
        return httpx.Response(200, json=[])

    _catalog(handler, token="s3cret", scheme="https").datacenters()

    assert seen == {"token": "s3cret", "scheme": "https"}


def test_no_token_header_when_anonymous():
    seen = {}

    def handler(request):
        seen["has_token"] = "X-Consul-Token" in request.headers
        return httpx.Response(200, json=[])

    _catalog(handler).datacenters()

    assert seen["has_token"] is False


def test_non_200_is_catalog_error():
    catalog = _catalog(lambda request: httpx.Response(403, text="ACL not found"))

    with pytest.raises(CatalogError, match="Unexpected response code: 403 \\(ACL not found\\)"):
        catalog.service("web", "dc1")


def test_transport_error_is_catalog_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(CatalogError, match="connection refused"):
        _catalog(handler).datacenters()


def test_malformed_payload_is_catalog_error():
    catalog = _catalog(lambda request: httpx.Response(200, json=[{"Node": "n1"}]))

    with pytest.raises(CatalogError, match="Malformed endpoints"):
        catalog.service("web", "dc1")


def test_invalid_json_is_catalog_error():
    catalog = _catalog(lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(CatalogError, match="invalid JSON"):
        catalog.datacenters()


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("CONSUL_ADDRESS", "consul.internal:8501")
    monkeypatch.setenv("CONSUL_SCHEME", "https")
    monkeypatch.setenv("CONSUL_TOKEN", "abc")

    settings = InventorySettings()

    assert settings.base_url == "https://consul.internal:8501"
    assert settings.token == "abc"


def test_empty_environment_falls_back_to_defaults(monkeypatch):
    monkeypatch.setenv("CONSUL_ADDRESS", "")
    monkeypatch.setenv("CONSUL_SCHEME", "")

    assert InventorySettings().base_url == "http://127.0.0.1:8500"


def test_scheme_in_address_wins():
    settings = InventorySettings(address="https://consul.example:443/", scheme="http")

    assert settings.base_url == "https://consul.example:443"


def test_unsupported_scheme_in_address():
    with pytest.raises(ValueError, match="Unsupported scheme"):
        _ = InventorySettings(address="unix:///var/run/consul.sock").base_url


def test_invalid_address_is_catalog_error():
    with pytest.raises(CatalogError, match="Invalid Consul address"):
        ConsulCatalog(InventorySettings(address="127.0.0.1:notaport"))
