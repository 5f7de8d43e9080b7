"""Adapters: Consul over HTTP (httpx) and the XML/JSON exporters.

Infrastructure details live here; the core only sees `CatalogClient` and
`Project`.
"""
