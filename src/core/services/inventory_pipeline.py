"""Inventory aggregation.

The whole inventory is one pass over the catalog: for every datacenter and
every requested service, endpoints are grouped by address, their tags are
merged and the service name is added as a virtual tag. A service may also
carry a one-off tag, placed on a single randomly drawn endpoint.

Randomness comes from an explicit `random.Random` so callers (and tests)
control the seed. Nothing is printed here; the CLI owns output.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from core.config import DEFAULT_USERNAME
from core.domain.models import AggregatedNode, Endpoint, Project
from core.domain.naming import NodeNaming
from core.interfaces.catalog import CatalogClient, CatalogError

logger = logging.getLogger(__name__)


@dataclass
class InventoryRequest:
    """Parameters that control one aggregation run."""

    service_names: Sequence[str]
    datacenters: Sequence[str] | None = None
    one_off_tags: dict[str, str] = field(default_factory=dict)
    naming: NodeNaming = NodeNaming.NODE
    username: str = DEFAULT_USERNAME
    shuffle: bool = True

    def __post_init__(self) -> None:
        # Each service is aggregated once, in first-seen order.
        self.service_names = list(dict.fromkeys(self.service_names))


@dataclass
class _AddressRecord:
    node_name: str = ""
    tags: set[str] = field(default_factory=set)


def parse_one_off_tags(values: Iterable[str]) -> dict[str, str]:
    """Parse repeated `service:tagname` values into a service -> tag map."""

    out: dict[str, str] = {}
    for raw in values:
        service, sep, tag = raw.partition(":")
        if not sep or not service or not tag:
            raise ValueError(f"expected service:tagname, got {raw!r}")
        out[service] = tag
    return out


def _select_datacenters(known: list[str], wanted: Sequence[str] | None) -> list[str]:
    if not wanted:
        return known
    missing = [dc for dc in wanted if dc not in known]
    if missing:
        raise CatalogError(f"Unknown datacenter(s): {', '.join(missing)}")
    wanted_set = set(wanted)
    return [dc for dc in known if dc in wanted_set]


def _endpoint_order(endpoints: list[Endpoint], *, shuffle: bool, rng: random.Random) -> list[Endpoint]:
    if not shuffle:
        return endpoints
    return rng.sample(endpoints, len(endpoints))


def aggregate_datacenter(
    *,
    catalog: CatalogClient,
    datacenter: str,
    request: InventoryRequest,
    rng: random.Random,
) -> list[AggregatedNode]:
    """Aggregate every requested service within one datacenter.

    Returns one node per distinct address, ordered by address.
    """

    records: dict[str, _AddressRecord] = {}

    for service_name in request.service_names:
        endpoints = catalog.service(service_name, datacenter)
        logger.debug("%s/%s: %d endpoint(s)", datacenter, service_name, len(endpoints))

        one_off_tag = request.one_off_tags.get(service_name)
        for endpoint in _endpoint_order(endpoints, shuffle=request.shuffle, rng=rng):
            record = records.setdefault(endpoint.address, _AddressRecord())
            record.node_name = endpoint.node_name
            record.tags.update(endpoint.tags)
            # Virtual tag for the service itself.
            record.tags.add(service_name)

            if one_off_tag:
                logger.debug(
                    "%s/%s: one-off tag %r -> %s", datacenter, service_name, one_off_tag, endpoint.address
                )
                record.tags.add(one_off_tag)
                one_off_tag = None

    return [
        AggregatedNode(
            address=address,
            node_name=record.node_name,
            tags=record.tags,
            datacenter=datacenter,
            username=request.username,
            naming=request.naming,
        )
        for address, record in sorted(records.items())
    ]


def aggregate(
    *,
    catalog: CatalogClient,
    request: InventoryRequest,
    rng: random.Random | None = None,
) -> Project:
    """Build the full inventory `Project` across datacenters.

    Any catalog failure propagates; no partial project is ever returned.
    """

    rng = rng or random.Random()

    datacenters = _select_datacenters(catalog.datacenters(), request.datacenters)
    logger.debug("datacenters: %s", ", ".join(datacenters) or "(none)")

    nodes: list[AggregatedNode] = []
    for datacenter in datacenters:
        nodes.extend(
            aggregate_datacenter(
                catalog=catalog,
                datacenter=datacenter,
                request=request,
                rng=rng,
            )
        )

    return Project(nodes=nodes)
