"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Validates the catalog payload at the edge, so the aggregator only ever
  sees well-formed endpoints.
- Gives the exporters a single, typed document to serialize.

Note:
- These models describe *what* the inventory is, not *how* it is fetched.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from core.config import DEFAULT_USERNAME
from core.domain.naming import NodeNaming


class Endpoint(BaseModel):
    """One registered instance of a service, as reported by the catalog.

    Built straight from a `/v1/catalog/service/<name>` entry; only the keys
    the inventory needs are kept.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    address: str = Field(
        ...,
        min_length=1,
        alias="Address",
        description="Address of the node hosting the service.",
    )
    node_name: str = Field(
        default="",
        alias="Node",
        description="Node name registered in the catalog.",
    )
    tags: frozenset[str] = Field(
        default_factory=frozenset,
        alias="ServiceTags",
        description="Tags attached to the service registration.",
    )

    @field_validator("tags", mode="before")
    @classmethod
    def _null_tags(cls, value: Any) -> Any:
        # Consul sends `null` for services registered without tags.
        return () if value is None else value


class AggregatedNode(BaseModel):
    """Every endpoint sharing one address within one datacenter, merged."""

    address: str = Field(..., min_length=1, description="Aggregation key.")
    node_name: str = Field(default="", description="Node name of the last endpoint seen.")
    tags: set[str] = Field(default_factory=set, description="Union of tags, virtual tags included.")
    datacenter: str = Field(..., min_length=1)
    username: str = Field(default=DEFAULT_USERNAME, min_length=1)
    naming: NodeNaming = Field(default=NodeNaming.NODE, exclude=True)

    @property
    def name(self) -> str:
        return self.naming.pick(node_name=self.node_name, address=self.address)

    @property
    def sorted_tags(self) -> list[str]:
        return sorted(self.tags)


class Project(BaseModel):
    """Serialization root: the ordered list of inventory nodes."""

    nodes: list[AggregatedNode] = Field(default_factory=list)

    def datacenters(self) -> list[str]:
        """Datacenters present in the project, in node order."""

        seen: dict[str, None] = {}
        for node in self.nodes:
            seen.setdefault(node.datacenter, None)
        return list(seen)
