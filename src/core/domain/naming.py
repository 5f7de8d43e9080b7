"""Node naming modes.

Some consumers want the node name reported by Consul, others key everything
by address. Keeping the choice in the domain layer lets the CLI and the
aggregator share it without importing adapters.
"""

from __future__ import annotations

from enum import Enum


class NodeNaming(str, Enum):
    """Where an inventory node takes its `name` attribute from."""

    NODE = "node"
    ADDRESS = "address"

    @classmethod
    def default(cls) -> "NodeNaming":
        return cls.NODE

    def pick(self, *, node_name: str, address: str) -> str:
        """Return the name for a node under this mode."""

        if self is NodeNaming.ADDRESS or not node_name:
            return address
        return node_name
