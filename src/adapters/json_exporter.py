"""JSON export of the inventory.

Why JSON:
- Interoperability with tooling that prefers JSON over the XML document.
"""

from __future__ import annotations

import json
from typing import Any

from core.domain.models import Project


def project_payload(project: Project) -> dict[str, Any]:
    """Same schema as the XML document, with tags as a sorted list."""

    return {
        "nodes": [
            {
                "name": node.name,
                "hostname": node.address,
                "tags": node.sorted_tags,
                "username": node.username,
                "datacenter": node.datacenter,
            }
            for node in project.nodes
        ]
    }


def render_project_json(project: Project) -> str:
    """Render `Project` as UTF-8 JSON with a stable layout."""

    return json.dumps(project_payload(project), ensure_ascii=False, indent=2, sort_keys=True)
