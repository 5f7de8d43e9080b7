"""XML export of the inventory.

Why XML:
- Provisioning tools consume a `<project>` document with one `<node>` per
  host (name, hostname, tags, username, datacenter attributes).
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from core.domain.models import AggregatedNode, Project

_INDENT = "    "


def _node_attributes(node: AggregatedNode) -> dict[str, str]:
    attrs = {"name": node.name, "hostname": node.address}
    if node.tags:
        attrs["tags"] = ",".join(node.sorted_tags)
    attrs["username"] = node.username
    attrs["datacenter"] = node.datacenter
    return attrs


def build_project_element(project: Project) -> ET.Element:
    """Build the `<project>` element tree; `tags` is omitted when empty."""

    root = ET.Element("project")
    for node in project.nodes:
        ET.SubElement(root, "node", _node_attributes(node))
    return root


def render_project_xml(project: Project) -> str:
    """Render `Project` as indented XML, without declaration or trailing newline."""

    root = build_project_element(project)
    ET.indent(root, space=_INDENT)
    return ET.tostring(root, encoding="unicode", short_empty_elements=False)
