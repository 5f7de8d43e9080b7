"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- The usage text and the table preview are reused by several code paths.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from core.domain.models import Project

_OPTIONS = (
    ("--tag-one=service:tagname", "tag one random endpoint (repeatable)"),
    ("-d, --datacenter NAME", "only this datacenter (repeatable)"),
    ("--node-name [node|address]", "source of the name attribute"),
    ("--username TEXT", "username attribute"),
    ("--seed INT", "seed the endpoint order"),
    ("--no-shuffle", "keep catalog endpoint order"),
    ("--format [xml|json|table]", "output format"),
    ("-v, --verbose", "debug logging on stderr"),
    ("--", "end of options"),
)


def print_usage(console: Console, prog_name: str) -> None:
    """Print the short usage text shown on every usage error."""

    text = Text()
    text.append(f"Usage: {prog_name} [options] service-names...\n", style="bold")
    text.append("\nOptions:\n")
    for flag, help_text in _OPTIONS:
        text.append(f"  {flag:<28} {help_text}\n")
    console.print(text)


def build_nodes_table(project: Project) -> Table:
    """Rich table preview of the inventory."""

    datacenters = ", ".join(project.datacenters())
    table = Table(title=f"Inventory ({datacenters})" if datacenters else "Inventory")
    table.add_column("Datacenter", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Hostname", style="magenta", no_wrap=True)
    table.add_column("Tags", style="green")
    table.add_column("Username", style="dim")
    for node in project.nodes:
        table.add_row(
            node.datacenter,
            node.name,
            node.address,
            ", ".join(node.sorted_tags),
            node.username,
        )
    return table
