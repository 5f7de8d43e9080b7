"""Command line entry point.

Exit codes:
- 0: inventory written to stdout.
- 1: usage error (unknown option, malformed --tag-one, no service names).
- 2: runtime error (settings, catalog, serialization).
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Sequence

import typer
from rich.console import Console

from adapters.consul_catalog import ConsulCatalog
from adapters.json_exporter import render_project_json
from adapters.xml_exporter import render_project_xml
from cli.logging_setup import configure_logging
from cli.ui_components import build_nodes_table, print_usage
from core.config import DEFAULT_USERNAME, InventorySettings
from core.domain.models import Project
from core.domain.naming import NodeNaming
from core.interfaces.catalog import CatalogError
from core.services.inventory_pipeline import InventoryRequest, aggregate, parse_one_off_tags

PROG_NAME = "consul-inventory"

logger = logging.getLogger(__name__)

# typer may ship its own click; match the usage error class it actually raises.
UsageError = next(cls for cls in typer.BadParameter.__mro__ if cls.__name__ == "UsageError")

app = typer.Typer(
    add_completion=False,
    help="Build a provisioning inventory from services registered in Consul.",
)

_console = Console()
_err_console = Console(stderr=True)


class OutputFormat(str, Enum):
    XML = "xml"
    JSON = "json"
    TABLE = "table"


def _emit(project: Project, output_format: OutputFormat) -> None:
    if output_format is OutputFormat.TABLE:
        _console.print(build_nodes_table(project))
        return
    if output_format is OutputFormat.JSON:
        document = render_project_json(project)
    else:
        document = render_project_xml(project)
    typer.echo(document)


@app.command()
def inventory(
    service_names: list[str] | None = typer.Argument(
        None,
        metavar="SERVICE_NAMES...",
        help="Consul service names to include.",
        show_default=False,
    ),
    tag_one: list[str] | None = typer.Option(
        None,
        "--tag-one",
        metavar="SERVICE:TAG",
        help="Add TAG to exactly one random endpoint of SERVICE (repeatable).",
    ),
    datacenter: list[str] | None = typer.Option(
        None,
        "--datacenter",
        "-d",
        help="Only query these datacenters (default: all).",
    ),
    node_name: NodeNaming = typer.Option(
        NodeNaming.default(),
        "--node-name",
        case_sensitive=False,
        help="Take the node name from the catalog node or from its address.",
    ),
    username: str = typer.Option(DEFAULT_USERNAME, "--username", help="Username attribute of every node."),
    seed: int | None = typer.Option(None, "--seed", help="Seed for the random endpoint order."),
    shuffle: bool = typer.Option(True, "--shuffle/--no-shuffle", help="Randomize endpoint order per service."),
    output_format: OutputFormat = typer.Option(OutputFormat.XML, "--format", case_sensitive=False),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
) -> None:
    """Print an inventory of every node running SERVICE_NAMES, across datacenters."""

    configure_logging(verbose=verbose)

    if not service_names:
        raise UsageError("at least one service name is required")

    try:
        one_off_tags = parse_one_off_tags(tag_one or [])
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--tag-one") from exc

    request = InventoryRequest(
        service_names=service_names,
        datacenters=datacenter or None,
        one_off_tags=one_off_tags,
        naming=node_name,
        username=username,
        shuffle=shuffle,
    )

    try:
        settings = InventorySettings()
        with ConsulCatalog(settings) as catalog:
            project = aggregate(catalog=catalog, request=request, rng=random.Random(seed))
        _emit(project, output_format)
    except (CatalogError, ValueError) as exc:
        logger.debug("inventory failed", exc_info=True)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from exc


def run(argv: Sequence[str] | None = None) -> None:
    """Console-script entry point; always exits through `SystemExit`."""

    command = typer.main.get_command(app)
    try:
        code = command.main(
            args=list(argv) if argv is not None else None,
            prog_name=PROG_NAME,
            standalone_mode=False,
        )
    except UsageError as exc:
        _err_console.print(f"Error: {exc.format_message()}", markup=False, highlight=False)
        print_usage(_err_console, PROG_NAME)
        raise SystemExit(1) from exc
    raise SystemExit(code or 0)


if __name__ == "__main__":
    run()
