"""Node observer CLI.

This module provides the command line entry point:
- collect: Collect resource metrics for one node and print them

The node is read from a Node JSON file (`kubectl get node NAME -o json`)
or given directly by its internal IP. Output is a Rich table, or the
dashboard metric JSON for automation.
"""

import asyncio
import json
import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from node_observer.api_types import NODE_INTERNAL_IP, Node, NodeAddress, NodeMetadata, NodeStatus
from node_observer.config import Settings
from node_observer.exceptions import NodeObserverError
from node_observer.factory import get_node_metrics
from node_observer.queries import METRIC_DISPLAY
from node_observer.types import Metric, MetricBatch

app = typer.Typer(
    name="node-observer",
    help="Collect node resource utilization metrics from Prometheus",
    no_args_is_help=True,
)


@app.callback()
def _callback() -> None:
    """Collect node resource utilization metrics from Prometheus."""


def _load_node(node_file: Path | None, internal_ip: str | None, name: str) -> Node:
    if node_file is not None:
        try:
            return Node.model_validate_json(node_file.read_text())
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            print(f"Error: cannot read node from {node_file}: {e}")
            raise typer.Exit(1)

    if internal_ip:
        return Node(
            metadata=NodeMetadata(name=name),
            status=NodeStatus(addresses=[NodeAddress(type=NODE_INTERNAL_IP, address=internal_ip)]),
        )

    print("Error: one of --node-file or --internal-ip is required")
    raise typer.Exit(1)


def _latest_value(metric: Metric) -> str:
    """Value of the newest sample across all series, "-" when empty."""
    if not metric.data_points:
        return "-"
    return str(max(metric.data_points, key=lambda p: p.x).y)


def _print_table(node: Node, metrics: MetricBatch) -> None:
    table = Table(title=f"Node {node.name or '<unnamed>'}")
    table.add_column("Metric", style="cyan")
    table.add_column("Label")
    table.add_column("Points", justify="right")
    table.add_column("Latest", justify="right")
    table.add_column("Unit")
    table.add_column("Aggregation")

    for metric in metrics:
        label, unit = METRIC_DISPLAY.get(metric.metric_name, ("", ""))
        table.add_row(
            metric.metric_name,
            label,
            str(len(metric.data_points)),
            _latest_value(metric),
            unit,
            metric.aggregate.value,
        )

    Console().print(table)


@app.command("collect")
def collect(
    node_file: Path = typer.Option(
        None, "--node-file", "-f", help="Node JSON file (kubectl get node NAME -o json)"
    ),
    internal_ip: str = typer.Option(
        None, "--internal-ip", help="Node internal IP, instead of --node-file"
    ),
    name: str = typer.Option("", "--name", "-n", help="Node name when using --internal-ip"),
    prometheus_url: str = typer.Option(
        None,
        "--prometheus",
        envvar="NODE_OBSERVER_PROMETHEUS_URL",
        help="Prometheus URL (default: http://<internal-ip>:30900)",
    ),
    concurrent: bool = typer.Option(False, "--concurrent", help="Run queries in parallel"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Collect disk and network metrics for a node."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    node = _load_node(node_file, internal_ip, name)

    settings = Settings()
    if prometheus_url:
        settings = settings.model_copy(update={"prometheus_url": prometheus_url})

    try:
        metrics = asyncio.run(get_node_metrics(node, settings=settings, concurrent=concurrent))
    except NodeObserverError as e:
        print(f"Error: {e}")
        raise typer.Exit(1)

    if json_output:
        print(json.dumps([m.to_dict() for m in metrics], indent=2))
        return

    _print_table(node, metrics)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
