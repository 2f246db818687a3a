"""Command-line driver: read adjacency text, sort it and print the result."""

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from slotsort._api import finish, new_parser, node_payload, parse_line, sort
from slotsort._graph import CycleError, Digraph

from .config import ConfigError, SlotsortConfig, get_config

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

InputArgument = Annotated[
    Path | None,
    typer.Argument(help="Adjacency file to read (defaults to the configured input, then stdin)"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Topological sort of adjacency lists."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> SlotsortConfig:
    """Load [tool.slotsort], exiting with an error message if it is invalid."""
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _resolve_input(path: Path | None, config: SlotsortConfig) -> Path | None:
    """Pick the input file: the argument, then the configured input, else None for stdin."""
    if path is not None:
        return path
    if config.input is not None:
        logger.debug(f"Using input from config: {config.input}")
    return config.input


def _read_graph(path: Path | None, config: SlotsortConfig) -> Digraph[str]:
    """Feed the input to a parser one line at a time and return the graph."""
    parser = new_parser()
    source = _resolve_input(path, config)
    if source is None:
        logger.debug("Reading adjacency lines from stdin")
        for line in sys.stdin:
            parse_line(parser, line)
        return finish(parser)

    if not source.exists():
        err_console.print(f"[red]Error: Input file not found: {escape(str(source))}[/red]")
        raise typer.Exit(code=1)
    logger.debug(f"Reading adjacency lines from {source}")
    with source.open(encoding="utf-8") as f:
        for line in f:
            parse_line(parser, line)
    return finish(parser)


def _report_cycle(graph: Digraph[str], error: CycleError) -> None:
    name = node_payload(graph, error.handle)
    err_console.print(f"[red]✗ Cycle detected in input at node '{escape(name or '')}'[/red]")


@app.command("sort")
def sort_command(
    path: InputArgument = None,
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Write the ordering to this file instead of stdout"),
    ] = None,
) -> None:
    """Print node names in topological order, one per line."""
    config = _load_config() if path is None or output is None else SlotsortConfig()
    graph = _read_graph(path, config)
    try:
        ordering = sort(graph)
    except CycleError as e:
        _report_cycle(graph, e)
        raise typer.Exit(code=1) from e

    # Every handle came from the graph itself; names are written verbatim
    text = "".join(f"{node_payload(graph, handle)}\n" for handle in ordering)

    if output is None:
        output = config.output

    if output is None:
        sys.stdout.write(text)
        return

    output.write_text(text, encoding="utf-8", newline="")
    err_console.print(f"[green]✓ Wrote {len(ordering)} nodes to {escape(str(output))}[/green]")


@app.command()
def check(path: InputArgument = None) -> None:
    """Check that the input can be sorted without printing the ordering."""
    graph = _read_graph(path, _load_config() if path is None else SlotsortConfig())

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Nodes", justify="right", style="yellow")
    table.add_column("Edges", justify="right", style="green")
    table.add_row(str(graph.node_count()), str(graph.edge_count()))
    err_console.print(Panel(table, title="[bold]Graph[/bold]", border_style="cyan"))

    try:
        sort(graph)
    except CycleError as e:
        _report_cycle(graph, e)
        raise typer.Exit(code=1) from e

    err_console.print("[green]✓ Graph is acyclic[/green]")


@app.command()
def graph(path: InputArgument = None) -> None:
    """Render the adjacency of the input as a tree."""
    digraph = _read_graph(path, _load_config() if path is None else SlotsortConfig())

    tree = Tree("[bold]Graph[/bold]")
    for handle in digraph.handles():
        branch = tree.add(f"[cyan]{escape(node_payload(digraph, handle) or '')}[/cyan]")
        for successor in digraph.successors(handle):
            name = node_payload(digraph, successor)
            if name is None:
                branch.add(f"[red]<missing {successor}>[/red]")
            else:
                branch.add(escape(name))

    out_console.print(tree)
    out_console.print(f"\n[dim]Total: {digraph.node_count()} nodes, {digraph.edge_count()} edges[/dim]")


def main() -> None:
    app()
