"""Serve command: open an interactive topology session for an analyzer graph."""

from __future__ import annotations

from pathlib import Path

import typer
from loguru import logger
from rich.console import Console

from ...config.settings import TopologyConfig
from ...core.exceptions import ConfigError, GraphDataError, SessionError
from ...core.loader import load_graph
from .visualize.server import find_free_port, start_visualization_server

console = Console()


def serve(
    graph_file: Path = typer.Argument(
        ...,
        help="Dependency graph JSON produced by the analyzer ({nodes, edges})",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    port: int | None = typer.Option(
        None,
        "--port",
        help="Port for the session server (first free port in the configured range if omitted)",
        min=1024,
        max=65535,
        rich_help_panel="🌐 Server Options",
    ),
    no_open: bool = typer.Option(
        False,
        "--no-open",
        help="Do not open the browser automatically",
        rich_help_panel="🌐 Server Options",
    ),
    watch: bool = typer.Option(
        True,
        "--watch/--no-watch",
        help="Reload the graph when the analyzer rewrites the file",
        rich_help_panel="🌐 Server Options",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML file with view settings",
        dir_okay=False,
        rich_help_panel="🔧 Global Options",
    ),
) -> None:
    """🕸️  Explore a dependency graph as force-directed or tree views.

    [bold cyan]Examples:[/bold cyan]

    [green]Open a session for an analyzer result:[/green]
        $ repo-topology serve deps.json

    [green]Fixed port, no browser:[/green]
        $ repo-topology serve deps.json --port 8090 --no-open
    """
    try:
        config = TopologyConfig.load(config_file) if config_file else TopologyConfig()
        graph = load_graph(graph_file)
    except (ConfigError, GraphDataError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(
        f"[dim]Loaded[/dim] {len(graph.nodes)} nodes, {len(graph.edges)} edges "
        f"[dim]from {graph_file}[/dim]"
    )

    try:
        if port is None:
            port = find_free_port(config.server.port_start, config.server.port_end)
        start_visualization_server(
            graph,
            port=port,
            config=config,
            watch_path=graph_file if watch else None,
            auto_open=not no_open,
        )
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopping server...[/yellow]")
        raise typer.Exit(130)
    except (OSError, SessionError) as e:
        logger.error(f"Session failed: {e}")
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(1)
