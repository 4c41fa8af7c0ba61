"""Main CLI application for repo-topology."""

import sys

import typer
from loguru import logger
from rich.console import Console

from .. import __version__
from .commands.serve import serve

console = Console()

app = typer.Typer(
    name="repo-topology",
    help="🕸️  Interactive dependency topology views for analyzed repositories",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose output",
        rich_help_panel="🔧 Global Options",
    ),
) -> None:
    """🕸️  Interactive dependency topology views for analyzed repositories."""
    _configure_logging(verbose)
    if verbose:
        logger.info("Verbose logging enabled")


app.command("serve")(serve)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold blue]repo-topology[/bold blue] version [green]{__version__}[/green]")


if __name__ == "__main__":
    app()
