"""
gherkin-report CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
import sys

import typer
from rich.console import Console

from gherkin_report import __version__
from gherkin_report.cli import generate
from gherkin_report.core.config import load_layered_env

app = typer.Typer(
    name="gherkin-report",
    help="Turn Gherkin feature files into a static HTML report",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for all commands.

    Args:
        debug: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """
    gherkin-report - Gherkin feature files to HTML.

    Quick Start:
        gherkin-report generate features/     # Write ./report/index.html
        gherkin-report show login.feature     # Inspect one parsed file
    """
    # Precedence: OS env > project .env > user .env
    load_layered_env()
    setup_logging(debug)
    ctx.obj = {"debug": debug}


app.command(name="generate")(generate.generate)
app.command(name="show")(generate.show)


@app.command()
def version() -> None:
    """Show gherkin-report version and exit."""
    console.print(f"gherkin-report version {__version__}")
    raise typer.Exit(0)


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main"]
