"""CLI interface for Nexus using Typer.

Usage:
    nexus notifications list -u me@example.com
    nexus project stage 1715000000000 Design -u pm@example.com
    nexus theme toggle

The CLI is structured as:
- app: Main Typer application
- commands/: Individual command groups
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

import logging
from typing import Optional

import typer

from nexus import __version__
from nexus.interfaces.cli.commands import assist, config, notifications, project, theme

# Create the main Typer application
app = typer.Typer(
    name="nexus",
    help="Project management for web design and development studios",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"nexus version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Nexus - projects, stages, notifications and an AI assistant."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(notifications.app, name="notifications")
app.add_typer(project.app, name="project")
app.add_typer(theme.app, name="theme")
app.add_typer(assist.app, name="assist")
app.add_typer(config.app, name="config")


__all__ = ["app"]
