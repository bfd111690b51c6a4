"""Theme CLI commands."""

from typing import Optional

import typer

from nexus.interfaces.cli.common import data_dir_option, open_workspace, print_success

app = typer.Typer(help="Theme preference commands")


def _label(dark: bool) -> str:
    return "dark" if dark else "light"


@app.command("show")
def show(data_dir: Optional[str] = data_dir_option()) -> None:
    """Show the current theme."""
    typer.echo(_label(open_workspace(data_dir).local_state.dark_theme))


@app.command("toggle")
def toggle(data_dir: Optional[str] = data_dir_option()) -> None:
    """Switch between dark and light."""
    state = open_workspace(data_dir).local_state
    state.set_dark_theme(not state.dark_theme)
    print_success(f"Theme: {_label(state.dark_theme)}")
