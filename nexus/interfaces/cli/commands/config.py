"""Configuration CLI commands."""

import json

import typer

from nexus.global_config import CONFIG_FILE, get_config_dir, get_global_config, save_global_config
from nexus.interfaces.cli.common import print_error, print_success

app = typer.Typer(help="Configuration commands")

SETTABLE_KEYS = {
    "data-dir": "data_dir",
    "ollama-model": "ollama_model",
    "super-admin-email": "super_admin_email",
}


@app.command("show")
def show() -> None:
    """Print the configuration and where it is stored."""
    typer.echo(f"# {get_config_dir() / CONFIG_FILE}")
    typer.echo(json.dumps(get_global_config().model_dump(), indent=2))


@app.command("set")
def set_value(
    key: str = typer.Argument(..., help=f"One of: {', '.join(SETTABLE_KEYS)}"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Change one configuration value."""
    field = SETTABLE_KEYS.get(key)
    if field is None:
        print_error(f"Unknown key: {key}")
        raise typer.Exit(1)

    config = get_global_config().model_copy(update={field: value})
    save_global_config(config)
    print_success(f"{key} = {value}")
