"""Shared utilities for Nexus CLI commands.

This module provides common utilities used across CLI commands:
- Opening the local workspace (config, document store, local state)
- Resolving the acting member from --user / NEXUS_USER
- Formatted output helpers (error, success, info)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer

from nexus.application.session import resolve_session_user
from nexus.application.snapshot import SnapshotStore
from nexus.domain.member.models import Member
from nexus.domain.shared.result import Err
from nexus.global_config import NexusConfig, get_global_config
from nexus.infrastructure.auth import AuthUser
from nexus.infrastructure.storage.document_store import DocumentStoreError, JsonDocumentStore
from nexus.infrastructure.storage.local_state import JsonFileKeyValueStore, LocalState

STORE_DIR = "store"
LOCAL_STATE_FILE = "local_state.json"


# Reusable options for CLI commands
# Usage: def my_command(user: Optional[str] = user_option()) -> None:
def user_option() -> Any:
    return typer.Option(
        None,
        "--user",
        "-u",
        help="Member id or e-mail to act as (or set NEXUS_USER env var)",
        envvar="NEXUS_USER",
    )


def data_dir_option() -> Any:
    return typer.Option(
        None,
        "--data-dir",
        help="Data directory (or set NEXUS_DATA_DIR env var)",
        envvar="NEXUS_DATA_DIR",
    )


@dataclass
class Workspace:
    """Everything a command needs, opened from the data directory."""

    config: NexusConfig
    store: JsonDocumentStore
    snapshots: SnapshotStore
    local_state: LocalState
    user: Member | None = None


def open_workspace(data_dir: str | None = None, user: str | None = None) -> Workspace:
    """Open the store under the data directory and resolve the acting member.

    Raises:
        typer.Exit: If the store cannot be read or the member is suspended.
    """
    config = get_global_config()
    root = Path(data_dir).expanduser() if data_dir else config.resolved_data_dir()

    store = JsonDocumentStore(root / STORE_DIR)
    snapshots = SnapshotStore(tuple(config.default_stages), tuple(config.default_teams))
    try:
        snapshots.bind(store)
    except DocumentStoreError as e:
        print_error(str(e))
        raise typer.Exit(1)

    workspace = Workspace(
        config=config,
        store=store,
        snapshots=snapshots,
        local_state=LocalState(JsonFileKeyValueStore(root / LOCAL_STATE_FILE)),
    )
    if user:
        workspace.user = resolve_user(workspace, user)
    return workspace


def resolve_user(workspace: Workspace, identifier: str) -> Member:
    """Find the member by id, else resolve the value as a sign-in e-mail.

    Raises:
        typer.Exit: If the account is suspended.
    """
    members = workspace.snapshots.snapshot.members
    by_id = next((m for m in members if m.id == identifier), None)
    email = by_id.email if by_id else identifier
    uid = by_id.id if by_id else identifier

    result = resolve_session_user(
        AuthUser(uid=uid, email=email), members, workspace.config.super_admin_email
    )
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)
    return result.value


def require_user(workspace: Workspace) -> Member:
    """Get the acting member, requiring one to be specified.

    Raises:
        typer.Exit: If no member was given.
    """
    if workspace.user is None:
        print_error("No user specified.")
        typer.echo("")
        typer.echo("Specify a user using one of:")
        typer.echo("  1. Use -u/--user option: nexus notifications list -u me@example.com")
        typer.echo("  2. Set NEXUS_USER env var: export NEXUS_USER=me@example.com")
        raise typer.Exit(1)
    return workspace.user


def print_error(msg: str) -> None:
    """Print a formatted error message."""
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def print_warning(msg: str) -> None:
    typer.echo(typer.style(f"Warning: {msg}", fg=typer.colors.YELLOW), err=True)


def print_separator(char: str = "=", width: int = 60) -> None:
    typer.echo(char * width)


def print_header(title: str, width: int = 60) -> None:
    """Print a title between two separator lines."""
    print_separator("=", width)
    typer.echo(title)
    print_separator("=", width)


__all__ = [
    "Workspace",
    "open_workspace",
    "resolve_user",
    "require_user",
    "user_option",
    "data_dir_option",
    "print_error",
    "print_success",
    "print_info",
    "print_warning",
    "print_separator",
    "print_header",
]
