"""Notification feed CLI commands.

Commands for listing, opening and clearing derived notifications.
"""

from typing import Optional

import typer

from nexus.application.announcement_service import AnnouncementService
from nexus.application.notification_service import ANNOUNCEMENTS_VIEW, NotificationCenter
from nexus.domain.notification import Notification
from nexus.domain.shared import Err, utc_now
from nexus.interfaces.cli.common import (
    Workspace,
    data_dir_option,
    open_workspace,
    print_error,
    print_header,
    print_info,
    print_success,
    print_warning,
    require_user,
    user_option,
)

app = typer.Typer(help="Notification feed commands")


def _center(workspace: Workspace) -> NotificationCenter:
    center = NotificationCenter(workspace.local_state)
    center.refresh(workspace.snapshots.snapshot, require_user(workspace), utc_now())
    return center


def _format(notification: Notification) -> str:
    marker = typer.style("!", fg=typer.colors.RED) if notification.urgent else " "
    return (
        f"{marker} [{notification.type.value}] {notification.title}: {notification.description}"
        f"  ({notification.time_label})  id={notification.id}"
    )


def _mark_announcements_read(workspace: Workspace, ids: list[str]) -> None:
    service = AnnouncementService(workspace.store, workspace.snapshots)
    user = require_user(workspace)
    for announcement_id in ids:
        result = service.mark_read(user, announcement_id)
        if isinstance(result, Err):
            print_warning(result.error)


# =============================================================================
# Commands
# =============================================================================


@app.command("list")
def list_notifications(
    read: bool = typer.Option(False, "--read", help="Show the read tab instead of unread"),
    user: Optional[str] = user_option(),
    data_dir: Optional[str] = data_dir_option(),
) -> None:
    """List notifications for the acting member.

    Example:
        nexus notifications list -u pm@example.com
    """
    center = _center(open_workspace(data_dir, user))
    items = center.read() if read else center.unread()

    print_header(f"{'Read' if read else 'Unread'} notifications ({len(items)})")
    if not items:
        print_info("Nothing here.")
        return
    for notification in items:
        typer.echo(_format(notification))


@app.command("read")
def read_notification(
    notification_id: str = typer.Argument(..., help="Notification id"),
    user: Optional[str] = user_option(),
    data_dir: Optional[str] = data_dir_option(),
) -> None:
    """Open a notification: mark it read and show where it leads."""
    workspace = open_workspace(data_dir, user)
    target = _center(workspace).open_by_id(notification_id)
    if target is None:
        print_error(f"Notification not found: {notification_id}")
        raise typer.Exit(1)

    if target.announcement_id:
        _mark_announcements_read(workspace, [target.announcement_id])
    if target.view == ANNOUNCEMENTS_VIEW:
        print_success("Marked read. Open: announcements")
    else:
        print_success(f"Marked read. Open: project {target.project_id} ({target.tab})")


@app.command("delete")
def delete_notification(
    notification_id: str = typer.Argument(..., help="Notification id"),
    user: Optional[str] = user_option(),
    data_dir: Optional[str] = data_dir_option(),
) -> None:
    """Hide a notification from the feed."""
    _center(open_workspace(data_dir, user)).delete(notification_id)
    print_success(f"Deleted {notification_id}")


@app.command("read-all")
def read_all(
    user: Optional[str] = user_option(),
    data_dir: Optional[str] = data_dir_option(),
) -> None:
    """Mark every notification read, announcements included."""
    workspace = open_workspace(data_dir, user)
    announcement_ids = _center(workspace).mark_all_read()
    _mark_announcements_read(workspace, announcement_ids)
    print_success("All notifications marked read")


@app.command("clear")
def clear(
    reset: bool = typer.Option(False, "--reset", help="Forget all read/deleted marks instead"),
    user: Optional[str] = user_option(),
    data_dir: Optional[str] = data_dir_option(),
) -> None:
    """Delete every notification in the feed."""
    center = _center(open_workspace(data_dir, user))
    if reset:
        center.reset()
        print_success("Read and deleted marks forgotten")
    else:
        center.clear()
        print_success("Notifications cleared")
