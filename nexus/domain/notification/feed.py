"""Merge derived notifications with locally persisted read/deleted state.

Pure functions - the id sets are passed in by the caller.
"""

from collections.abc import Iterable, Set

from pydantic import BaseModel, Field

from nexus.domain.notification.models import Notification, NotificationType


class NotificationFeed(BaseModel):
    """The visible feed split into its unread and read tabs."""

    unread: list[Notification] = Field(default_factory=list)
    read: list[Notification] = Field(default_factory=list)

    @property
    def unread_count(self) -> int:
        return len(self.unread)


def is_read(notification: Notification, read_ids: Set[str]) -> bool:
    """Check the read state of a notification.

    Announcements are also read when the announcement itself records the
    user in read_by; everything else is read only through the local set.
    """
    if notification.type == NotificationType.ANNOUNCEMENT and notification.read_remotely:
        return True
    return notification.id in read_ids


def build_feed(
    notifications: Iterable[Notification],
    read_ids: Set[str],
    deleted_ids: Set[str],
) -> NotificationFeed:
    """Split notifications into tabs, dropping deleted ones.

    Generation order is kept within each tab.
    """
    feed = NotificationFeed()
    for notification in notifications:
        if notification.id in deleted_ids:
            continue
        if is_read(notification, read_ids):
            feed.read.append(notification)
        else:
            feed.unread.append(notification)
    return feed
